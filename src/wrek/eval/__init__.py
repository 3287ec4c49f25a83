"""Evaluator helper modules for the Wrek runtime."""

__all__ = [
    "blocks",
    "expr",
    "objects",
]
