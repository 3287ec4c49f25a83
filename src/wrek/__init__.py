"""Wrek: lexer, parser and tree-walking evaluator for a small scripting language."""

__version__ = "0.1.0"
