from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from wrek.runtime import Environment, create_global_env  # noqa: E402


@pytest.fixture
def global_env() -> Environment:
    """Fresh root environment with the builtin constants and natives."""
    return create_global_env()


@pytest.fixture(autouse=True)
def _no_debug_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WREK_DEBUG_PY_TRACE", raising=False)
