from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo configure_logging() side effects on the root logger."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
