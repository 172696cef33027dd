"""Pytest configuration ensuring local packages are importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from action_engine.config import EngineConfig  # noqa: E402


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()
