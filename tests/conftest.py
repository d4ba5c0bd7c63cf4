"""
Shared fixtures for state store tests.

Each test gets a temporary configuration root so the repository never
touches the real /etc/tedge.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from agent_state.persistence.repository import FileStateRepository


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Configuration root, without the .agent/ directory."""
    return tmp_path


@pytest.fixture
def state_dir(root: Path) -> Path:
    """Pre-created .agent/ directory."""
    path = root / ".agent"
    path.mkdir()
    return path


@pytest.fixture
def state_path(state_dir: Path) -> Path:
    """Path to .agent/current-operation (not created)."""
    return state_dir / "current-operation"


@pytest.fixture
def repo(root: Path) -> FileStateRepository:
    """Repository bound to the temporary root."""
    return FileStateRepository(root)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() calls made by the code under test."""
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
