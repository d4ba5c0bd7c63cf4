"""
Persistence Module — Atomic storage of the current-operation record.
"""

from .repository import FileStateRepository, StateRepository
from .state_file import atomically_write_file, load_state, save_state

__all__ = [
    "StateRepository",
    "FileStateRepository",
    "atomically_write_file",
    "load_state",
    "save_state",
]
