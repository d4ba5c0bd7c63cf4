"""
Validation — Error taxonomy for the operation state store.

Every failure of the state layer surfaces as a subclass of StateError:

- StateIOError: a filesystem operation failed (read, write, mkdir, rename)
- StateNotFoundError: the state file does not exist yet
- MalformedStateError: the file content is not a valid state record
- StateSerializationError: a state value could not be encoded

## Usage

    from agent_state.validation import StateNotFoundError, validate_state_file

    try:
        state = validate_state_file(path)
    except StateNotFoundError:
        print("No operation recorded yet")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.state import State


class StateError(Exception):
    """Base class for state store failures."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.path = path
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class StateIOError(StateError):
    """Raised when the underlying filesystem operation fails."""


class StateNotFoundError(StateIOError):
    """Raised when the state file is absent."""


class MalformedStateError(StateError):
    """Raised when stored bytes do not form a valid state record."""


class StateSerializationError(StateError):
    """Raised when a state value cannot be encoded."""


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


def validate_state_file(path: Path) -> "State":
    """
    Validate a state file.

    Checks:
    - File exists and is readable
    - Valid TOML
    - Only known keys, with values of the expected type

    Returns:
        The parsed State

    Raises:
        StateNotFoundError: If the file is absent
        StateIOError: If the file cannot be read
        MalformedStateError: If the content is invalid
    """
    from .persistence.state_file import load_state

    return load_state(path)
