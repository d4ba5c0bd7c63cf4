"""
State File Persistence — TOML state backend.

The record is a flat TOML document:

    operation_id = '1234'
    operation = 'list'

Writes go to a sibling temp file which is then renamed over the target, so
a reader sees either the previous record or the new one, never a mix.
"""

from __future__ import annotations

import logging
import os
import re
import tomllib
from pathlib import Path
from typing import Optional

import tomli_w
from pydantic import ValidationError

from ..models.state import State
from ..validation import (
    MalformedStateError,
    StateIOError,
    StateNotFoundError,
    StateSerializationError,
)

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"

# Text that fits in a TOML literal string: no quote, no control characters.
_LITERAL_SAFE = re.compile(r"[^'\x00-\x08\x0a-\x1f\x7f]*")


def _format_line(key: str, value: str) -> str:
    if _LITERAL_SAFE.fullmatch(value):
        return f"{key} = '{value}'\n"
    return tomli_w.dumps({key: value})


def encode_state(state: State) -> bytes:
    """
    Serialize a state record to TOML.

    Absent fields are omitted, so the idle record encodes to no bytes at all.

    Raises:
        StateSerializationError: If the record cannot be encoded
    """
    try:
        data = state.model_dump(exclude_none=True)
        text = "".join(_format_line(key, value) for key, value in data.items())
        return text.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise StateSerializationError(
            "Cannot encode state",
            details={"error": str(e)},
        ) from e


def decode_state(data: bytes, path: Optional[Path] = None) -> State:
    """
    Parse TOML bytes into a state record.

    Raises:
        MalformedStateError: If the bytes are not valid TOML or break the schema
    """
    try:
        text = data.decode("utf-8")
        return State.model_validate(tomllib.loads(text))
    except UnicodeDecodeError as e:
        raise MalformedStateError("State file is not valid UTF-8", path, {"error": str(e)}) from e
    except tomllib.TOMLDecodeError as e:
        raise MalformedStateError("Invalid TOML in state file", path, {"error": str(e)}) from e
    except ValidationError as e:
        raise MalformedStateError(
            "State file does not match the schema",
            path,
            {"error": str(e), "errors": e.errors(include_url=False)},
        ) from e


def _fsync_directory(directory: Path) -> None:
    # Directories cannot be opened for fsync on Windows.
    if os.name != "posix":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def atomically_write_file(temp_path: Path, dest_path: Path, content: bytes) -> None:
    """
    Replace dest_path with content without exposing a partial write.

    The temp file must live in the same directory as dest_path. A stale temp
    file from an earlier crash is truncated and reused. On failure the temp
    file may be left behind.
    """
    with temp_path.open("wb") as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())

    os.replace(temp_path, dest_path)
    _fsync_directory(dest_path.parent)


def load_state(path: Path) -> State:
    """
    Load state from a TOML file.

    Args:
        path: Path to the state file

    Returns:
        Parsed State object

    Raises:
        StateNotFoundError: If the state file doesn't exist
        StateIOError: If the state file cannot be read
        MalformedStateError: If the state file is invalid
    """
    logger.debug(f"Loading state from {path}")
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise StateNotFoundError("State file does not exist", path) from e
    except OSError as e:
        raise StateIOError(f"Cannot read state file: {e.strerror}", path) from e

    state = decode_state(data, path)
    logger.debug(f"State loaded: operation_id={state.operation_id}, operation={state.operation!r}")
    return state


def save_state(state: State, path: Path, temp_path: Optional[Path] = None) -> None:
    """
    Save state to a TOML file.

    Creates the containing directory if needed (its parent must exist), then
    writes through a temp file and renames it into place.

    Args:
        state: State object to save
        path: Path to write the state file
        temp_path: Sibling temp file, defaults to path with a .tmp suffix
    """
    content = encode_state(state)
    temp_path = temp_path or path.with_suffix(TEMP_SUFFIX)

    try:
        path.parent.mkdir(exist_ok=True)
    except OSError as e:
        raise StateIOError(f"Cannot create state directory: {e.strerror}", path.parent) from e

    try:
        atomically_write_file(temp_path, path, content)
    except OSError as e:
        raise StateIOError(f"Cannot write state file: {e.strerror}", path) from e

    logger.info(
        f"State saved: operation_id={state.operation_id} → {path.name}",
        extra={"operation_id": state.operation_id, "state_path": str(path)},
    )
