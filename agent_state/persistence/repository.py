"""
State Repository — Async access to the agent's current-operation record.

## Layout

    <root>/.agent/                       repository root
    <root>/.agent/current-operation      state file
    <root>/.agent/current-operation.tmp  temp file used while writing

## Usage

    repo = FileStateRepository(Path("/etc/tedge"))

    try:
        state = await repo.load()
    except StateNotFoundError:
        state = await repo.clear()

    await repo.store(State(operation_id="1234", operation=parse_status("list")))
    await repo.update(parse_status("Restarting"))

There is no locking. Callers must serialize writes; concurrent update()
calls can lose each other's changes.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ..models.state import State, StateStatus, status_text
from .state_file import TEMP_SUFFIX, load_state, save_state

logger = logging.getLogger(__name__)

STATE_DIR_NAME = ".agent"
STATE_FILE_NAME = "current-operation"


class StateRepository(ABC):
    """
    Storage for a single operation record.

    Implementations raise StateError subclasses on failure.
    """

    @abstractmethod
    async def load(self) -> State:
        """Read and validate the stored record."""

    @abstractmethod
    async def store(self, state: State) -> None:
        """Durably replace the stored record."""

    async def clear(self) -> State:
        """Reset to no operation in progress and return the stored value."""
        state = State()
        await self.store(state)
        return state

    async def update(self, status: StateStatus) -> None:
        """
        Replace only the operation status, keeping operation_id.

        Load and store are separate steps; this is not atomic as a whole.
        """
        state = await self.load()
        await self.store(state.with_operation(status))


class FileStateRepository(StateRepository):
    """
    File-backed repository using atomic temp-file-and-rename writes.

    Construction does no I/O. Every load re-reads the file.
    """

    def __init__(self, root: Union[str, Path]):
        self.state_repo_root = Path(root) / STATE_DIR_NAME
        self.state_repo_path = self.state_repo_root / STATE_FILE_NAME
        self.temp_path = self.state_repo_path.with_suffix(TEMP_SUFFIX)

    def __repr__(self) -> str:
        return f"FileStateRepository({str(self.state_repo_path)!r})"

    async def load(self) -> State:
        return await asyncio.to_thread(load_state, self.state_repo_path)

    async def store(self, state: State) -> None:
        await asyncio.to_thread(save_state, state, self.state_repo_path, self.temp_path)

    async def clear(self) -> State:
        logger.info(
            "Clearing operation state",
            extra={"state_path": str(self.state_repo_path)},
        )
        return await super().clear()

    async def update(self, status: StateStatus) -> None:
        logger.debug(
            f"Updating operation status to {status_text(status)}",
            extra={"state_path": str(self.state_repo_path)},
        )
        await super().update(status)
