"""
State Models — Pydantic schemas for the persisted operation record.

The state file (.agent/current-operation) records the operation the agent
was running when it last wrote, so it can pick up after a restart.

Statuses are stored as bare strings with no type tag. The variant is
recovered from the text itself: software statuses first, then restart
statuses, then UnknownOperation for anything else.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator


class SoftwareOperationVariants(str, Enum):
    """Software-management operations."""

    LIST = "list"
    UPDATE = "update"


class RestartOperationStatus(str, Enum):
    """Restart phases. Capitalized on disk, unlike software variants."""

    PENDING = "Pending"
    RESTARTING = "Restarting"


class Software(BaseModel):
    """A software-management operation in progress."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    variant: SoftwareOperationVariants


class Restart(BaseModel):
    """A restart operation in progress."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: RestartOperationStatus


class UnknownOperation(BaseModel):
    """Status text that matched no known operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")


StateStatus = Union[Software, Restart, UnknownOperation]

# Written for UnknownOperation; reads back as UnknownOperation.
UNKNOWN_OPERATION_TEXT = "unknown"


def parse_status(text: str) -> StateStatus:
    """
    Decode a status string.

    Tries each variant in a fixed order and falls back to UnknownOperation
    when none matches.
    """
    try:
        return Software(variant=SoftwareOperationVariants(text))
    except ValueError:
        pass
    try:
        return Restart(status=RestartOperationStatus(text))
    except ValueError:
        pass
    return UnknownOperation()


def status_text(status: StateStatus) -> str:
    """Encode a status as its on-disk string."""
    if isinstance(status, Software):
        return status.variant.value
    if isinstance(status, Restart):
        return status.status.value
    return UNKNOWN_OPERATION_TEXT


class State(BaseModel):
    """
    The persisted operation record.

    Both fields absent means no operation is in progress.
    """

    model_config = ConfigDict(extra="forbid")

    operation_id: Optional[str] = None
    operation: Optional[StateStatus] = None

    @field_validator("operation", mode="before")
    @classmethod
    def _decode_operation(cls, value: Any) -> Any:
        if value is None or isinstance(value, (Software, Restart, UnknownOperation)):
            return value
        if isinstance(value, str):
            return parse_status(value)
        raise ValueError(f"operation must be a string, got {type(value).__name__}")

    @field_serializer("operation", when_used="unless-none")
    def _encode_operation(self, status: StateStatus) -> str:
        return status_text(status)

    @property
    def is_idle(self) -> bool:
        """True when no operation is recorded."""
        return self.operation_id is None and self.operation is None

    def with_operation(self, status: StateStatus) -> "State":
        """Copy of this record with only the operation replaced."""
        return State(operation_id=self.operation_id, operation=status)
