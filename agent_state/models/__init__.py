"""
Models Module — Operation state schema.
"""

from .state import (
    Restart,
    RestartOperationStatus,
    Software,
    SoftwareOperationVariants,
    State,
    StateStatus,
    UnknownOperation,
    parse_status,
    status_text,
)

__all__ = [
    "State",
    "StateStatus",
    "Software",
    "SoftwareOperationVariants",
    "Restart",
    "RestartOperationStatus",
    "UnknownOperation",
    "parse_status",
    "status_text",
]
