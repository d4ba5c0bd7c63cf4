"""
Config Loader — Settings for the state store and its logging.

The repository itself takes only a root directory. The agent (or the
operator CLI) resolves that directory here, together with log settings.

## Environment Variables

- AGENT_STATE_ROOT: configuration root holding .agent/ (default: /etc/tedge)
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_FORMAT: json, text (default: text)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from ..validation import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "/etc/tedge"
LOG_FORMATS = ("text", "json")


@dataclass
class AgentStateConfig:
    """Resolved settings."""

    root: Path = field(default_factory=lambda: Path(DEFAULT_ROOT))
    log_level: str = "INFO"
    log_format: str = "text"


def load_config(env: Optional[Mapping[str, str]] = None) -> AgentStateConfig:
    """
    Build configuration from environment variables.

    Args:
        env: Mapping to read instead of os.environ (for tests)

    Raises:
        ConfigurationError: If LOG_FORMAT is not a known format
    """
    env = os.environ if env is None else env

    log_format = env.get("LOG_FORMAT", "text").lower()
    if log_format not in LOG_FORMATS:
        raise ConfigurationError(
            f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
        )

    config = AgentStateConfig(
        root=Path(env.get("AGENT_STATE_ROOT") or DEFAULT_ROOT).expanduser(),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        log_format=log_format,
    )
    logger.debug(f"Config loaded: root={config.root}")
    return config
