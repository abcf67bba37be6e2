"""Felles innstillinger som leses fra miljøvariabler."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .constants import ENHETSREGISTER_API_URL

__all__ = [
    "get_api_url",
    "get_log_level",
]

_LOGGER = logging.getLogger(__name__)


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def get_log_level() -> int:
    """Loggnivå fra ENHETSOPPSLAG_LOG_LEVEL, WARNING hvis ukjent eller tomt."""

    value = _env_str("ENHETSOPPSLAG_LOG_LEVEL")
    if value is None:
        return logging.WARNING
    level = logging.getLevelName(value.upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def get_api_url() -> str:
    """Basis-URL for Enhetsregisteret, kan overstyres med ENHETSOPPSLAG_API_URL."""

    value = _env_str("ENHETSOPPSLAG_API_URL")
    if value is None:
        return ENHETSREGISTER_API_URL
    if not value.lower().startswith("https://"):
        _LOGGER.warning(
            "Ignorerer ENHETSOPPSLAG_API_URL=%s, kun https er tillatt.", value
        )
        return ENHETSREGISTER_API_URL
    return value.rstrip("/")
