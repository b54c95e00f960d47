"""Utility helpers for ArdaBot."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Set

import discord

logger = logging.getLogger("ardabot.utils")


def int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%s. Falling back to %s.", name, raw, default)
        return default


def float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid float for %s=%s. Falling back to %s.", name, raw, default)
        return default


def path_from_env(name: str, default: str) -> Path:
    value = os.getenv(name, "").strip() or default
    return Path(value).expanduser()


def parse_role_ids(raw: str) -> Set[int]:
    ids: Set[int] = set()
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            ids.add(int(chunk))
        except ValueError:
            logger.warning("Ignoring invalid role id %s", chunk)
    return ids


def is_staff_member(member: Optional[discord.abc.User], staff_role_ids: AbstractSet[int]) -> bool:
    """Return True when the member holds any of the configured staff roles."""
    if not isinstance(member, discord.Member):
        return False
    roles: Iterable[discord.Role] = getattr(member, "roles", [])
    return any(role.id in staff_role_ids for role in roles)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = [
    "float_from_env",
    "int_from_env",
    "is_staff_member",
    "parse_role_ids",
    "path_from_env",
    "utc_now",
]
