"""Runtime settings loaded from the environment and the thumbnails file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Mapping

from .utils import float_from_env, int_from_env, parse_role_ids, path_from_env

logger = logging.getLogger("ardabot.config")

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_THUMBNAILS_FILE = "configs/embed_thumbnails.json"
THUMBNAIL_KEYS = ("BIND", "CREATE", "UPDATE", "UPDATE_IGN")


@dataclass(frozen=True)
class Settings:
    discord_token: str
    api_host: str = "localhost"
    api_port: int = 8080
    api_timeout: float = 10.0
    staff_role_ids: FrozenSet[int] = frozenset()
    guild_id: int = 0
    log_level: str = "INFO"
    thumbnails: Mapping[str, str] = field(default_factory=dict)

    @property
    def api_base_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"

    def thumbnail(self, key: str) -> str:
        return self.thumbnails.get(key, "")


def _resolve_project_path(path: Path) -> Path:
    if not path.is_absolute():
        return (BASE_DIR / path).resolve()
    return path.resolve()


def load_thumbnails(path: Path) -> Dict[str, str]:
    if not path.exists():
        logger.warning("Thumbnail file %s not found; embeds will have no thumbnails.", path)
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to parse thumbnail file %s: %s", path, exc)
        return {}
    if not isinstance(payload, dict):
        logger.warning("Thumbnail file %s must contain a JSON object.", path)
        return {}
    thumbnails: Dict[str, str] = {}
    for key, value in payload.items():
        if isinstance(value, str) and value.strip():
            thumbnails[str(key)] = value.strip()
    missing = [key for key in THUMBNAIL_KEYS if key not in thumbnails]
    if missing:
        logger.debug("Thumbnail file %s has no entry for %s", path, ", ".join(missing))
    return thumbnails


def load_settings() -> Settings:
    """Build settings from ``os.environ``; call after ``load_dotenv()``."""
    token = os.getenv("DISCORD_TOKEN", "").strip()
    if not token:
        raise RuntimeError("Missing DISCORD_TOKEN. Set it in your environment or .env file.")
    return Settings(
        discord_token=token,
        api_host=os.getenv("ARDABOT_API_HOST", "localhost").strip() or "localhost",
        api_port=int_from_env("ARDABOT_API_PORT", 8080),
        api_timeout=max(1.0, float_from_env("ARDABOT_API_TIMEOUT", 10.0)),
        staff_role_ids=frozenset(parse_role_ids(os.getenv("ARDABOT_STAFF_ROLE_IDS", ""))),
        guild_id=int_from_env("ARDABOT_GUILD_ID", 0),
        log_level=os.getenv("ARDABOT_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        thumbnails=load_thumbnails(
            _resolve_project_path(path_from_env("ARDABOT_THUMBNAILS_FILE", DEFAULT_THUMBNAILS_FILE))
        ),
    )


__all__ = ["Settings", "load_settings", "load_thumbnails"]
