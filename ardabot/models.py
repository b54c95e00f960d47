"""Dataclasses for requests sent to the game-state API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

Payload = Dict[str, object]


@dataclass(frozen=True)
class CreateRpCharRequest:
    discord_id: str
    rp_char_name: str
    title: str
    gear: str
    pvp: bool

    def to_payload(self) -> Payload:
        return {
            "discordId": self.discord_id,
            "rpCharName": self.rp_char_name,
            "title": self.title,
            "gear": self.gear,
            "pvp": self.pvp,
        }


@dataclass(frozen=True)
class BindArmyRequest:
    executor_discord_id: str
    target_discord_id: str
    army_name: str

    def to_payload(self) -> Payload:
        return {
            "executorDiscordId": self.executor_discord_id,
            "targetDiscordId": self.target_discord_id,
            "armyName": self.army_name,
        }


@dataclass(frozen=True)
class UpdateIgnRequest:
    discord_id: str
    ign: str

    def to_payload(self) -> Payload:
        return {"discordId": self.discord_id, "ign": self.ign}


@dataclass(frozen=True)
class UpdateRpCharTitleRequest:
    discord_id: str
    title: str

    def to_payload(self) -> Payload:
        return {"discordId": self.discord_id, "title": self.title}


__all__ = [
    "BindArmyRequest",
    "CreateRpCharRequest",
    "Payload",
    "UpdateIgnRequest",
    "UpdateRpCharTitleRequest",
]
