"""ArdaBot package providing the Discord front end for the Arda's Legends game server."""

from . import api, commands, config, embeds, interactions, models, text, utils  # noqa: F401

__all__ = ["api", "commands", "config", "embeds", "interactions", "models", "text", "utils"]
