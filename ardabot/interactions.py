"""Reply helpers for slash command interactions."""

from __future__ import annotations

from typing import Sequence

import discord

from .text import segment

MAX_EMBEDS_PER_MESSAGE = 10


class InteractionResponder:
    """Sends one or more messages in answer to a slash interaction.

    The first message becomes the interaction response (or replaces the
    "thinking" placeholder when the interaction was deferred); anything after
    that goes out as a followup.
    """

    def __init__(self, interaction: discord.Interaction, *, ephemeral: bool = False):
        self.interaction = interaction
        self.ephemeral = ephemeral
        self._deferred = False
        self._responded = False

    @property
    def user(self):
        return self.interaction.user

    @property
    def responded(self) -> bool:
        return self._responded

    async def defer(self) -> None:
        if self.interaction.response.is_done():
            return
        await self.interaction.response.defer(thinking=True, ephemeral=self.ephemeral)
        self._deferred = True

    async def send(self, content=None, *, embeds: Sequence[discord.Embed] = ()) -> None:
        embeds = list(embeds)
        if not self._responded and self._deferred:
            await self.interaction.edit_original_response(content=content, embeds=embeds)
        elif not self._responded and not self.interaction.response.is_done():
            await self.interaction.response.send_message(content=content, embeds=embeds, ephemeral=self.ephemeral)
        else:
            await self.interaction.followup.send(content=content, embeds=embeds, ephemeral=self.ephemeral)
        self._responded = True

    async def send_text(self, text: str, *, format_aware: bool = False) -> None:
        for chunk in segment(text, format_aware):
            await self.send(chunk)

    async def send_embeds(self, embeds: Sequence[discord.Embed]) -> None:
        for start in range(0, len(embeds), MAX_EMBEDS_PER_MESSAGE):
            await self.send(embeds=embeds[start:start + MAX_EMBEDS_PER_MESSAGE])

    def __repr__(self) -> str:
        guild = getattr(self.interaction, "guild", None)
        return f"<InteractionResponder guild={getattr(guild, 'id', None)} user={getattr(self.user, 'id', None)}>"


__all__ = ["InteractionResponder", "MAX_EMBEDS_PER_MESSAGE"]
