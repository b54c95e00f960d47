"""Embed builders for command replies."""

from __future__ import annotations

import logging
from typing import List, Optional

import discord

from .text import BoundaryNotFound, is_long_text, segment
from .utils import utc_now

logger = logging.getLogger("ardabot.embeds")

SUCCESS_COLOR = discord.Color.green()
ERROR_COLOR = discord.Color.red()
CONTINUED_SUFFIX = " (cont.)"


def success_embed(title: str, description: str, thumbnail: Optional[str] = None) -> discord.Embed:
    embed = discord.Embed(
        title=title,
        description=description,
        color=SUCCESS_COLOR,
        timestamp=utc_now(),
    )
    if thumbnail:
        embed.set_thumbnail(url=thumbnail)
    return embed


def _segment_message(message: str) -> List[str]:
    if "```" in message:
        try:
            return segment(message, format_aware=True)
        except BoundaryNotFound as exc:
            logger.debug("Fence split failed (%s); splitting at words instead.", exc)
    return segment(message)


def error_embeds(title: str, message: str) -> List[discord.Embed]:
    """Return one red embed per message chunk.

    Long messages are split after a closing code fence when the message
    carries fenced blocks, falling back to word boundaries when no fence
    closes past the split threshold.
    """
    chunks = [message]
    if is_long_text(message):
        chunks = _segment_message(message)
    embeds = []
    for index, chunk in enumerate(chunks):
        embeds.append(
            discord.Embed(
                title=title if index == 0 else f"{title}{CONTINUED_SUFFIX}",
                description=chunk,
                color=ERROR_COLOR,
                timestamp=utc_now(),
            )
        )
    return embeds


__all__ = ["error_embeds", "success_embed"]
