import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord

from ardabot.interactions import InteractionResponder


class _FakeInteractionResponse:
    def __init__(self):
        self.done = False
        self.defer = AsyncMock(side_effect=self._mark_done)
        self.send_message = AsyncMock(side_effect=self._mark_done)

    async def _mark_done(self, *args, **kwargs):
        self.done = True

    def is_done(self) -> bool:
        return self.done


def make_interaction(user_id: int = 7):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id),
        guild=SimpleNamespace(id=1),
        response=_FakeInteractionResponse(),
        edit_original_response=AsyncMock(),
        followup=SimpleNamespace(send=AsyncMock()),
    )


class InteractionResponderTests(unittest.IsolatedAsyncioTestCase):
    async def test_first_send_without_defer_is_the_response(self) -> None:
        interaction = make_interaction()
        responder = InteractionResponder(interaction)
        await responder.send("hello")
        interaction.response.send_message.assert_awaited_once_with(content="hello", embeds=[], ephemeral=False)
        self.assertTrue(responder.responded)

    async def test_deferred_send_edits_then_follows_up(self) -> None:
        interaction = make_interaction()
        responder = InteractionResponder(interaction)
        await responder.defer()
        await responder.send("first")
        await responder.send("second")
        interaction.response.defer.assert_awaited_once_with(thinking=True, ephemeral=False)
        interaction.edit_original_response.assert_awaited_once_with(content="first", embeds=[])
        interaction.followup.send.assert_awaited_once_with(content="second", embeds=[], ephemeral=False)

    async def test_defer_twice_only_defers_once(self) -> None:
        interaction = make_interaction()
        responder = InteractionResponder(interaction)
        await responder.defer()
        await responder.defer()
        interaction.response.defer.assert_awaited_once()

    async def test_send_text_segments_long_text(self) -> None:
        interaction = make_interaction()
        responder = InteractionResponder(interaction)
        await responder.defer()
        text = "Name: Uruk Host | Faction: Isengard\n" * 80
        await responder.send_text(text)
        first = interaction.edit_original_response.await_args.kwargs["content"]
        rest = [call.kwargs["content"] for call in interaction.followup.send.await_args_list]
        self.assertGreaterEqual(len(rest), 1)
        self.assertEqual(first + "".join(rest), text)

    async def test_send_embeds_batches_by_ten(self) -> None:
        interaction = make_interaction()
        responder = InteractionResponder(interaction)
        embeds = [discord.Embed(title=str(index)) for index in range(12)]
        await responder.send_embeds(embeds)
        self.assertEqual(len(interaction.response.send_message.await_args.kwargs["embeds"]), 10)
        self.assertEqual(len(interaction.followup.send.await_args.kwargs["embeds"]), 2)


if __name__ == "__main__":
    unittest.main()
