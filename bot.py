import logging
import os
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands
from dotenv import load_dotenv

load_dotenv()

from ardabot.api import ArdaApiClient  # noqa: E402
from ardabot.commands import COMMAND_GROUPS  # noqa: E402
from ardabot.config import Settings, load_settings  # noqa: E402

logging.basicConfig(
    level=os.getenv("ARDABOT_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("ardabot")

GENERIC_ERROR_MESSAGE = "Something went wrong while running this command."


class ArdaBot(commands.Bot):
    def __init__(self, settings: Settings, *, intents: discord.Intents):
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)
        self.settings = settings
        self.api = ArdaApiClient(settings.api_base_url, timeout=settings.api_timeout)
        self.tree.error(self.on_app_command_error)

    async def setup_hook(self) -> None:
        await self.api.start()
        for group in COMMAND_GROUPS:
            self.tree.add_command(group)
        await self._sync_application_commands()

    async def _sync_application_commands(self) -> None:
        try:
            synced = await self.tree.sync()
            logger.info("Synced %s global application commands", len(synced))
        except discord.HTTPException as exc:
            logger.warning("Failed to sync application commands: %s", exc)
        guild_id = self.settings.guild_id
        if guild_id <= 0:
            return
        guild = discord.Object(id=guild_id)
        self.tree.copy_global_to(guild=guild)
        try:
            await self.tree.sync(guild=guild)
            logger.info("Synced application commands for guild %s", guild_id)
        except discord.HTTPException as exc:
            logger.warning("Failed to sync application commands for guild %s: %s", guild_id, exc)

    async def close(self) -> None:
        await self.api.close()
        await super().close()

    async def on_ready(self) -> None:
        logger.info("Logged in as %s (%s)", self.user, getattr(self.user, "id", None))

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        command: Optional[app_commands.Command] = interaction.command
        command_name = getattr(command, "qualified_name", "unknown")
        original = getattr(error, "original", error)
        logger.error("Command /%s failed", command_name, exc_info=original)
        try:
            if interaction.response.is_done():
                await interaction.followup.send(GENERIC_ERROR_MESSAGE, ephemeral=True)
            else:
                await interaction.response.send_message(GENERIC_ERROR_MESSAGE, ephemeral=True)
        except discord.HTTPException as exc:
            logger.warning("Unable to report failure of /%s: %s", command_name, exc)


def main():
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    intents = discord.Intents.default()
    bot = ArdaBot(settings, intents=intents)
    bot.run(settings.discord_token, log_handler=None)


if __name__ == "__main__":
    main()
