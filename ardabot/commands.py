"""Slash command handlers and their registration table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Tuple, Union

import discord
from discord import app_commands

from .api import (
    ApiError,
    ArdaApiClient,
    BIND_ARMY_PATH,
    CREATE_RPCHAR_PATH,
    UNPAID_ARMIES_PATH,
    UPDATE_IGN_PATH,
    UPDATE_RPCHAR_TITLE_PATH,
)
from .config import Settings
from .embeds import error_embeds, success_embed
from .interactions import InteractionResponder
from .models import BindArmyRequest, CreateRpCharRequest, UpdateIgnRequest, UpdateRpCharTitleRequest
from .text import capitalize_first_letters, format_army_units, format_unpaid_armies
from .utils import is_staff_member

if TYPE_CHECKING:
    from bot import ArdaBot

logger = logging.getLogger("ardabot.commands")

CommandHandler = Callable[..., Awaitable[None]]
Target = Union[discord.Member, discord.User]

NO_PERMISSION_MESSAGE = "You don't have permission to use this command."
EMBED_FIELD_LIMIT = 1024


async def _ensure_staff(responder: InteractionResponder, settings: Settings) -> bool:
    if is_staff_member(responder.user, settings.staff_role_ids):
        return True
    logger.info("Rejected staff command from %s", getattr(responder.user, "id", None))
    await responder.send(NO_PERMISSION_MESSAGE)
    return False


#
# Handlers
#
async def create_rpchar(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    target_player: Target,
    name: str,
    title: str,
    gear: str,
    pvp: bool,
) -> None:
    if not await _ensure_staff(responder, settings):
        return
    # Name and title keep their casing so players can style their characters.
    name = capitalize_first_letters(name)
    title = capitalize_first_letters(title)
    request = CreateRpCharRequest(
        discord_id=str(target_player.id),
        rp_char_name=name,
        title=title,
        gear=capitalize_first_letters(gear.lower()),
        pvp=pvp,
    )
    try:
        await api.post(CREATE_RPCHAR_PATH, request.to_payload())
    except ApiError as exc:
        await responder.send_embeds(error_embeds("Error while creating Roleplay Character", exc.message))
        return
    await responder.send(
        embeds=[
            success_embed(
                "Create RpChar",
                f"The Roleplay Character {name} - {title} has been created!",
                settings.thumbnail("CREATE"),
            )
        ]
    )


async def bind_army(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    target: Target,
    army_name: str,
) -> None:
    request = BindArmyRequest(
        executor_discord_id=str(responder.user.id),
        target_discord_id=str(target.id),
        army_name=army_name,
    )
    try:
        army = await api.patch(BIND_ARMY_PATH, request.to_payload())
    except ApiError as exc:
        await responder.send_embeds(error_embeds("Error when trying to bind", exc.message))
        return
    army = army if isinstance(army, dict) else {}
    bound_name = army.get("name") or army_name
    embed = success_embed(
        "Bind Character to Army",
        f'Bound player "{target.mention}" to army "{bound_name}"',
        settings.thumbnail("BIND"),
    )
    units = format_army_units(army)
    if units and len(units) <= EMBED_FIELD_LIMIT:
        embed.add_field(name="Units", value=units, inline=False)
    elif units:
        logger.debug("Skipping unit list for %s (%s chars)", bound_name, len(units))
    await responder.send(embeds=[embed])


async def _move(
    responder: InteractionResponder,
    name: str,
    food_type: str,
    start_region: int,
    destination_region: int,
) -> None:
    name = capitalize_first_letters(name.lower())
    food = capitalize_first_letters(food_type.lower())
    await responder.send_text(f"{name} moved from {start_region} to {destination_region}, using {food} for payment.")


async def move_army(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    army_name: str,
    food_type: str,
    start_region: int,
    destination_region: int,
) -> None:
    await _move(responder, army_name, food_type, start_region, destination_region)


async def move_armed_company(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    armed_company_name: str,
    food_type: str,
    start_region: int,
    destination_region: int,
) -> None:
    await _move(responder, armed_company_name, food_type, start_region, destination_region)


async def settle_army(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    army_name: str,
    claimbuild_name: str,
) -> None:
    name = capitalize_first_letters(army_name.lower())
    claimbuild = capitalize_first_letters(claimbuild_name.lower())
    await responder.send_text(f"{name} has now settled in {claimbuild}.")


async def update_ign(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    ign: str,
) -> None:
    request = UpdateIgnRequest(discord_id=str(responder.user.id), ign=ign)
    try:
        await api.patch(UPDATE_IGN_PATH, request.to_payload())
    except ApiError as exc:
        await responder.send_embeds(error_embeds("Error while updating ign", exc.message))
        return
    await responder.send(
        embeds=[
            success_embed(
                "Update IGN",
                f"You successfully updated your ign to {ign}.",
                settings.thumbnail("UPDATE_IGN"),
            )
        ]
    )


async def update_rpchar_title(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
    *,
    new_title: str,
) -> None:
    title = capitalize_first_letters(new_title)
    request = UpdateRpCharTitleRequest(discord_id=str(responder.user.id), title=title)
    try:
        await api.patch(UPDATE_RPCHAR_TITLE_PATH, request.to_payload())
    except ApiError as exc:
        await responder.send_embeds(error_embeds("Error while updating roleplay character title", exc.message))
        return
    await responder.send(
        embeds=[
            success_embed(
                "Update RpChar Title",
                f"The title of your Roleplay Character has been updated to {title}!",
                settings.thumbnail("UPDATE"),
            )
        ]
    )


async def unpaid_armies(
    responder: InteractionResponder,
    api: ArdaApiClient,
    settings: Settings,
) -> None:
    if not await _ensure_staff(responder, settings):
        return
    try:
        armies = await api.get(UNPAID_ARMIES_PATH)
    except ApiError as exc:
        await responder.send_embeds(error_embeds("Error while fetching unpaid armies", exc.message))
        return
    if not isinstance(armies, list):
        logger.warning("Unexpected unpaid armies payload from %s: %r", UNPAID_ARMIES_PATH, armies)
        await responder.send_embeds(
            error_embeds("Error while fetching unpaid armies", "The game server returned an unexpected response.")
        )
        return
    await responder.send_text(format_unpaid_armies(armies))


COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "create rpchar": create_rpchar,
    "bind army": bind_army,
    "move army": move_army,
    "move armed-company": move_armed_company,
    "settle army": settle_army,
    "update ign": update_ign,
    "update rpchar-title": update_rpchar_title,
    "unpaid armies": unpaid_armies,
}


async def dispatch(interaction: discord.Interaction, command_name: str, **options) -> None:
    """Look up ``command_name`` and run it against the bot's API client."""
    handler = COMMAND_HANDLERS[command_name]
    bot: "ArdaBot" = interaction.client  # type: ignore[assignment]
    responder = InteractionResponder(interaction)
    logger.info(
        "/%s from %s in guild %s",
        command_name,
        getattr(interaction.user, "id", None),
        getattr(interaction.guild, "id", None),
    )
    await responder.defer()
    await handler(responder, bot.api, bot.settings, **options)


#
# Slash command groups
#
create_group = app_commands.Group(name="create", description="Staff: create game entities.", guild_only=True)
bind_group = app_commands.Group(name="bind", description="Bind players to game entities.", guild_only=True)
move_group = app_commands.Group(name="move", description="Move armies and armed companies.", guild_only=True)
settle_group = app_commands.Group(name="settle", description="Settle armies in claimbuilds.", guild_only=True)
update_group = app_commands.Group(name="update", description="Update your player data.", guild_only=True)
unpaid_group = app_commands.Group(name="unpaid", description="Staff: list unpaid entities.", guild_only=True)


@create_group.command(name="rpchar", description="Create a roleplay character for a player (staff only).")
@app_commands.rename(target_player="target-player")
@app_commands.describe(
    target_player="Player who owns the character.",
    name="Name of the roleplay character.",
    title="Title of the roleplay character.",
    gear="Gear the character carries.",
    pvp="Whether the character takes part in PvP.",
)
async def slash_create_rpchar(
    interaction: discord.Interaction,
    target_player: discord.Member,
    name: str,
    title: str,
    gear: str,
    pvp: bool,
) -> None:
    await dispatch(interaction, "create rpchar", target_player=target_player, name=name, title=title, gear=gear, pvp=pvp)


@bind_group.command(name="army", description="Bind a player to an army.")
@app_commands.rename(army_name="army-name")
@app_commands.describe(target="Player to bind.", army_name="Name of the army.")
async def slash_bind_army(interaction: discord.Interaction, target: discord.Member, army_name: str) -> None:
    await dispatch(interaction, "bind army", target=target, army_name=army_name)


@move_group.command(name="army", description="Move an army between regions.")
@app_commands.rename(
    army_name="army-name",
    food_type="food-type",
    start_region="start-region",
    destination_region="destination-region",
)
@app_commands.describe(
    army_name="Name of the army.",
    food_type="Food used to pay for the movement.",
    start_region="Region the army starts in.",
    destination_region="Region the army moves to.",
)
async def slash_move_army(
    interaction: discord.Interaction,
    army_name: str,
    food_type: str,
    start_region: int,
    destination_region: int,
) -> None:
    await dispatch(
        interaction,
        "move army",
        army_name=army_name,
        food_type=food_type,
        start_region=start_region,
        destination_region=destination_region,
    )


@move_group.command(name="armed-company", description="Move an armed company between regions.")
@app_commands.rename(
    armed_company_name="armed-company-name",
    food_type="food-type",
    start_region="start-region",
    destination_region="destination-region",
)
@app_commands.describe(
    armed_company_name="Name of the armed company.",
    food_type="Food used to pay for the movement.",
    start_region="Region the company starts in.",
    destination_region="Region the company moves to.",
)
async def slash_move_armed_company(
    interaction: discord.Interaction,
    armed_company_name: str,
    food_type: str,
    start_region: int,
    destination_region: int,
) -> None:
    await dispatch(
        interaction,
        "move armed-company",
        armed_company_name=armed_company_name,
        food_type=food_type,
        start_region=start_region,
        destination_region=destination_region,
    )


@settle_group.command(name="army", description="Settle an army in a claimbuild.")
@app_commands.rename(army_name="army-name", claimbuild_name="claimbuild-name")
@app_commands.describe(army_name="Name of the army.", claimbuild_name="Claimbuild to settle in.")
async def slash_settle_army(interaction: discord.Interaction, army_name: str, claimbuild_name: str) -> None:
    await dispatch(interaction, "settle army", army_name=army_name, claimbuild_name=claimbuild_name)


@update_group.command(name="ign", description="Update your Minecraft in-game name.")
@app_commands.describe(ign="Your new in-game name.")
async def slash_update_ign(interaction: discord.Interaction, ign: str) -> None:
    await dispatch(interaction, "update ign", ign=ign)


@update_group.command(name="rpchar-title", description="Update the title of your roleplay character.")
@app_commands.rename(new_title="new-title")
@app_commands.describe(new_title="The new title.")
async def slash_update_rpchar_title(interaction: discord.Interaction, new_title: str) -> None:
    await dispatch(interaction, "update rpchar-title", new_title=new_title)


@unpaid_group.command(name="armies", description="List the oldest unpaid armies (staff only).")
async def slash_unpaid_armies(interaction: discord.Interaction) -> None:
    await dispatch(interaction, "unpaid armies")


COMMAND_GROUPS: Tuple[app_commands.Group, ...] = (
    create_group,
    bind_group,
    move_group,
    settle_group,
    update_group,
    unpaid_group,
)


__all__ = ["COMMAND_GROUPS", "COMMAND_HANDLERS", "CommandHandler", "dispatch"]
