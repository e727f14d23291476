"""Decoding of channel and overwrite payloads.

Required fields (id, type) fail loudly with ChannelDecodeError; optional fields
fall back to None when missing or of the wrong wire type.

Usage:
    channel = decode_channel(payload, client)
    wire = serialize_overwrites(channel)
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from guildgraph.config import ChannelSettings
from guildgraph.core.channel.models import Channel, ChannelType, Overwrite, OverwriteType
from guildgraph.core.errors import ChannelDecodeError, OverwriteDecodeError
from guildgraph.core.identity import ChannelID, GuildID, MessageID, OverwriteID

if TYPE_CHECKING:
    from guildgraph.graph.protocol import ClientContext

logger = logging.getLogger(__name__)

NSFW_NAME = "nsfw"
NSFW_PREFIX = "nsfw-"

_OVERWRITE_TYPES_BY_INT = {0: OverwriteType.ROLE, 1: OverwriteType.MEMBER}


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid integer field on the wire
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_int(payload: Mapping[str, Any], key: str) -> int | None:
    value = payload.get(key)
    return value if _is_int(value) else None


def _optional_str(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def _optional_bool(payload: Mapping[str, Any], key: str) -> bool | None:
    value = payload.get(key)
    return value if isinstance(value, bool) else None


def _optional_timestamp(payload: Mapping[str, Any], key: str) -> datetime | None:
    value = payload.get(key)
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Ignoring unparseable %s %r", key, value)
        return None


def _bitmask(value: Any, key: str) -> int:
    if _is_int(value) and value >= 0:
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise OverwriteDecodeError(f"Overwrite {key} must be a non-negative integer, got {value!r}", key)


def infer_nsfw(name: str | None) -> bool:
    """Name-based NSFW heuristic for payloads without an explicit flag."""
    if name is None:
        return False
    return name == NSFW_NAME or name.startswith(NSFW_PREFIX)


def decode_overwrite(payload: Any) -> Overwrite:
    """Decode a single permission overwrite entry.

    Args:
        payload: Mapping with id, type, allow and deny keys.

    Returns:
        Decoded Overwrite.

    Raises:
        OverwriteDecodeError: If any of the four fields is missing or malformed.
    """
    if not isinstance(payload, Mapping):
        raise OverwriteDecodeError(f"Overwrite must be an object, got {type(payload).__name__}")

    overwrite_id = OverwriteID.parse(payload.get("id"))
    if overwrite_id is None:
        raise OverwriteDecodeError(f"Invalid overwrite id {payload.get('id')!r}", "id")

    raw_type = payload.get("type")
    if _is_int(raw_type):
        overwrite_type = _OVERWRITE_TYPES_BY_INT.get(raw_type)
    else:
        try:
            overwrite_type = OverwriteType(raw_type)
        except ValueError:
            overwrite_type = None
    if overwrite_type is None:
        raise OverwriteDecodeError(f"Invalid overwrite type {raw_type!r}", "type")

    return Overwrite(
        id=overwrite_id,
        type=overwrite_type,
        allow=_bitmask(payload.get("allow"), "allow"),
        deny=_bitmask(payload.get("deny"), "deny"),
    )


def decode_overwrites(raw: Any, *, skip_malformed: bool = True) -> dict[OverwriteID, Overwrite]:
    """Decode a permission_overwrites array into a mapping keyed by target id.

    Args:
        raw: The payload's permission_overwrites value. Non-lists yield no overwrites.
        skip_malformed: Drop malformed entries instead of failing.

    Raises:
        OverwriteDecodeError: Malformed entry and skip_malformed is False.
    """
    if not isinstance(raw, list):
        return {}

    overwrites: dict[OverwriteID, Overwrite] = {}
    for index, entry in enumerate(raw):
        try:
            overwrite = decode_overwrite(entry)
        except OverwriteDecodeError as e:
            if not skip_malformed:
                raise
            logger.warning("Skipping malformed permission overwrite #%d: %s", index, e)
            continue
        overwrites[overwrite.id] = overwrite
    return overwrites


def decode_channel(
    payload: Any,
    context: ClientContext | None = None,
    *,
    settings: ChannelSettings | None = None,
) -> Channel:
    """Decode a guild channel payload into a Channel snapshot.

    Args:
        payload: Channel object as received from the gateway or REST API.
        context: Client context used to resolve the guild back-reference.
        settings: Decode policy. Defaults to the context's settings.

    Returns:
        Fully initialized Channel.

    Raises:
        ChannelDecodeError: id or type missing or malformed, or a malformed
            overwrite when skip_malformed_overwrites is off.
    """
    if settings is None:
        settings = context.settings if context is not None else ChannelSettings()

    if not isinstance(payload, Mapping):
        raise ChannelDecodeError(f"Channel payload must be an object, got {type(payload).__name__}")

    channel_id = ChannelID.parse(payload.get("id"))
    if channel_id is None:
        raise ChannelDecodeError(f"Invalid channel id {payload.get('id')!r}", "id")

    raw_type = payload.get("type")
    if not _is_int(raw_type):
        raise ChannelDecodeError(f"Invalid channel type {raw_type!r}", "type")
    try:
        channel_type = ChannelType(raw_type)
    except ValueError:
        raise ChannelDecodeError(f"Unknown channel type {raw_type!r}", "type") from None

    try:
        overwrites = decode_overwrites(
            payload.get("permission_overwrites"),
            skip_malformed=settings.skip_malformed_overwrites,
        )
    except OverwriteDecodeError as e:
        raise ChannelDecodeError(
            f"Channel {channel_id}: {e}", "permission_overwrites"
        ) from e

    name = _optional_str(payload, "name")
    is_nsfw = _optional_bool(payload, "nsfw")
    if is_nsfw is None:
        is_nsfw = infer_nsfw(name) if settings.infer_nsfw_from_name else False

    guild_id = GuildID.parse(payload.get("guild_id"))
    linked_guild_id = None
    context_ref = None
    if context is not None:
        context_ref = weakref.ref(context)
        if guild_id is not None and guild_id in context.guilds:
            linked_guild_id = guild_id
        elif guild_id is not None:
            logger.debug("Channel %s references unknown guild %s", channel_id, guild_id)

    return Channel(
        id=channel_id,
        type=channel_type,
        guild_id=guild_id,
        name=name,
        topic=_optional_str(payload, "topic"),
        bitrate=_optional_int(payload, "bitrate"),
        user_limit=_optional_int(payload, "user_limit"),
        position=_optional_int(payload, "position"),
        is_nsfw=is_nsfw,
        is_private=_optional_bool(payload, "is_private"),
        last_message_id=MessageID.parse(payload.get("last_message_id")),
        last_pin_timestamp=_optional_timestamp(payload, "last_pin_timestamp"),
        overwrites=overwrites,
        linked_guild_id=linked_guild_id,
        context_ref=context_ref,
    )


def serialize_overwrites(channel: Channel) -> list[dict[str, Any]]:
    """Serialize a channel's overwrites to wire shape, ordered by target id."""
    return [
        channel.overwrites[key].to_dict()
        for key in sorted(channel.overwrites, key=lambda k: k.value)
    ]
