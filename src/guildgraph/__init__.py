"""guildgraph: client-side guild channel model with permission resolution.

Usage:
    from guildgraph import Client, Member, resolve_permissions

    client = Client(transport)
    guild = client.on_guild_create(guild_payload)
    channel = client.on_channel_create(channel_payload)

    member = Member(user_id, frozenset(role_ids))
    mask = resolve_permissions(member, channel, guild)
    if Permission.has(mask, Permission.MANAGE_WEBHOOKS):
        await channel.create_webhook(name="deploys")
"""

__version__ = "0.1.0"

# Configuration
from guildgraph.config import ChannelSettings

# Core primitives
from guildgraph.core import (
    ALL_PERMISSIONS,
    Channel,
    ChannelDecodeError,
    ChannelID,
    ChannelType,
    DecodeError,
    GuildGraphError,
    GuildID,
    MessageID,
    Overwrite,
    OverwriteDecodeError,
    OverwriteID,
    OverwriteType,
    Permission,
    RoleID,
    Snowflake,
    UnsupportedChannelKindError,
    UserID,
    WebhookID,
    compute_base_permissions,
    decode_channel,
    decode_overwrite,
    parse,
    resolve_permissions,
    serialize_overwrites,
)

# Entity graph
from guildgraph.graph import Client, ClientContext, Guild, Member, Role

# Transport
from guildgraph.transport import RequestError, Transport, Webhook

__all__ = [
    # Version
    "__version__",
    # Identity
    "Snowflake",
    "ChannelID",
    "MessageID",
    "OverwriteID",
    "GuildID",
    "UserID",
    "RoleID",
    "WebhookID",
    "parse",
    # Channel records
    "Channel",
    "ChannelType",
    "Overwrite",
    "OverwriteType",
    "decode_channel",
    "decode_overwrite",
    "serialize_overwrites",
    # Permissions
    "Permission",
    "ALL_PERMISSIONS",
    "compute_base_permissions",
    "resolve_permissions",
    # Graph
    "Client",
    "ClientContext",
    "Guild",
    "Member",
    "Role",
    # Transport
    "Transport",
    "RequestError",
    "Webhook",
    # Config
    "ChannelSettings",
    # Errors
    "GuildGraphError",
    "DecodeError",
    "ChannelDecodeError",
    "OverwriteDecodeError",
    "UnsupportedChannelKindError",
]
