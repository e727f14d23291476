"""Entity identity functionality: typed snowflake IDs, one kind per entity."""

from guildgraph.core.identity.models import (
    MAX_SNOWFLAKE,
    ChannelID,
    GuildID,
    MessageID,
    OverwriteID,
    RoleID,
    Snowflake,
    UserID,
    WebhookID,
    parse,
)

__all__ = [
    "MAX_SNOWFLAKE",
    "Snowflake",
    "ChannelID",
    "MessageID",
    "OverwriteID",
    "GuildID",
    "UserID",
    "RoleID",
    "WebhookID",
    "parse",
]
