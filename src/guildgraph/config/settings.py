"""Configuration settings using Pydantic Settings.

Usage:
    from guildgraph.config import ChannelSettings

    # Load from environment variables (GUILDGRAPH_CHANNEL_*)
    settings = ChannelSettings()

    # Or override with explicit values
    settings = ChannelSettings(strict_channel_kind=True)
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for guildgraph. Install with: pip install guildgraph"
    ) from e


class ChannelSettings(BaseSettings):  # type: ignore[misc]
    """Policy knobs for channel decoding and delegated commands.

    Attributes:
        infer_nsfw_from_name: Derive is_nsfw from the channel name when the
            payload has no explicit nsfw flag.
        skip_malformed_overwrites: Drop malformed overwrite entries instead of
            failing the whole channel decode.
        strict_channel_kind: Raise UnsupportedChannelKindError for commands
            that do not apply to the channel kind, instead of returning
            without dispatching.

    Environment Variables:
        GUILDGRAPH_CHANNEL_INFER_NSFW_FROM_NAME
        GUILDGRAPH_CHANNEL_SKIP_MALFORMED_OVERWRITES
        GUILDGRAPH_CHANNEL_STRICT_CHANNEL_KIND
    """

    model_config = SettingsConfigDict(
        env_prefix="GUILDGRAPH_CHANNEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    infer_nsfw_from_name: bool = True
    skip_malformed_overwrites: bool = True
    strict_channel_kind: bool = False
