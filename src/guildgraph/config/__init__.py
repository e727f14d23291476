"""Configuration module using Pydantic Settings.

Usage:
    from guildgraph.config import ChannelSettings

    settings = ChannelSettings(skip_malformed_overwrites=False)
"""

from guildgraph.config.settings import ChannelSettings

__all__ = [
    "ChannelSettings",
]
