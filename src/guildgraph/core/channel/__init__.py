"""Channel records: Channel and Overwrite snapshots plus payload decoding."""

from guildgraph.core.channel.decode import (
    decode_channel,
    decode_overwrite,
    decode_overwrites,
    infer_nsfw,
    serialize_overwrites,
)
from guildgraph.core.channel.models import Channel, ChannelType, Overwrite, OverwriteType

__all__ = [
    "Channel",
    "ChannelType",
    "Overwrite",
    "OverwriteType",
    "decode_channel",
    "decode_overwrite",
    "decode_overwrites",
    "infer_nsfw",
    "serialize_overwrites",
]
