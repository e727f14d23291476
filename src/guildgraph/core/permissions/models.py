"""Permission bit flags.

Bitmasks are plain ints on the wire and in Overwrite records; Permission is a
named view over the same bits.

Usage:
    if Permission.has(mask, Permission.SEND_MESSAGES):
        ...
"""

from __future__ import annotations

from enum import IntFlag


class Permission(IntFlag):
    """32-bit guild permission flags."""

    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VAD = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_EMOJIS = 1 << 30
    USE_APPLICATION_COMMANDS = 1 << 31

    @staticmethod
    def has(mask: int, flag: Permission) -> bool:
        """Check that every bit of flag is set in mask."""
        return mask & flag == flag


ALL_PERMISSIONS = 0xFFFFFFFF
"""Every permission bit granted. Returned for administrators."""

NO_PERMISSIONS = 0
