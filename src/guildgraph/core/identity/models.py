"""Typed snowflake identifiers.

Usage:
    channel_id = ChannelID.parse("123456789012345678")
    missing = ChannelID.parse("abc")  # None
    everyone = RoleID.everyone(guild_id)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

MAX_SNOWFLAKE = (1 << 64) - 1

S = TypeVar("S", bound="Snowflake")


@dataclass(frozen=True, slots=True)
class Snowflake:
    """64-bit unsigned identifier, one nominal subclass per entity kind.

    Dataclass equality requires the same concrete class, so a ChannelID never
    equals a GuildID carrying the same value. Hashing includes the kind.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{type(self).__name__} value must be int, got {type(self.value)}")
        if not 0 <= self.value <= MAX_SNOWFLAKE:
            raise ValueError(f"{type(self).__name__} value {self.value} outside 64-bit range")

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls: type[S], text: Any) -> S | None:
        """Parse a decimal string into this identifier kind.

        Args:
            text: Raw wire value, expected to be a string of decimal digits.

        Returns:
            Identifier of this kind, or None if text is not a decimal string
            fitting in 64 unsigned bits.
        """
        if not isinstance(text, str) or not text.isascii() or not text.isdigit():
            return None
        value = int(text)
        if value > MAX_SNOWFLAKE:
            return None
        return cls(value)


class ChannelID(Snowflake):
    __slots__ = ()


class MessageID(Snowflake):
    __slots__ = ()


class GuildID(Snowflake):
    __slots__ = ()


class UserID(Snowflake):
    __slots__ = ()


class WebhookID(Snowflake):
    __slots__ = ()


class RoleID(Snowflake):
    __slots__ = ()

    @classmethod
    def everyone(cls, guild_id: GuildID) -> RoleID:
        """The @everyone role shares its guild's id."""
        return cls(guild_id.value)


class OverwriteID(Snowflake):
    """Target of a permission overwrite: a role id or a user id."""

    __slots__ = ()

    @classmethod
    def for_role(cls, role_id: RoleID) -> OverwriteID:
        return cls(role_id.value)

    @classmethod
    def for_user(cls, user_id: UserID) -> OverwriteID:
        return cls(user_id.value)


def parse(kind: type[S], text: Any) -> S | None:
    """Parse text as an identifier of the given kind. Never raises on bad input."""
    return kind.parse(text)
