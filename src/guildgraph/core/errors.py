"""Exception hierarchy shared across guildgraph."""

from __future__ import annotations


class GuildGraphError(Exception):
    """Base class for errors raised by guildgraph."""

    pass


class DecodeError(GuildGraphError):
    """A wire payload is structurally invalid and cannot be trusted.

    Attributes:
        field: Name of the offending payload field, if known.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ChannelDecodeError(DecodeError):
    """Raised when a channel payload lacks a usable id or type."""

    pass


class OverwriteDecodeError(DecodeError):
    """Raised when a single permission overwrite entry is malformed."""

    pass


class UnsupportedChannelKindError(GuildGraphError):
    """Raised in strict mode when an operation is meaningless for a channel kind."""

    def __init__(self, operation: str, kind: object):
        super().__init__(f"{operation} is not supported for {kind} channels")
        self.operation = operation
        self.kind = kind
