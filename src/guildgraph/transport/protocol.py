"""Outbound network collaborator.

The transport performs the actual REST calls (auth, rate limiting, retries).
guildgraph only issues intent-level calls and passes its errors through.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from guildgraph.core.errors import GuildGraphError
from guildgraph.core.identity import ChannelID, MessageID


class RequestError(GuildGraphError):
    """Raised by a transport when a request fails.

    Attributes:
        status: HTTP status code, if the server answered.
        code: Platform error code from the response body, if any.
    """

    def __init__(self, message: str, status: int | None = None, code: int | None = None):
        super().__init__(message)
        self.status = status
        self.code = code


@runtime_checkable
class Transport(Protocol):
    """REST operations the client delegates to. Each returns the raw response payload."""

    async def create_webhook(self, channel_id: ChannelID, options: dict[str, str]) -> Any:
        """POST /channels/{channel_id}/webhooks with options {name, avatar}."""
        ...

    async def delete_all_reactions(self, channel_id: ChannelID, message_id: MessageID) -> Any:
        """DELETE /channels/{channel_id}/messages/{message_id}/reactions."""
        ...

    async def get_webhooks(self, channel_id: ChannelID) -> Any:
        """GET /channels/{channel_id}/webhooks."""
        ...
