"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from unittest.mock import AsyncMock

from guildgraph import ChannelSettings, Client

GUILD_ID = "81384788765712384"
TEXT_CHANNEL_ID = "381870553235193857"
VOICE_CHANNEL_ID = "381870553235193858"
MOD_ROLE_ID = "81384788765712390"
USER_ID = "80351110224678912"


class FakeTransport:
    """Transport double recording every dispatched call."""

    def __init__(self) -> None:
        self.create_webhook = AsyncMock(
            side_effect=lambda channel_id, options: {
                "id": "900000000000000001",
                "channel_id": str(channel_id),
                "guild_id": GUILD_ID,
                "name": options.get("name"),
                "token": "secret",
            }
        )
        self.delete_all_reactions = AsyncMock(return_value=None)
        self.get_webhooks = AsyncMock(
            side_effect=lambda channel_id: [
                {"id": "900000000000000001", "channel_id": str(channel_id), "name": "a"},
                {"id": "900000000000000002", "channel_id": str(channel_id), "name": "b"},
            ]
        )


def channel_payload(**overrides):
    payload = {
        "id": TEXT_CHANNEL_ID,
        "type": 0,
        "guild_id": GUILD_ID,
        "name": "general",
        "position": 1,
        "permission_overwrites": [],
    }
    payload.update(overrides)
    return payload


def guild_payload(channels=(), roles=None):
    if roles is None:
        roles = [
            {"id": GUILD_ID, "name": "@everyone", "permissions": 1 << 10 | 1 << 11},
            {"id": MOD_ROLE_ID, "name": "mod", "permissions": "8192"},
        ]
    return {"id": GUILD_ID, "name": "Test Guild", "roles": roles, "channels": list(channels)}


@pytest.fixture
def settings():
    return ChannelSettings()


@pytest.fixture
def transport():
    """Fresh FakeTransport."""
    return FakeTransport()


@pytest.fixture
def client(transport, settings):
    """Client with no guilds."""
    return Client(transport, settings=settings)


@pytest.fixture
def guild(client):
    """Client with one guild registered, holding a text and a voice channel."""
    return client.on_guild_create(
        guild_payload(
            channels=[
                {"id": TEXT_CHANNEL_ID, "type": 0, "name": "general"},
                {"id": VOICE_CHANNEL_ID, "type": 2, "name": "Lounge", "bitrate": 64000},
            ]
        )
    )
