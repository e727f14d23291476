"""Tests for channel-scoped commands delegated to the transport.

Critical Invariants:
- Voice channels never dispatch webhook or reaction calls
- Request errors pass through unchanged
- A dispatched call completes even if its channel is destroyed meanwhile
"""

import asyncio

import pytest
from conftest import GUILD_ID, TEXT_CHANNEL_ID, VOICE_CHANNEL_ID, channel_payload

from guildgraph import ChannelSettings, Client, RequestError, UnsupportedChannelKindError, Webhook
from guildgraph.core.channel import decode_channel
from guildgraph.core.errors import DecodeError
from guildgraph.core.identity import ChannelID, GuildID, MessageID, WebhookID


def _text(guild):
    return guild.get_channel(ChannelID.parse(TEXT_CHANNEL_ID))


def _voice(guild):
    return guild.get_channel(ChannelID.parse(VOICE_CHANNEL_ID))


@pytest.mark.asyncio
async def test_create_webhook_delegates_with_options(transport, guild):
    webhook = await _text(guild).create_webhook(name="ci", avatar="data:image/png;base64,AAAA")

    transport.create_webhook.assert_awaited_once_with(
        ChannelID.parse(TEXT_CHANNEL_ID), {"name": "ci", "avatar": "data:image/png;base64,AAAA"}
    )
    assert webhook == Webhook(
        id=WebhookID(900000000000000001),
        channel_id=ChannelID.parse(TEXT_CHANNEL_ID),
        guild_id=GuildID.parse(GUILD_ID),
        name="ci",
        token="secret",
    )


@pytest.mark.asyncio
async def test_create_webhook_omits_unset_options(transport, guild):
    await _text(guild).create_webhook()

    transport.create_webhook.assert_awaited_once_with(ChannelID.parse(TEXT_CHANNEL_ID), {})


@pytest.mark.asyncio
async def test_delete_reactions_delegates(transport, guild):
    assert await _text(guild).delete_reactions(MessageID(42)) is True

    transport.delete_all_reactions.assert_awaited_once_with(ChannelID.parse(TEXT_CHANNEL_ID), MessageID(42))


@pytest.mark.asyncio
async def test_get_webhooks_decodes_list(transport, guild):
    webhooks = await _text(guild).get_webhooks()

    assert [w.name for w in webhooks] == ["a", "b"]
    transport.get_webhooks.assert_awaited_once()


@pytest.mark.asyncio
async def test_voice_channel_suppresses_dispatch(transport, guild):
    """CRITICAL: Voice channels never reach the transport.

    Why: Webhooks and reactions are meaningless for voice; the call is dropped.
    """
    voice = _voice(guild)

    assert await voice.create_webhook(name="x") is None
    assert await voice.delete_reactions(MessageID(1)) is False
    assert await voice.get_webhooks() is None

    transport.create_webhook.assert_not_awaited()
    transport.delete_all_reactions.assert_not_awaited()
    transport.get_webhooks.assert_not_awaited()


@pytest.mark.asyncio
async def test_voice_channel_raises_in_strict_mode(transport):
    client = Client(transport, settings=ChannelSettings(strict_channel_kind=True))
    voice = decode_channel(channel_payload(id=VOICE_CHANNEL_ID, type=2), client)

    with pytest.raises(UnsupportedChannelKindError, match="create_webhook is not supported for voice"):
        await voice.create_webhook(name="x")

    transport.create_webhook.assert_not_awaited()


@pytest.mark.asyncio
async def test_detached_channel_dispatches_nothing(transport):
    channel = decode_channel(channel_payload())

    assert await channel.create_webhook(name="x") is None
    assert await channel.delete_reactions(MessageID(1)) is False
    assert await channel.get_webhooks() is None


@pytest.mark.asyncio
async def test_request_error_passes_through(transport, guild):
    error = RequestError("Missing Permissions", status=403, code=50013)
    transport.create_webhook.side_effect = error

    with pytest.raises(RequestError) as exc_info:
        await _text(guild).create_webhook(name="x")

    assert exc_info.value is error
    assert exc_info.value.status == 403


@pytest.mark.asyncio
async def test_inflight_call_completes_after_channel_deleted(client, transport, guild):
    """A dispatched call still completes if its channel is removed meanwhile.

    Why: Callers awaiting the result must not hang or silently lose it.
    """
    gate = asyncio.Event()

    async def slow_create(channel_id, options):
        await gate.wait()
        return {"id": "900000000000000003", "channel_id": str(channel_id)}

    transport.create_webhook.side_effect = slow_create
    task = asyncio.create_task(_text(guild).create_webhook(name="late"))
    await asyncio.sleep(0)

    client.on_channel_delete({"id": TEXT_CHANNEL_ID, "guild_id": GUILD_ID})
    gate.set()
    webhook = await task

    assert webhook.id == WebhookID(900000000000000003)


@pytest.mark.asyncio
async def test_get_webhooks_rejects_non_list_response(transport, guild):
    transport.get_webhooks.side_effect = None
    transport.get_webhooks.return_value = {"id": "1"}

    with pytest.raises(DecodeError, match="Expected webhook list"):
        await _text(guild).get_webhooks()


def test_webhook_from_dict_requires_ids():
    with pytest.raises(DecodeError):
        Webhook.from_dict({"channel_id": "1"})
    with pytest.raises(DecodeError):
        Webhook.from_dict({"id": "1"})
    with pytest.raises(DecodeError):
        Webhook.from_dict("nope")
