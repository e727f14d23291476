import asyncio
from typing import Any

from guildgraph import (
    ChannelID,
    Client,
    Member,
    MessageID,
    Permission,
    RoleID,
    UserID,
    resolve_permissions,
)

GUILD_ID = "81384788765712384"
MOD_ROLE_ID = "81384788765712390"


class PrintingTransport:
    """Stand-in transport that logs calls instead of hitting the network."""

    async def create_webhook(self, channel_id: ChannelID, options: dict[str, str]) -> Any:
        print(f"POST /channels/{channel_id}/webhooks {options}")
        return {"id": "900000000000000001", "channel_id": str(channel_id), **options}

    async def delete_all_reactions(self, channel_id: ChannelID, message_id: MessageID) -> Any:
        print(f"DELETE /channels/{channel_id}/messages/{message_id}/reactions")

    async def get_webhooks(self, channel_id: ChannelID) -> Any:
        return []


async def main() -> None:
    client = Client(PrintingTransport())

    guild = client.on_guild_create(
        {
            "id": GUILD_ID,
            "name": "Example",
            "roles": [
                {"id": GUILD_ID, "name": "@everyone", "permissions": str(int(Permission.VIEW_CHANNEL | Permission.SEND_MESSAGES))},
                {"id": MOD_ROLE_ID, "name": "mod", "permissions": str(int(Permission.MANAGE_WEBHOOKS))},
            ],
            "channels": [
                {
                    "id": "1",
                    "type": 0,
                    "name": "announcements",
                    "permission_overwrites": [
                        {"id": GUILD_ID, "type": "role", "allow": 0, "deny": int(Permission.SEND_MESSAGES)},
                        {"id": MOD_ROLE_ID, "type": "role", "allow": int(Permission.SEND_MESSAGES), "deny": 0},
                    ],
                },
                {"id": "2", "type": 2, "name": "Lounge"},
            ],
        }
    )

    announcements = guild.get_channel(ChannelID(1))
    lounge = guild.get_channel(ChannelID(2))

    member = Member(UserID(80351110224678912))
    moderator = Member(UserID(80351110224678913), frozenset({RoleID.parse(MOD_ROLE_ID)}))

    for who, m in [("member", member), ("moderator", moderator)]:
        mask = resolve_permissions(m, announcements, guild)
        print(f"{who} can post in #{announcements.name}: {Permission.has(mask, Permission.SEND_MESSAGES)}")

    await announcements.create_webhook(name="deploys")
    print(f"voice webhook: {await lounge.create_webhook(name='ignored')}")


if __name__ == "__main__":
    asyncio.run(main())
