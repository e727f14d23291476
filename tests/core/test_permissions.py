"""Tests for permission resolution.

Critical Invariants:
- Precedence is everyone -> combined roles -> member
- Deny is applied before allow within a tier
- Administrator short-circuits every overwrite
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from guildgraph import ALL_PERMISSIONS, Permission
from guildgraph.core.channel import Channel, ChannelType, Overwrite, OverwriteType
from guildgraph.core.identity import ChannelID, GuildID, OverwriteID, RoleID, UserID
from guildgraph.core.permissions import compute_base_permissions, resolve_permissions
from guildgraph.graph import Guild, Member, Role

GUILD = GuildID(100)
EVERYONE = RoleID.everyone(GUILD)
MOD = RoleID(200)
HELPER = RoleID(201)
ADMIN = RoleID(202)
USER = UserID(300)

SEND = Permission.SEND_MESSAGES
VIEW = Permission.VIEW_CHANNEL


def _guild(everyone: int = 0, mod: int = 0, helper: int = 0) -> Guild:
    return Guild(
        GUILD,
        roles=[
            Role(EVERYONE, "@everyone", everyone),
            Role(MOD, "mod", mod),
            Role(HELPER, "helper", helper),
            Role(ADMIN, "admin", Permission.ADMINISTRATOR),
        ],
    )


def _role_ow(role_id: RoleID, allow: int = 0, deny: int = 0) -> Overwrite:
    return Overwrite(OverwriteID.for_role(role_id), OverwriteType.ROLE, allow, deny)


def _member_ow(user_id: UserID, allow: int = 0, deny: int = 0) -> Overwrite:
    return Overwrite(OverwriteID.for_user(user_id), OverwriteType.MEMBER, allow, deny)


def _channel(*overwrites: Overwrite) -> Channel:
    return Channel(id=ChannelID(1), type=ChannelType.TEXT, guild_id=GUILD, overwrites=overwrites)


def test_base_permissions_union_of_everyone_and_held_roles():
    guild = _guild(everyone=VIEW, mod=Permission.MANAGE_MESSAGES, helper=Permission.KICK_MEMBERS)
    member = Member(USER, frozenset({MOD}))

    assert compute_base_permissions(member, guild) == VIEW | Permission.MANAGE_MESSAGES


def test_unknown_roles_contribute_nothing():
    guild = _guild(everyone=VIEW)
    member = Member(USER, frozenset({RoleID(999)}))

    assert compute_base_permissions(member, guild) == VIEW


def test_worked_example_member_deny_beats_role_allow():
    """CRITICAL: Member overwrite has highest precedence.

    Why: Reordering tiers changes outcomes; this is the reference scenario.
    """
    guild = _guild()
    member = Member(USER, frozenset({MOD}))
    channel = _channel(
        _role_ow(EVERYONE, deny=SEND),
        _role_ow(MOD, allow=SEND),
        _member_ow(USER, deny=SEND),
    )

    result = resolve_permissions(member, channel, guild, base=SEND)

    assert not result & SEND


def test_role_allow_beats_everyone_deny():
    guild = _guild(everyone=VIEW | SEND)
    member = Member(USER, frozenset({MOD}))
    channel = _channel(_role_ow(EVERYONE, deny=SEND), _role_ow(MOD, allow=SEND))

    assert resolve_permissions(member, channel, guild) == VIEW | SEND


def test_role_overwrites_combined_before_applying():
    """Allow from one role wins over deny from another role held by the same member.

    Why: Roles are OR-combined, then applied deny-then-allow in one step.
    """
    guild = _guild(everyone=VIEW | SEND)
    member = Member(USER, frozenset({MOD, HELPER}))
    channel = _channel(_role_ow(MOD, deny=SEND), _role_ow(HELPER, allow=SEND))

    assert resolve_permissions(member, channel, guild) & SEND


def test_allow_wins_over_deny_within_same_overwrite():
    guild = _guild(everyone=VIEW)
    member = Member(USER)
    channel = _channel(_member_ow(USER, allow=SEND, deny=SEND))

    assert resolve_permissions(member, channel, guild) == VIEW | SEND


def test_overwrites_for_roles_not_held_are_ignored():
    guild = _guild(everyone=VIEW | SEND)
    member = Member(USER, frozenset({HELPER}))
    channel = _channel(_role_ow(MOD, deny=SEND), _member_ow(UserID(301), deny=VIEW))

    assert resolve_permissions(member, channel, guild) == VIEW | SEND


def test_overwrite_with_mismatched_type_is_ignored():
    guild = _guild(everyone=VIEW | SEND)
    member = Member(USER)
    channel = _channel(Overwrite(OverwriteID.for_user(USER), OverwriteType.ROLE, 0, SEND))

    assert resolve_permissions(member, channel, guild) == VIEW | SEND


def test_everyone_overwrite_applies_to_member_without_roles():
    guild = _guild(everyone=VIEW | SEND)
    channel = _channel(_role_ow(EVERYONE, deny=VIEW))

    assert resolve_permissions(Member(USER), channel, guild) == SEND


@pytest.mark.parametrize("base", [None, SEND])
def test_administrator_short_circuits_overwrites(base):
    """CRITICAL: Administrators get every permission regardless of overwrites."""
    guild = _guild()
    member = Member(USER, frozenset({ADMIN}))
    channel = _channel(
        _role_ow(EVERYONE, deny=ALL_PERMISSIONS),
        _role_ow(ADMIN, deny=ALL_PERMISSIONS),
        _member_ow(USER, deny=ALL_PERMISSIONS),
    )

    assert resolve_permissions(member, channel, guild, base=base) == ALL_PERMISSIONS


def test_administrator_on_everyone_role():
    guild = _guild(everyone=Permission.ADMINISTRATOR)

    assert compute_base_permissions(Member(USER), guild) == ALL_PERMISSIONS


masks = st.integers(min_value=0, max_value=ALL_PERMISSIONS).map(lambda mask: mask & ~int(Permission.ADMINISTRATOR))


@given(base=masks, everyone_deny=masks, role_allow=masks, member_allow=masks, member_deny=masks)
def test_member_tier_always_decides_its_bits(base, everyone_deny, role_allow, member_allow, member_deny):
    """Bits named by the member overwrite end up exactly as it says."""
    guild = _guild()
    member = Member(USER, frozenset({MOD}))
    channel = _channel(
        _role_ow(EVERYONE, deny=everyone_deny),
        _role_ow(MOD, allow=role_allow),
        _member_ow(USER, allow=member_allow, deny=member_deny),
    )

    result = resolve_permissions(member, channel, guild, base=base)

    assert result & member_allow == member_allow
    assert result & (member_deny & ~member_allow) == 0


@given(base=masks)
def test_no_overwrites_returns_base(base):
    assert resolve_permissions(Member(USER), _channel(), _guild(), base=base) == base
