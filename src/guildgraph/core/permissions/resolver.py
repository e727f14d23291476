"""Effective permission resolution for a member in a channel.

Precedence, lowest to highest:
    base role permissions -> @everyone overwrite -> combined role overwrites -> member overwrite

Within each tier deny is applied before allow, so a tier's allow wins over
its own deny. Administrator short-circuits before any overwrite is consulted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from guildgraph.core.channel import Channel, OverwriteType
from guildgraph.core.identity import OverwriteID, RoleID
from guildgraph.core.permissions.models import ALL_PERMISSIONS, Permission

if TYPE_CHECKING:
    from guildgraph.graph.guild import Guild, Member, Role


def _apply(permissions: int, allow: int, deny: int) -> int:
    return (permissions & ~deny) | allow


def _is_admin(permissions: int) -> bool:
    return Permission.has(permissions, Permission.ADMINISTRATOR)


def _held_roles(member: Member, guild: Guild) -> list[Role]:
    return [guild.roles[role_id] for role_id in member.role_ids if role_id in guild.roles]


def compute_base_permissions(member: Member, guild: Guild) -> int:
    """Union of the @everyone role and every role the member holds.

    Roles the guild does not know about contribute nothing.

    Returns:
        Base bitmask, or ALL_PERMISSIONS if any held role grants administrator.
    """
    permissions = 0
    everyone = guild.everyone_role
    if everyone is not None:
        permissions |= everyone.permissions

    for role in _held_roles(member, guild):
        permissions |= role.permissions

    if _is_admin(permissions):
        return ALL_PERMISSIONS
    return permissions


def resolve_permissions(
    member: Member,
    channel: Channel,
    guild: Guild,
    *,
    base: int | None = None,
) -> int:
    """Compute a member's effective permission bitmask in a channel.

    Args:
        member: Member whose permissions are resolved.
        channel: Channel carrying the overwrites.
        guild: Guild the member and channel belong to.
        base: Precomputed base permissions. Computed from guild roles if omitted.

    Returns:
        Final permission bitmask. ALL_PERMISSIONS for administrators.
    """
    if base is None:
        permissions = compute_base_permissions(member, guild)
    else:
        permissions = base
        if any(_is_admin(role.permissions) for role in _held_roles(member, guild)):
            return ALL_PERMISSIONS
    if _is_admin(permissions):
        return ALL_PERMISSIONS

    overwrites = channel.overwrites
    everyone_id = OverwriteID.for_role(RoleID.everyone(guild.id))

    everyone = overwrites.get(everyone_id)
    if everyone is not None and everyone.type is OverwriteType.ROLE:
        permissions = _apply(permissions, everyone.allow, everyone.deny)

    role_allow = 0
    role_deny = 0
    for role_id in member.role_ids:
        overwrite_id = OverwriteID.for_role(role_id)
        if overwrite_id == everyone_id:
            continue
        overwrite = overwrites.get(overwrite_id)
        if overwrite is not None and overwrite.type is OverwriteType.ROLE:
            role_allow |= overwrite.allow
            role_deny |= overwrite.deny
    permissions = _apply(permissions, role_allow, role_deny)

    member_overwrite = overwrites.get(OverwriteID.for_user(member.user_id))
    if member_overwrite is not None and member_overwrite.type is OverwriteType.MEMBER:
        permissions = _apply(permissions, member_overwrite.allow, member_overwrite.deny)

    return permissions
