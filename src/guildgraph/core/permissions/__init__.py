"""Permission flags and channel permission resolution."""

from guildgraph.core.permissions.models import ALL_PERMISSIONS, NO_PERMISSIONS, Permission
from guildgraph.core.permissions.resolver import compute_base_permissions, resolve_permissions

__all__ = [
    "ALL_PERMISSIONS",
    "NO_PERMISSIONS",
    "Permission",
    "compute_base_permissions",
    "resolve_permissions",
]
