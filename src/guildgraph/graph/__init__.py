"""Entity graph: client root context, guilds, roles and members.

Usage:
    from guildgraph.graph import Client, Guild, Member, Role
"""

from guildgraph.graph.client import Client
from guildgraph.graph.guild import Guild, Member, Role
from guildgraph.graph.protocol import ClientContext

__all__ = [
    "Client",
    "ClientContext",
    "Guild",
    "Member",
    "Role",
]
