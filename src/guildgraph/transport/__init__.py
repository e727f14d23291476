"""Network collaborator protocol and the models it returns.

Usage:
    from guildgraph.transport import Transport, RequestError, Webhook
"""

from guildgraph.transport.models import Webhook
from guildgraph.transport.protocol import RequestError, Transport

__all__ = [
    "Transport",
    "RequestError",
    "Webhook",
]
