"""Host side: token catalog, serialization adapters and message handling."""

from token_codec.host.turns import TurnQueue
from token_codec.host.catalog import HostCatalog, HostTheme, HostTokenSet, HostToken, InMemoryCatalog
from token_codec.host.message_handler import MessageHandler
from token_codec.host.bridge import HostBridge

__all__ = [
    'TurnQueue', 'HostCatalog', 'HostTheme', 'HostTokenSet', 'HostToken',
    'InMemoryCatalog', 'MessageHandler', 'HostBridge',
]
