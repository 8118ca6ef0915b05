"""In-process transport between the editor UI and the host handler."""

import logging
from typing import Any

from token_codec.host.catalog import HostCatalog, InMemoryCatalog
from token_codec.host.message_handler import Message, MessageHandler
from token_codec.host.turns import TurnQueue

logger = logging.getLogger(__name__)


class HostBridge:
    """Feeds UI messages to a MessageHandler and collects what it sends back.

    Args:
        catalog: Host catalog; an empty InMemoryCatalog sharing the bridge's
            turn queue is created when omitted.
        turns: Turn queue; a new one is created when omitted.
        document: Host document root scanned by `scan-fonts`.
    """

    def __init__(self, catalog: HostCatalog | None = None, turns: TurnQueue | None = None,
                 document: Any = None):
        self.turns = turns or TurnQueue()
        self.catalog = catalog if catalog is not None else InMemoryCatalog(self.turns)
        self._outbox: list[Message] = []
        self.handler = MessageHandler(self.catalog, self._outbox.append, self.turns, document)

    @classmethod
    def from_catalog_dict(cls, data: dict[str, Any]) -> 'HostBridge':
        """Bridge over a catalog file's contents; its optional `document` tree is scanned for fonts."""
        turns = TurnQueue()
        return cls(InMemoryCatalog.from_dict(data, turns), turns, data.get('document'))

    def exchange(self, message: Any) -> list[Message]:
        """Handle one message, let deferred turns run, return outbound messages in order."""
        self.handler.handle(message)
        ran = self.turns.run_pending()
        if ran:
            logger.debug("Ran %d deferred turn(s) after %r", ran, message)
        out = list(self._outbox)
        self._outbox.clear()
        return out
