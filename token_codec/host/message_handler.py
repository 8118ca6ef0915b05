"""Host-side handler for messages coming from the editor UI."""

import copy
import logging
from typing import Any, Callable

from token_codec.domain.constants import (
    MESSAGE_ENVELOPE_KEYS,
    MSG_CREATE_SET,
    MSG_CREATE_TOKEN,
    MSG_DELETE_SET,
    MSG_DELETE_TOKEN,
    MSG_DUPLICATE_SET,
    MSG_DUPLICATE_TOKEN,
    MSG_ERROR,
    MSG_FONTS_LOADED,
    MSG_GET_TOKENS,
    MSG_GET_TOKENS_OF_TYPE,
    MSG_INIT,
    MSG_LOADED,
    MSG_MOVE_TOKEN,
    MSG_RENAME_SET,
    MSG_SCAN_FONTS,
    MSG_SETS_UPDATED,
    MSG_TOKENS_LOADED,
    MSG_TOKENS_OF_TYPE_LOADED,
    MSG_TOKENS_UPDATED,
    MSG_UPDATE_TOKEN,
)
from token_codec.domain.models import AliasPickerSet
from token_codec.host.catalog import HostCatalog, unique_copy_name
from token_codec.host.font_scan import scan_fonts
from token_codec.host.serialization import serialize_set, serialize_theme, serialize_token, to_host_value
from token_codec.host.turns import TurnQueue

logger = logging.getLogger(__name__)

Message = dict[str, Any]


def unwrap_message(raw: Any) -> Message:
    """Peel one transport envelope off an inbound message.

    Different transports deliver either the payload itself or a wrapper
    holding it under one of MESSAGE_ENVELOPE_KEYS.
    """
    if not isinstance(raw, dict):
        return {}
    if raw.get('type'):
        return raw
    for key in MESSAGE_ENVELOPE_KEYS:
        inner = raw.get(key)
        if inner and isinstance(inner, dict):
            return inner
    return raw


class MessageHandler:
    """Dispatches UI messages against the host catalog.

    Every failure is logged and reported back to the UI as an `error`
    message; nothing propagates to the transport.

    Args:
        catalog: The host token catalog.
        send: Callable delivering one outbound message to the UI.
        turns: Queue for work that must not run in the current turn.
        document: Root of the host document scanned for fonts; None when
            the host has no document.
    """

    def __init__(self, catalog: HostCatalog, send: Callable[[Message], None], turns: TurnQueue,
                 document: Any = None):
        self.catalog = catalog
        self.send = send
        self.turns = turns
        self.document = document
        self._handlers: dict[str, Callable[[Message], None]] = {
            MSG_INIT: self._init,
            MSG_GET_TOKENS: self._get_tokens,
            MSG_GET_TOKENS_OF_TYPE: self._get_tokens_of_type,
            MSG_CREATE_SET: self._create_set,
            MSG_RENAME_SET: self._rename_set,
            MSG_DUPLICATE_SET: self._duplicate_set,
            MSG_DELETE_SET: self._delete_set,
            MSG_CREATE_TOKEN: self._create_token,
            MSG_UPDATE_TOKEN: self._update_token,
            MSG_DUPLICATE_TOKEN: self._duplicate_token,
            MSG_DELETE_TOKEN: self._delete_token,
            MSG_MOVE_TOKEN: self._move_token,
            MSG_SCAN_FONTS: self._scan_fonts,
        }

    def handle(self, raw: Any) -> None:
        msg = unwrap_message(raw)
        handler = self._handlers.get(msg.get('type'))
        if handler is None:
            logger.warning("Unknown message type: %r", msg.get('type'))
            return
        try:
            handler(msg)
        except Exception as e:
            logger.error("Handling %r failed: %s", msg.get('type'), e, exc_info=True)
            self.send({'type': MSG_ERROR, 'message': str(e)})

    # ── Broadcasts ───────────────────────────────────────────────────────

    def _sets_and_themes(self) -> Message:
        return {
            'sets': [serialize_set(s).to_dict() for s in self.catalog.sets],
            'themes': [serialize_theme(t).to_dict() for t in self.catalog.themes],
        }

    def broadcast_sets(self) -> None:
        self.send({'type': MSG_SETS_UPDATED, **self._sets_and_themes()})

    def broadcast_tokens(self, set_id: str) -> None:
        token_set = self.catalog.get_set_by_id(set_id)
        if token_set is None:
            return
        self.send({
            'type': MSG_TOKENS_UPDATED,
            'setId': set_id,
            'tokens': [serialize_token(t).to_dict() for t in token_set.tokens],
        })

    def _defer_broadcast(self, set_id: str) -> None:
        # A freshly added token must not be read in the turn that created it
        def broadcast() -> None:
            try:
                self.broadcast_tokens(set_id)
                self.broadcast_sets()
            except Exception as e:
                logger.error("Deferred broadcast for set %s failed: %s", set_id, e, exc_info=True)
                self.send({'type': MSG_ERROR, 'message': str(e)})

        self.turns.schedule(broadcast)

    # ── Handlers ─────────────────────────────────────────────────────────

    def _init(self, msg: Message) -> None:
        self.send({'type': MSG_LOADED, **self._sets_and_themes()})

    def _get_tokens(self, msg: Message) -> None:
        set_id = msg.get('setId')
        token_set = self.catalog.require_set(set_id)
        self.send({
            'type': MSG_TOKENS_LOADED,
            'setId': set_id,
            'tokens': [serialize_token(t).to_dict() for t in token_set.tokens],
        })

    def _get_tokens_of_type(self, msg: Message) -> None:
        token_type = msg.get('tokenType')
        picker_sets = []
        for token_set in self.catalog.sets:
            tokens = [serialize_token(t) for t in token_set.tokens if t.type == token_type]
            if tokens:
                picker_sets.append(AliasPickerSet(token_set.id, token_set.name, tokens))
        self.send({
            'type': MSG_TOKENS_OF_TYPE_LOADED,
            'tokenType': token_type,
            'sets': [s.to_dict() for s in picker_sets],
        })

    def _create_set(self, msg: Message) -> None:
        self.catalog.add_set(msg.get('name') or '')
        self.broadcast_sets()

    def _rename_set(self, msg: Message) -> None:
        self.catalog.require_set(msg.get('setId')).name = msg.get('newName') or ''
        self.broadcast_sets()

    def _duplicate_set(self, msg: Message) -> None:
        self.catalog.require_set(msg.get('setId')).duplicate()
        self.broadcast_sets()

    def _delete_set(self, msg: Message) -> None:
        self.catalog.require_set(msg.get('setId')).remove()
        self.broadcast_sets()

    def _create_token(self, msg: Message) -> None:
        set_id = msg.get('setId')
        token_set = self.catalog.require_set(set_id)
        token_set.add_token(
            msg.get('tokenType') or '',
            msg.get('name') or '',
            to_host_value(msg.get('value') or ''),
            msg.get('description') or '',
        )
        self._defer_broadcast(set_id)

    def _update_token(self, msg: Message) -> None:
        set_id = msg.get('setId')
        token = self.catalog.require_token(set_id, msg.get('tokenId'))
        value = to_host_value(msg.get('value') or '')
        update = getattr(token, 'update', None)
        if callable(update):
            update(name=msg.get('name'), value=value, description=msg.get('description'))
        else:
            token.name = msg.get('name')
            token.value = value
            token.description = msg.get('description')
        self.broadcast_tokens(set_id)

    def _duplicate_token(self, msg: Message) -> None:
        set_id = msg.get('setId')
        token_set = self.catalog.require_set(set_id)
        original = self.catalog.require_token(set_id, msg.get('tokenId'))
        # Names are checked against the live set, not the UI's snapshot
        existing = {t.name for t in token_set.tokens}
        token_set.add_token(
            original.type,
            unique_copy_name(original.name, existing),
            copy.deepcopy(original.value),
            original.description or '',
        )
        self._defer_broadcast(set_id)

    def _delete_token(self, msg: Message) -> None:
        set_id = msg.get('setId')
        self.catalog.require_token(set_id, msg.get('tokenId')).remove()
        self.broadcast_tokens(set_id)
        self.broadcast_sets()

    def _move_token(self, msg: Message) -> None:
        from_set_id = msg.get('fromSetId')
        to_set = self.catalog.require_set(msg.get('toSetId'))
        token = self.catalog.require_token(from_set_id, msg.get('tokenId'))
        # The live value is already in host shape; it is passed through as is
        to_set.add_token(token.type, token.name, copy.deepcopy(token.value), token.description or '')
        if not msg.get('copy'):
            token.remove()
        self.broadcast_tokens(from_set_id)
        self.broadcast_sets()

    def _scan_fonts(self, msg: Message) -> None:
        self.send({'type': MSG_FONTS_LOADED, 'fonts': scan_fonts(self.document)})
