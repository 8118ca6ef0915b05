"""
Alias editor state on the UI side.

At most one alias editor is open at a time. Picker responses from the host
carry no request id; they are matched against whatever editor session is
open when they arrive, and dropped when none is or its type differs.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from token_codec.domain.constants import MSG_GET_TOKENS_OF_TYPE, MSG_TOKENS_OF_TYPE_LOADED, MSG_UPDATE_TOKEN
from token_codec.domain.enums import EditorMode
from token_codec.domain.models import AliasPickerSet, SerializedToken
from token_codec.sub_value_editor import SubValueEditor

logger = logging.getLogger(__name__)


@dataclass
class EditorSession:
    """One open alias editor, for a whole token or one of its fields."""

    token: SerializedToken
    input_value: str
    picker_type: str | None
    field_key: str | None = None
    search_value: str = ''
    mode: EditorMode = EditorMode.EDIT
    picker_sets: list[AliasPickerSet] = field(default_factory=list)
    collapsed_groups: set[str] = field(default_factory=set)

    def targets(self, token_id: str, field_key: str | None) -> bool:
        return self.token.id == token_id and self.field_key == field_key


class EditorController:
    """Owns the open EditorSession and routes picker traffic to it.

    Args:
        send: Callable delivering one message to the host.
        editor: Sub-value editor used for composite fields.
    """

    def __init__(self, send: Callable[[dict[str, Any]], None], editor: SubValueEditor | None = None):
        self.send = send
        self.editor = editor or SubValueEditor()
        self.session: EditorSession | None = None

    def open(self, token: SerializedToken, field_key: str | None = None) -> EditorSession | None:
        """Open an editor; opening the one already open closes it instead."""
        if self.session is not None and self.session.targets(token.id, field_key):
            self.close()
            return None
        self.close()

        if field_key is None:
            self.session = EditorSession(token, token.value, token.type)
        else:
            value = self.editor.get_sub_value(token, field_key)
            self.session = EditorSession(token, value, self._field_picker_type(token.type, field_key), field_key)
        return self.session

    def close(self) -> None:
        self.session = None

    def show_list(self) -> None:
        session = self.session
        if session is None:
            return
        session.mode = EditorMode.LIST
        if session.picker_type is None:
            logger.debug("Field %r of %s has no alias picker type", session.field_key, session.token.type)
            return
        if not session.picker_sets:
            self.send({'type': MSG_GET_TOKENS_OF_TYPE, 'tokenType': session.picker_type})

    def show_edit(self) -> None:
        if self.session is not None:
            self.session.mode = EditorMode.EDIT

    def receive(self, message: dict[str, Any]) -> bool:
        """Apply a picker response to the open session. Returns whether it was consumed."""
        if message.get('type') != MSG_TOKENS_OF_TYPE_LOADED:
            return False
        session = self.session
        if session is None or session.picker_type != message.get('tokenType'):
            logger.debug("Discarding %s response for %r", MSG_TOKENS_OF_TYPE_LOADED, message.get('tokenType'))
            return False
        session.picker_sets = [AliasPickerSet.from_dict(s) for s in message.get('sets', [])]
        return True

    def set_input(self, value: str) -> None:
        if self.session is not None:
            self.session.input_value = value

    def set_search(self, value: str) -> None:
        if self.session is not None:
            self.session.search_value = value

    def toggle_group(self, set_id: str) -> None:
        if self.session is None:
            return
        groups = self.session.collapsed_groups
        if set_id in groups:
            groups.discard(set_id)
        else:
            groups.add(set_id)

    def pick(self, token_name: str) -> None:
        if self.session is None:
            return
        self.session.input_value = f'{{{token_name}}}'
        self.session.mode = EditorMode.EDIT

    def visible_picker_sets(self) -> list[AliasPickerSet]:
        """Picker sets as listed: filtered by search, sorted by name, empty sets dropped.

        A collapsed set is still listed, with its tokens hidden.
        """
        if self.session is None:
            return []
        query = self.session.search_value.lower()
        visible = []
        for picker_set in self.session.picker_sets:
            tokens = sorted(picker_set.tokens, key=lambda t: t.name)
            if query:
                tokens = [t for t in tokens if query in t.name.lower()]
            if not tokens:
                continue
            if picker_set.set_id in self.session.collapsed_groups:
                tokens = []
            visible.append(AliasPickerSet(picker_set.set_id, picker_set.set_name, tokens))
        return visible

    def save(self, set_id: str) -> dict[str, Any] | None:
        """Send the edited value as an update-token message and close the editor."""
        session = self.session
        if session is None:
            return None
        token = session.token
        if session.field_key is None:
            value = session.input_value
        else:
            value = self.editor.set_sub_value(token, session.field_key, session.input_value)
        message = {
            'type': MSG_UPDATE_TOKEN,
            'setId': set_id,
            'tokenId': token.id,
            'name': token.name,
            'value': value,
            'description': token.description,
        }
        self.send(message)
        self.close()
        return message

    def _field_picker_type(self, token_type: str, field_key: str) -> str | None:
        spec = self.editor.registry.get_codec(token_type).field_spec(field_key)
        return spec.alias_type if spec else None
