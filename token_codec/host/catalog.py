"""
Host token catalog abstraction.

The real token storage engine lives inside the host design tool. These
interfaces describe the slice of it the adapters and the message handler
use; InMemoryCatalog is a stand-in for the CLI, the web bridge and tests.
"""

from __future__ import annotations

import copy
import uuid
from abc import ABC, abstractmethod
from typing import Any

from token_codec.exceptions import HostNotReadyError, SetNotFoundError, TokenNotFoundError
from token_codec.host.turns import TurnQueue
from token_codec.resolution.alias_parser import alias_name

_MAX_ALIAS_CHAIN = 8


def unique_copy_name(name: str, existing: set[str]) -> str:
    """`<name>-copy`, then `<name>-copy-2`, `-copy-3`, ... until unused."""
    candidate = f'{name}-copy'
    counter = 2
    while candidate in existing:
        candidate = f'{name}-copy-{counter}'
        counter += 1
    return candidate


class HostToken(ABC):
    """A live token. `value` may be a string, a dict/list, or a proxy object."""

    id: str
    name: str
    type: str
    value: Any
    description: str

    @property
    @abstractmethod
    def resolved_value(self) -> Any:
        """Host-computed, alias-resolved value. May raise before the host has computed it."""

    @abstractmethod
    def remove(self) -> None:
        """Delete the token from its set."""


class HostTokenSet(ABC):
    """A live token set."""

    id: str
    name: str
    active: bool

    @property
    @abstractmethod
    def tokens(self) -> list[HostToken]:
        """Tokens in the set, in insertion order."""

    @abstractmethod
    def add_token(self, type: str, name: str, value: Any, description: str = '') -> HostToken:
        """Create a token. Its resolved value is computed in a later turn."""

    @abstractmethod
    def duplicate(self) -> HostTokenSet:
        """Copy the set and its tokens into a new set."""

    @abstractmethod
    def remove(self) -> None:
        """Delete the set and its tokens."""

    def get_token_by_id(self, token_id: str) -> HostToken | None:
        return next((t for t in self.tokens if t.id == token_id), None)


class HostTheme(ABC):
    """A theme: a named, grouped selection of active sets."""

    id: str
    group: str
    name: str
    active: bool


class HostCatalog(ABC):
    """The host's catalog of token sets."""

    @property
    @abstractmethod
    def sets(self) -> list[HostTokenSet]:
        """All token sets."""

    @property
    @abstractmethod
    def themes(self) -> list[HostTheme]:
        """All themes."""

    @abstractmethod
    def add_set(self, name: str) -> HostTokenSet:
        """Create an empty set."""

    def get_set_by_id(self, set_id: str) -> HostTokenSet | None:
        return next((s for s in self.sets if s.id == set_id), None)

    def require_set(self, set_id: str) -> HostTokenSet:
        token_set = self.get_set_by_id(set_id)
        if token_set is None:
            raise SetNotFoundError(set_id)
        return token_set

    def require_token(self, set_id: str, token_id: str) -> HostToken:
        token = self.require_set(set_id).get_token_by_id(token_id)
        if token is None:
            raise TokenNotFoundError(token_id)
        return token


# ── In-memory host ───────────────────────────────────────────────────────


class InMemoryToken(HostToken):
    """Token held by InMemoryCatalog."""

    def __init__(self, token_set: InMemoryTokenSet, id: str, name: str, type: str,
                 value: Any, description: str = ''):
        self._set = token_set
        self.id = id
        self.name = name
        self.type = type
        self.value = value
        self.description = description
        self._resolved: Any = None
        self._ready = False

    @property
    def resolved_value(self) -> Any:
        if not self._ready:
            raise HostNotReadyError(f"Resolved value of '{self.name}' is not computed yet")
        return self._resolved

    def update(self, name: str | None = None, value: Any = None, description: str | None = None) -> None:
        if name is not None:
            self.name = name
        if value is not None:
            self.value = value
        if description is not None:
            self.description = description
        catalog = self._set.catalog
        catalog.resolve(self)
        catalog.refresh()

    def remove(self) -> None:
        self._set.remove_token(self)
        self._set.catalog.refresh()


class InMemoryTokenSet(HostTokenSet):
    """Token set held by InMemoryCatalog."""

    def __init__(self, catalog: InMemoryCatalog, id: str, name: str, active: bool = True):
        self.catalog = catalog
        self.id = id
        self.name = name
        self.active = active
        self._tokens: list[InMemoryToken] = []

    @property
    def tokens(self) -> list[HostToken]:
        return list(self._tokens)

    def add_token(self, type: str, name: str, value: Any, description: str = '',
                  token_id: str | None = None) -> HostToken:
        token = InMemoryToken(self, token_id or uuid.uuid4().hex, name, type, value, description)
        self._tokens.append(token)
        self.catalog.schedule_resolution(token)
        return token

    def remove_token(self, token: InMemoryToken) -> None:
        self._tokens = [t for t in self._tokens if t is not token]

    def duplicate(self) -> InMemoryTokenSet:
        existing = {s.name for s in self.catalog.sets}
        copy_set = self.catalog.add_set(unique_copy_name(self.name, existing), active=self.active)
        for token in self._tokens:
            copy_set.add_token(token.type, token.name, copy.deepcopy(token.value), token.description)
        return copy_set

    def remove(self) -> None:
        self.catalog.remove_set(self)


class InMemoryTheme(HostTheme):
    """Theme held by InMemoryCatalog; `set_ids` lists the sets it activates."""

    def __init__(self, id: str, group: str, name: str, active: bool = False,
                 set_ids: list[str] | None = None):
        self.id = id
        self.group = group
        self.name = name
        self.active = active
        self.set_ids = list(set_ids or [])


class InMemoryCatalog(HostCatalog):
    """Catalog kept in process memory.

    Newly added tokens stay unresolved until the resolution pass runs on
    the turn queue; without a queue they resolve immediately.

    Args:
        turns: Queue the resolution pass is scheduled on.
    """

    def __init__(self, turns: TurnQueue | None = None):
        self._turns = turns
        self._sets: list[InMemoryTokenSet] = []
        self._themes: list[InMemoryTheme] = []

    @property
    def sets(self) -> list[HostTokenSet]:
        return list(self._sets)

    @property
    def themes(self) -> list[HostTheme]:
        return list(self._themes)

    def add_set(self, name: str, active: bool = True, set_id: str | None = None) -> InMemoryTokenSet:
        token_set = InMemoryTokenSet(self, set_id or uuid.uuid4().hex, name, active)
        self._sets.append(token_set)
        return token_set

    def remove_set(self, token_set: InMemoryTokenSet) -> None:
        self._sets = [s for s in self._sets if s is not token_set]
        for theme in self._themes:
            theme.set_ids = [i for i in theme.set_ids if i != token_set.id]
        self.refresh()

    def add_theme(self, group: str, name: str, active: bool = False, theme_id: str | None = None,
                  set_ids: list[str] | None = None) -> InMemoryTheme:
        theme = InMemoryTheme(theme_id or uuid.uuid4().hex, group, name, active, set_ids)
        self._themes.append(theme)
        return theme

    def schedule_resolution(self, token: InMemoryToken) -> None:
        if self._turns is None:
            self.resolve(token)
        else:
            self._turns.schedule(lambda: self.resolve(token))

    def resolve(self, token: InMemoryToken) -> None:
        token._resolved = self._resolve_value(token.value, 0)
        token._ready = True

    def refresh(self) -> None:
        """Re-resolve every token whose value has already been computed.

        Tokens still waiting for their resolution turn are left pending.
        """
        for token_set in self._sets:
            for token in token_set._tokens:
                if token._ready:
                    self.resolve(token)

    def _resolve_value(self, value: Any, depth: int) -> Any:
        name = alias_name(value) if isinstance(value, str) else None
        if name is None:
            return value
        if depth >= _MAX_ALIAS_CHAIN:
            return None
        target = self._find_token_by_name(name)
        return self._resolve_value(target.value, depth + 1) if target else None

    def _find_token_by_name(self, name: str) -> InMemoryToken | None:
        for token_set in self._sets:
            if not token_set.active:
                continue
            for token in token_set._tokens:
                if token.name == name:
                    return token
        return None

    # ── Catalog Files ────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict[str, Any], turns: TurnQueue | None = None) -> InMemoryCatalog:
        """Build a settled catalog from `{"sets": [{"name", "tokens": [...]}, ...], "themes": [...]}`."""
        catalog = cls()
        for set_data in data.get('sets', []):
            token_set = catalog.add_set(
                set_data.get('name', ''),
                active=set_data.get('active', True),
                set_id=set_data.get('id'),
            )
            for t in set_data.get('tokens', []):
                token_set.add_token(
                    t.get('type', ''),
                    t.get('name', ''),
                    copy.deepcopy(t.get('value', '')),
                    t.get('description', ''),
                    token_id=t.get('id'),
                )
        for theme_data in data.get('themes', []):
            catalog.add_theme(
                theme_data.get('group', ''),
                theme_data.get('name', ''),
                active=theme_data.get('active', False),
                theme_id=theme_data.get('id'),
                set_ids=theme_data.get('sets'),
            )
        for token_set in catalog._sets:
            for token in token_set._tokens:
                catalog.resolve(token)
        catalog._turns = turns
        return catalog

    def to_dict(self) -> dict[str, Any]:
        return {
            'sets': [
                {
                    'id': s.id,
                    'name': s.name,
                    'active': s.active,
                    'tokens': [
                        {
                            'id': t.id,
                            'name': t.name,
                            'type': t.type,
                            'value': copy.deepcopy(t.value),
                            'description': t.description,
                        }
                        for t in s._tokens
                    ],
                }
                for s in self._sets
            ],
            'themes': [
                {
                    'id': t.id,
                    'group': t.group,
                    'name': t.name,
                    'active': t.active,
                    'sets': list(t.set_ids),
                }
                for t in self._themes
            ],
        }
