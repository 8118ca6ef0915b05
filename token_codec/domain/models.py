"""Shared data models used across codec modules."""

from dataclasses import dataclass, field
from typing import Any

from token_codec.domain.enums import SegmentKind, ValueKind


@dataclass(frozen=True)
class FieldSpec:
    """One field of a composite token value.

    Attributes:
        canonical: Key in the canonical form (e.g. 'fontSize').
        api_key: Key the host write API expects (e.g. 'fontSizes').
        read_keys: Key-name variants probed on read, in priority order.
        alias_type: Token type offered by the alias picker for this field.
    """

    canonical: str
    api_key: str
    read_keys: tuple[str, ...]
    alias_type: str | None = None


@dataclass(frozen=True)
class Segment:
    """One piece of a mixed value: an alias reference or literal text."""

    kind: SegmentKind
    text: str

    @property
    def is_alias(self) -> bool:
        return self.kind is SegmentKind.ALIAS

    @property
    def raw(self) -> str:
        """Segment as it appears in the original string."""
        return f'{{{self.text}}}' if self.is_alias else self.text

    def to_dict(self) -> dict[str, str]:
        if self.is_alias:
            return {'kind': 'alias', 'name': self.text}
        return {'kind': 'text', 'content': self.text}


@dataclass(frozen=True)
class DisplaySegment:
    """A mixed-value segment annotated for display."""

    segment: Segment
    broken: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {**self.segment.to_dict(), 'broken': self.broken}


@dataclass
class ValueDisplay:
    """How a token value should be rendered."""

    kind: ValueKind
    alias_name: str | None = None
    segments: list[DisplaySegment] = field(default_factory=list)

    @property
    def broken_references(self) -> list[str]:
        return [s.segment.text for s in self.segments if s.broken]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {'kind': self.kind.value}
        if self.alias_name is not None:
            data['aliasName'] = self.alias_name
        if self.segments:
            data['segments'] = [s.to_dict() for s in self.segments]
            data['brokenReferences'] = self.broken_references
        return data


@dataclass
class SubValue:
    """One field of a composite token, as shown on a sub-value chip."""

    field_key: str
    value: str
    is_alias: bool
    alias_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'field': self.field_key,
            'value': self.value,
            'isAlias': self.is_alias,
            'aliasType': self.alias_type,
        }


@dataclass
class SerializedToken:
    """A token as carried across the UI/host boundary."""

    id: str
    name: str
    type: str
    value: str
    description: str = ''
    resolved_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'value': self.value,
            'description': self.description,
        }
        if self.resolved_value is not None:
            data['resolvedValue'] = self.resolved_value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SerializedToken':
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name') or '',
            type=data.get('type') or '',
            value=data.get('value') or '',
            description=data.get('description') or '',
            resolved_value=data.get('resolvedValue'),
        )


@dataclass
class SerializedSet:
    """Summary of a token set."""

    id: str
    name: str
    active: bool
    token_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'active': self.active,
            'tokenCount': self.token_count,
        }


@dataclass
class SerializedTheme:
    """Summary of a theme."""

    id: str
    group: str
    name: str
    active: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'group': self.group,
            'name': self.name,
            'active': self.active,
        }


@dataclass
class AliasPickerSet:
    """Tokens of one set offered by the alias picker."""

    set_id: str
    set_name: str
    tokens: list[SerializedToken] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'setId': self.set_id,
            'setName': self.set_name,
            'tokens': [t.to_dict() for t in self.tokens],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'AliasPickerSet':
        return cls(
            set_id=data.get('setId', ''),
            set_name=data.get('setName', ''),
            tokens=[SerializedToken.from_dict(t) for t in data.get('tokens', [])],
        )
