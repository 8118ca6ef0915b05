"""Alias reference lookup against the tokens of the active set.

Flags references whose target name is unknown so mixed values can show
broken references distinctly. Membership is the only check: targets are
never evaluated.
"""

from typing import Iterable

from token_codec.domain.enums import ValueKind
from token_codec.domain.models import DisplaySegment, ValueDisplay
from token_codec.resolution.alias_parser import alias_name, classify_value, parse_mixed


class AliasResolver:
    """Classifies token values for display and flags broken references.

    Args:
        known_names: Names of the tokens currently visible to the user.
    """

    def __init__(self, known_names: Iterable[str]) -> None:
        self._known = set(known_names)

    @classmethod
    def from_tokens(cls, tokens: Iterable) -> 'AliasResolver':
        """Build from any objects exposing a `name` attribute."""
        return cls(t.name for t in tokens)

    def is_known(self, name: str) -> bool:
        return name in self._known

    def broken_references(self, value: str) -> list[str]:
        """Names referenced by the value that are not known tokens."""
        return [s.text for s in parse_mixed(value) if s.is_alias and not self.is_known(s.text)]

    def describe(self, value: str) -> ValueDisplay:
        """Decide how a value renders.

        Pure aliases render as a single chip, plain values as text, and
        mixed values as segments with each alias flagged broken or not.
        """
        kind = classify_value(value)
        if kind is ValueKind.ALIAS:
            return ValueDisplay(kind, alias_name=alias_name(value))
        if kind is ValueKind.PLAIN:
            return ValueDisplay(kind)

        segments = [
            DisplaySegment(s, broken=s.is_alias and not self.is_known(s.text))
            for s in parse_mixed(value)
        ]
        return ValueDisplay(kind, segments=segments)
