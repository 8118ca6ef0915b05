"""Alias reference detection and mixed-value parsing.

An alias is a value of the form `{some.token.path}`. A mixed value holds
one or more alias references interleaved with literal text, e.g.
`calc({spacing.sm} + 4px)`.
"""

from token_codec.domain.constants import ALIAS_RE, ALIAS_SPAN_RE
from token_codec.domain.enums import SegmentKind, ValueKind
from token_codec.domain.models import Segment


def is_alias(value: str) -> bool:
    """True when the whole (trimmed) value is exactly one alias reference."""
    return bool(ALIAS_RE.match(value.strip()))


def has_alias_reference(value: str) -> bool:
    """True when the value contains at least one alias reference."""
    return ALIAS_SPAN_RE.search(value) is not None


def alias_name(value: str) -> str | None:
    """Return the referenced token name of a pure alias, or None."""
    s = value.strip()
    return s[1:-1] if ALIAS_RE.match(s) else None


def parse_mixed(value: str) -> list[Segment]:
    """Split a value into ordered alias and text segments.

    Example:
        parse_mixed("calc({spacing.sm} + 4px)")
        → [text 'calc(', alias 'spacing.sm', text ' + 4px)']
    """
    segments: list[Segment] = []
    for part in ALIAS_SPAN_RE.split(value):
        if not part:
            continue
        if ALIAS_RE.match(part):
            segments.append(Segment(SegmentKind.ALIAS, part[1:-1]))
        else:
            segments.append(Segment(SegmentKind.TEXT, part))
    return segments


def join_segments(segments: list[Segment]) -> str:
    """Rebuild the original string from its segments."""
    return ''.join(s.raw for s in segments)


def classify_value(value: str) -> ValueKind:
    """Decide whether a value renders as a pure alias, mixed, or plain value."""
    if is_alias(value):
        return ValueKind.ALIAS
    if has_alias_reference(value):
        return ValueKind.MIXED
    return ValueKind.PLAIN


def rename_reference(value: str, old_name: str, new_name: str) -> str:
    """Point every `{old_name}` reference in a value at `new_name`; other text is untouched."""
    segments = [
        Segment(SegmentKind.ALIAS, new_name) if s.is_alias and s.text == old_name else s
        for s in parse_mixed(value)
    ]
    return join_segments(segments)
