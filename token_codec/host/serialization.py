"""
Host-side serialization of live token objects.

Composite values (typography, shadow) are exposed by the host as proxies
over its structural encoding. Generic whole-object serialization of such a
proxy can silently come out as "{}" because the underlying properties are
not enumerable, so each known key variant is read explicitly, which forces
the proxy getter. Results use the same wire JSON the UI-side normalizers
read.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from token_codec.domain.constants import (
    SHADOW,
    SHADOW_FIELDS,
    SHADOW_INSET_KEY,
    TYPOGRAPHY,
    TYPOGRAPHY_FIELDS,
)
from token_codec.domain.models import FieldSpec, SerializedSet, SerializedTheme, SerializedToken

logger = logging.getLogger(__name__)

_COMPOSITE_TYPES = (TYPOGRAPHY, SHADOW)

# Keys a nested proxy exposes its own value under
_SEMANTIC_KEYS = ('value', 'name')

_MAX_DETACH_DEPTH = 64


def read_field(obj: Any, key: str) -> Any:
    """Read one property of a live object; a getter that raises yields None."""
    try:
        if isinstance(obj, Mapping):
            return obj.get(key)
        if hasattr(obj, '__getitem__') and not isinstance(obj, (str, bytes, list, tuple)):
            try:
                return obj[key]
            except (KeyError, IndexError, TypeError):
                pass
        return getattr(obj, key, None)
    except Exception:
        logger.debug("Getter for %r raised on %s", key, type(obj).__name__, exc_info=True)
        return None


def to_plain(value: Any, _depth: int = 0) -> Any:
    """Detach a live value into JSON-compatible dicts, lists and scalars.

    Nested proxies are read through their semantic keys, iterated, or
    taken from their public attributes, in that order. An object none of
    these reach yields None; it is never stringified, since the text of an
    object description would later pass for a font or color name.
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if _depth >= _MAX_DETACH_DEPTH:
        return None
    if isinstance(value, Mapping):
        return {str(k): to_plain(v, _depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_plain(v, _depth + 1) for v in value]
    return _detach_object(value, _depth)


def _detach_object(obj: Any, depth: int) -> Any:
    for key in _SEMANTIC_KEYS:
        found = read_field(obj, key)
        if found is not None and found is not obj:
            return to_plain(found, depth + 1)

    if isinstance(obj, Iterable) and not isinstance(obj, (bytes, bytearray)):
        try:
            return [to_plain(v, depth + 1) for v in obj]
        except Exception:
            logger.debug("Iterating %s failed", type(obj).__name__, exc_info=True)
            return None

    try:
        attrs = vars(obj)
    except TypeError:
        return None
    public = {k: to_plain(v, depth + 1) for k, v in attrs.items() if not k.startswith('_')}
    return public or None


def value_to_string(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    plain = to_plain(value)
    return json.dumps(plain) if plain is not None else ''


def _probe_fields(raw: Any, fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for spec in fields:
        for key in spec.read_keys:
            value = to_plain(read_field(raw, key))
            if value is not None:
                out[spec.api_key] = value
                break
    return out


def _serialize_probed(raw: Any, out: dict[str, Any]) -> str:
    if out:
        return json.dumps(out)
    # Last resort; may still come out as "{}" for opaque proxies
    return value_to_string(raw)


def serialize_typography_value(raw: Any) -> str:
    """Wire JSON for a live typography value, emitted under API keys."""
    if raw is None:
        return ''
    if isinstance(raw, str):
        return raw
    return _serialize_probed(raw, _probe_fields(raw, TYPOGRAPHY_FIELDS))


def serialize_shadow_value(raw: Any) -> str:
    """Wire JSON for a live shadow value.

    The record keeps whichever of `type` / `inset` the host exposes, so
    the normalizer can derive the shadow type either way.
    """
    if raw is None:
        return ''
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (list, tuple)):
        return serialize_shadow_value(raw[0]) if raw else ''

    geometry = tuple(f for f in SHADOW_FIELDS if f.canonical != 'type')
    out = _probe_fields(raw, geometry)
    shadow_type = read_field(raw, 'type')
    if shadow_type is not None:
        out['type'] = to_plain(shadow_type)
    else:
        inset = read_field(raw, SHADOW_INSET_KEY)
        if inset is not None:
            out[SHADOW_INSET_KEY] = to_plain(inset)
    return _serialize_probed(raw, out)


def serialize_value(token_type: str, raw: Any) -> str:
    """Wire string for any live token value."""
    if token_type == TYPOGRAPHY:
        return serialize_typography_value(raw)
    if token_type == SHADOW:
        return serialize_shadow_value(raw)
    return value_to_string(raw)


def serialize_resolved_value(token: Any) -> str | None:
    """Wire string for a token's resolved value, or None when unavailable.

    A just-created token has no computed value yet and its getter raises
    inside the host; that is reported as unresolved, never raised. Newer
    hosts deliver composite resolved values as a list of records, of which
    the first is used.
    """
    try:
        resolved = token.resolved_value
        if resolved is None:
            return None
        token_type = getattr(token, 'type', '') or ''
        if token_type in _COMPOSITE_TYPES and isinstance(resolved, (list, tuple)):
            if not resolved:
                return None
            resolved = resolved[0]
        return serialize_value(token_type, resolved)
    except Exception:
        logger.debug("Resolved value of token %r unavailable", getattr(token, 'name', None), exc_info=True)
        return None


def serialize_token(token: Any) -> SerializedToken:
    token_type = getattr(token, 'type', '') or ''
    return SerializedToken(
        id=token.id,
        name=getattr(token, 'name', '') or '',
        type=token_type,
        value=serialize_value(token_type, token.value),
        description=getattr(token, 'description', '') or '',
        resolved_value=serialize_resolved_value(token),
    )


def serialize_set(token_set: Any) -> SerializedSet:
    return SerializedSet(
        id=token_set.id,
        name=token_set.name,
        active=bool(token_set.active),
        token_count=len(token_set.tokens),
    )


def serialize_theme(theme: Any) -> SerializedTheme:
    return SerializedTheme(
        id=theme.id,
        group=getattr(theme, 'group', '') or '',
        name=theme.name,
        active=bool(theme.active),
    )


def to_host_value(value: str) -> Any:
    """Convert a UI-submitted value string into what the host write API takes.

    Composite values must reach the host as objects or lists: a string
    starting with "{" would be read as an alias reference. Bare aliases are
    not valid JSON and stay strings.
    """
    s = (value or '').strip()
    if (s.startswith('{') and s.endswith('}')) or (s.startswith('[') and s.endswith(']')):
        try:
            parsed = json.loads(s)
        except (ValueError, RecursionError):
            return value or ''
        if isinstance(parsed, (dict, list)):
            return parsed
    return value or ''
