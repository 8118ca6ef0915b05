"""Structural flattener for the host's generic nested encoding.

The host serializes its persistent maps and vectors as wrapper objects:

  encoded map:    {"$meta$": null, "$cnt$": 2, "$arr$": [keyObj, val, keyObj, val]}
                  where keyObj = {"ns": null, "name": "font-size", "$fqn$": "font-size"}
  encoded vector: {"$meta$": null, "$cnt$": 1, "$arr$": ["Inter"]}

flatten() turns these into ordinary dicts and lists so downstream key
lookups work without knowing the wire format. It has no token-type
knowledge.
"""

from typing import Any

from token_codec.domain.constants import (
    ENTRIES_KEY,
    KEY_NAME_FIELDS,
    PROTOCOL_MASK_RE,
    TRAVERSE_SKIP_KEYS,
)
from token_codec.domain.enums import NodeKind


def is_internal_key(key: str) -> bool:
    """True for bookkeeping keys that never carry user-visible data."""
    return (
        key in TRAVERSE_SKIP_KEYS
        or key.startswith('$')
        or PROTOCOL_MASK_RE.match(key) is not None
    )


def key_descriptor_name(descriptor: Any) -> str | None:
    """Return the name carried by an encoded-map key descriptor, if any."""
    if not isinstance(descriptor, dict):
        return None
    for name_field in KEY_NAME_FIELDS:
        value = descriptor.get(name_field)
        if isinstance(value, str) and value:
            return value
    return None


def classify_node(raw: Any) -> NodeKind:
    """Decide how a single node must be flattened.

    An object carrying an entries array is a map encoding when its first
    entry is a key descriptor, and a vector encoding otherwise (including
    an empty entries array).
    """
    if isinstance(raw, list):
        return NodeKind.SEQUENCE
    if not isinstance(raw, dict):
        return NodeKind.SCALAR

    entries = raw.get(ENTRIES_KEY)
    if isinstance(entries, list):
        if entries and key_descriptor_name(entries[0]) is not None:
            return NodeKind.MAP_ENCODING
        return NodeKind.VECTOR_ENCODING
    return NodeKind.PLAIN_OBJECT


def flatten(raw: Any) -> Any:
    """Recursively convert structural encodings into plain dicts and lists.

    Args:
        raw: Any JSON-compatible value.

    Returns:
        The same value built only from dicts, lists and scalars.
    """
    kind = classify_node(raw)

    if kind is NodeKind.SCALAR:
        return raw
    if kind is NodeKind.SEQUENCE:
        return [flatten(item) for item in raw]
    if kind is NodeKind.MAP_ENCODING:
        return _flatten_map_entries(raw[ENTRIES_KEY])
    if kind is NodeKind.VECTOR_ENCODING:
        return [flatten(item) for item in raw[ENTRIES_KEY]]

    return {k: flatten(v) for k, v in raw.items() if not is_internal_key(k)}


def _flatten_map_entries(entries: list) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for i in range(0, len(entries) - 1, 2):
        key = key_descriptor_name(entries[i]) or str(i // 2)
        result[key] = flatten(entries[i + 1])
    return result
