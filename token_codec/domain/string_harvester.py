"""Best-effort extraction of leaf strings from deeply nested values.

The host stores a typography font family as a persistent set/vector: a
hash trie whose actual string lives inside nested bitmap/array nodes. The
path to that string depends on the string's hash and the trie depth, so
instead of probing fixed paths we harvest every plausible string with a
bounded depth-first walk.
"""

from typing import Any

from token_codec.domain.constants import (
    ALIAS_RE,
    DEFAULT_HARVEST_DEPTH,
    FONT_NAME_STOP_WORDS,
    PLAUSIBLE_NAME_FORBIDDEN,
    PLAUSIBLE_NAME_MAX_LEN,
    PLAUSIBLE_NAME_MIN_LEN,
)
from token_codec.domain.structural_flattener import flatten, is_internal_key

_SEMANTIC_KEYS = ('value', 'name')


def is_plausible_name(s: str) -> bool:
    """True when the string could be a user-facing name such as a font family."""
    if not PLAUSIBLE_NAME_MIN_LEN <= len(s) <= PLAUSIBLE_NAME_MAX_LEN:
        return False
    if not any(c.isascii() and c.isalpha() for c in s):
        return False
    if s.lower() in FONT_NAME_STOP_WORDS:
        return False
    return not any(ch in s for ch in PLAUSIBLE_NAME_FORBIDDEN)


def harvest(value: Any, max_depth: int = DEFAULT_HARVEST_DEPTH) -> list[str]:
    """Collect candidate strings from a structure of unknown shape.

    Args:
        value: Anything (dicts, lists, scalars).
        max_depth: Nodes deeper than this are not visited.

    Returns:
        Alias references and plausible names, in traversal order.
    """
    out: list[str] = []
    _collect(value, out, 0, max_depth)
    return out


def _collect(val: Any, out: list[str], depth: int, max_depth: int) -> None:
    if depth > max_depth or val is None:
        return

    if isinstance(val, str):
        s = val.strip()
        if s and (ALIAS_RE.match(s) or is_plausible_name(s)):
            out.append(s)
        return

    if isinstance(val, (list, tuple)):
        for item in val:
            _collect(item, out, depth + 1, max_depth)
    elif isinstance(val, dict):
        for k, v in val.items():
            if isinstance(k, str) and is_internal_key(k):
                continue
            _collect(v, out, depth + 1, max_depth)
    # numbers and booleans are trie internals (bit counts, hashes)


def extract_font_family(raw: Any, max_depth: int = DEFAULT_HARVEST_DEPTH) -> str | None:
    """Pick the font family out of any value shape.

    Structural encodings are flattened first. Returns the first alias
    reference found, else the first plausible name, else None (never an
    empty string).
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw.strip() or None

    try:
        plain = flatten(raw)
    except RecursionError:
        return None
    candidates = harvest(plain, max_depth)
    if not candidates:
        return None
    return next((c for c in candidates if ALIAS_RE.match(c)), candidates[0])


def coerce_scalar(val: Any) -> str | None:
    """Trimmed string for strings and numbers, None for anything else or blank."""
    if isinstance(val, bool) or val is None:
        return None
    if isinstance(val, str):
        return val.strip() or None
    if isinstance(val, int):
        return str(val)
    if isinstance(val, float):
        return str(int(val)) if val.is_integer() else str(val)
    return None


def extract_first_string(val: Any) -> str | None:
    """Extract the first meaningful scalar string from a field value.

    Plain dicts are probed only on semantic keys; their other values are
    never scanned, since that is where trie internals such as shift:5 or
    cnt:1 live.
    """
    direct = coerce_scalar(val)
    if direct is not None or not isinstance(val, (dict, list)):
        return direct

    plain = flatten(val)
    if isinstance(plain, list):
        for item in plain:
            found = extract_first_string(item)
            if found is not None:
                return found
        return None
    if isinstance(plain, dict):
        for key in _SEMANTIC_KEYS:
            found = coerce_scalar(plain.get(key))
            if found is not None:
                return found
        return None
    return coerce_scalar(plain)
