"""
Base class for per-type token value codecs.

A codec pairs a read-direction normalizer (wire value → canonical form)
with a write-direction builder (canonical form → host API payload). Both
directions of a composite codec are driven by the same FieldSpec table.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from token_codec.domain.constants import DEFAULT_HARVEST_DEPTH
from token_codec.domain.models import FieldSpec
from token_codec.domain.string_harvester import coerce_scalar
from token_codec.domain.structural_flattener import flatten


class BaseCodec(ABC):
    """
    Abstract base for token value codecs.

    Subclasses set `token_type` and `fields` and implement `normalize`
    and `to_api_shape`.
    """

    token_type: str = ''
    fields: Tuple[FieldSpec, ...] = ()

    def __init__(self, max_harvest_depth: int = DEFAULT_HARVEST_DEPTH):
        self.max_harvest_depth = max_harvest_depth

    @property
    def is_composite(self) -> bool:
        return len(self.fields) > 1

    @property
    def field_keys(self) -> list[str]:
        return [f.canonical for f in self.fields]

    def field_spec(self, field_key: str) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.canonical == field_key), None)

    @abstractmethod
    def normalize(self, raw: str) -> Dict[str, str]:
        """Convert a wire-format value string into the canonical form."""

    @abstractmethod
    def to_api_shape(self, form: Dict[str, str]) -> Any:
        """Convert a canonical form into the payload the host write API expects."""

    def encode(self, form: Dict[str, str]) -> str:
        """Wire string for a canonical form: the API payload, JSON-encoded unless a bare string."""
        payload = self.to_api_shape(form)
        if isinstance(payload, str):
            return payload
        return json.dumps(payload)

    # ── Shared Helpers ───────────────────────────────────────────────────

    @staticmethod
    def _parse_object(raw: str, allow_list: bool = False) -> Optional[Dict[str, Any]]:
        """
        Parse a wire string holding one JSON object and flatten it.

        Bare aliases like "{color.red}" fail JSON parsing and yield None,
        as does anything that is not brace-wrapped. With `allow_list`, a
        bracket-wrapped list contributes its first element.
        """
        if not raw:
            return None
        s = raw.strip()
        is_object = s.startswith('{') and s.endswith('}')
        is_list = allow_list and s.startswith('[') and s.endswith(']')
        if not (is_object or is_list):
            return None

        # Pathologically deep input is treated like any unparseable value
        try:
            plain = flatten(json.loads(s))
        except (ValueError, RecursionError):
            return None

        if allow_list and isinstance(plain, list):
            plain = plain[0] if plain else None
        return plain if isinstance(plain, dict) else None

    @staticmethod
    def _probe(m: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
        """First key whose value coerces to a non-empty string."""
        for key in keys:
            value = coerce_scalar(m.get(key))
            if value is not None:
                return value
        return None

    @staticmethod
    def _clean(form: Dict[str, str], key: str) -> str:
        value = form.get(key)
        return value.strip() if isinstance(value, str) else ''
