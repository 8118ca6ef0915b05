"""
Codec for standalone font-family tokens.

A font-family value may be a bare string, an alias, a flat list of name
fragments ("Open", "Sans"), a list of such lists (one per family), or a
structural encoding of any of these. The canonical form reduces it to a
single display string under `fontFamily`.
"""

import json
from typing import Any, Dict, List, Optional, Union

from token_codec.codecs.base_codec import BaseCodec
from token_codec.domain.constants import FONT_FAMILIES, FONT_FAMILY_FIELD
from token_codec.domain.models import FieldSpec
from token_codec.domain.string_harvester import extract_font_family
from token_codec.domain.structural_flattener import flatten
from token_codec.resolution.alias_parser import is_alias


class FontFamilyCodec(BaseCodec):
    """Codec for fontFamilies tokens."""

    token_type = FONT_FAMILIES
    fields = (FieldSpec(FONT_FAMILY_FIELD, FONT_FAMILY_FIELD, (FONT_FAMILY_FIELD,), FONT_FAMILIES),)

    def normalize(self, raw: str) -> Dict[str, str]:
        s = raw.strip() if raw else ''
        if not s:
            return {}
        if is_alias(s) or not (s.startswith('[') or s.startswith('{')):
            return {FONT_FAMILY_FIELD: s}

        try:
            family = self._from_structure(flatten(json.loads(s)))
        except (ValueError, RecursionError):
            return {}
        return {FONT_FAMILY_FIELD: family} if family else {}

    def to_api_shape(self, form: Dict[str, str]) -> Union[str, List[str]]:
        """Aliases pass through as bare strings; literal names become one-element lists."""
        value = self._clean(form, FONT_FAMILY_FIELD)
        if not value or is_alias(value):
            return value
        return [value]

    def _from_structure(self, plain: Any) -> Optional[str]:
        if isinstance(plain, str):
            return plain.strip() or None
        if isinstance(plain, list):
            if plain and all(isinstance(item, list) for item in plain):
                return self._from_families(plain)
            if all(isinstance(item, str) for item in plain):
                return self._join_fragments(plain)
        return extract_font_family(plain, self.max_harvest_depth)

    def _from_families(self, families: List[list]) -> Optional[str]:
        names = [self._from_structure(family) for family in families]
        names = [n for n in names if n]
        alias = next((n for n in names if is_alias(n)), None)
        return alias or (names[0] if names else None)

    @staticmethod
    def _join_fragments(fragments: List[str]) -> Optional[str]:
        parts = [f.strip() for f in fragments if f.strip()]
        alias = next((p for p in parts if is_alias(p)), None)
        if alias:
            return alias
        return ' '.join(parts) or None
