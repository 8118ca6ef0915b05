"""
Codec for shadow token values.

Shadow values arrive as:
  - API JSON        {"offsetX", "offsetY", "blur", "spread", "color", "inset"}
  - form JSON       {"x", "y", "blur", "spread", "color", "type"}
  - internal JSON   {"offset-x", "offset-y", ...}
  - encoded maps of any of the above, or a one-element list of them
"""

from typing import Any, Dict, List, Optional

from token_codec.codecs.base_codec import BaseCodec
from token_codec.domain.constants import (
    DROP_SHADOW,
    INNER_SHADOW,
    SHADOW,
    SHADOW_COLOR_KEYS,
    SHADOW_DEFAULTS,
    SHADOW_FIELDS,
    SHADOW_INSET_KEY,
)
from token_codec.domain.string_harvester import extract_first_string
from token_codec.domain.structural_flattener import flatten


def extract_color_string(val: Any) -> Optional[str]:
    """
    Extract a displayable color from a shadow color value.

    Handles plain CSS strings, alias references and nested encodings
    without ever producing a stringified object.
    """
    if isinstance(val, str):
        return val.strip() or None

    plain = flatten(val)
    if isinstance(plain, list):
        for item in plain:
            found = extract_color_string(item)
            if found:
                return found
        return None
    if isinstance(plain, dict):
        for key in SHADOW_COLOR_KEYS:
            found = plain.get(key)
            if isinstance(found, str) and found.strip():
                return found.strip()
    return extract_first_string(plain)


def _is_truthy(val: Any) -> bool:
    if isinstance(val, str):
        return val.strip().lower() == 'true'
    return val is True


class ShadowCodec(BaseCodec):
    """
    Codec for shadow tokens.

    Canonical form keys: x, y, blur, spread, color, type.
    """

    token_type = SHADOW
    fields = SHADOW_FIELDS

    def normalize(self, raw: str) -> Dict[str, str]:
        """
        Convert any shadow wire value into the canonical form.

        Values stay strings and aliases stay intact. When no `type` is
        present it is derived from the host's `inset` flag.
        """
        m = self._parse_object(raw, allow_list=True)
        if m is None:
            return {}

        form: Dict[str, str] = {}
        for spec in self.fields:
            if spec.canonical == 'color':
                value = self._color(m.get('color'))
            elif spec.canonical == 'type':
                value = self._probe(m, spec.read_keys) or self._type_from_inset(m)
            else:
                value = self._probe(m, spec.read_keys)
            if value:
                form[spec.canonical] = value
        return form

    def to_api_shape(self, form: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Build the shadow payload for the host write API.

        The host does not accept partial shadow records, so every field is
        emitted, falling back to the baseline defaults. The record is
        wrapped in a list because the host schema is a list of shadows.
        """
        record: Dict[str, Any] = {}
        for spec in self.fields:
            value = self._clean(form, spec.canonical) or SHADOW_DEFAULTS[spec.canonical]
            if spec.canonical == 'type':
                record[spec.api_key] = value == INNER_SHADOW
            else:
                record[spec.api_key] = value
        return [record]

    @staticmethod
    def _color(val: Any) -> Optional[str]:
        if val is None:
            return None
        try:
            return extract_color_string(val)
        except RecursionError:
            return None

    @staticmethod
    def _type_from_inset(m: Dict[str, Any]) -> Optional[str]:
        inset = m.get(SHADOW_INSET_KEY)
        if inset is None:
            return None
        return INNER_SHADOW if _is_truthy(inset) else DROP_SHADOW
