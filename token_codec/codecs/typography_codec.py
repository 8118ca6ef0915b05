"""
Codec for typography token values.

Typography values arrive in several serialization formats:
  - encoded map   {"$meta$", "$cnt$", "$arr$": [keyObj, val, ...]}  (primary)
  - API JSON      {"fontFamilies": ["Inter"], "fontSizes": "16px", ...}
  - internal JSON {"font-family": ["Inter"], "font-size": "16px", ...}
  - empty or alias strings, which carry no fields
"""

from typing import Any, Dict

from token_codec.codecs.base_codec import BaseCodec
from token_codec.domain.constants import TYPOGRAPHY, TYPOGRAPHY_FIELDS
from token_codec.domain.string_harvester import extract_font_family
from token_codec.resolution.alias_parser import is_alias

_FONT_FAMILY = 'fontFamily'


class TypographyCodec(BaseCodec):
    """
    Codec for typography tokens.

    Canonical form keys: fontFamily, fontSize, fontWeight, lineHeight,
    letterSpacing, textCase, textDecoration.
    """

    token_type = TYPOGRAPHY
    fields = TYPOGRAPHY_FIELDS

    def normalize(self, raw: str) -> Dict[str, str]:
        """
        Convert any typography wire value into the canonical form.

        The font family is stored as a persistent set/vector whose trie
        fields (shift, root, tail) must not be mistaken for the name, so
        it goes through the deep string harvester. Every other field is a
        plain string, an alias string or a number.

        Args:
            raw: Wire value string.

        Returns:
            Canonical form; empty for unrecognized input.
        """
        m = self._parse_object(raw)
        if m is None:
            return {}

        form: Dict[str, str] = {}
        for spec in self.fields:
            if spec.canonical == _FONT_FAMILY:
                family_raw = next((m[k] for k in spec.read_keys if m.get(k) is not None), None)
                value = extract_font_family(family_raw, self.max_harvest_depth)
            else:
                value = self._probe(m, spec.read_keys)
            if value:
                form[spec.canonical] = value
        return form

    def to_api_shape(self, form: Dict[str, str]) -> Dict[str, Any]:
        """
        Build the typography payload for the host write API.

        Unknown keys are dropped, and so are empty values: the host rejects
        "" for numeric fields, and omitting a key lets it apply its own
        default. A literal font family is wrapped in a list because the
        host schema requires a list even for one family.
        """
        payload: Dict[str, Any] = {}
        for spec in self.fields:
            value = self._clean(form, spec.canonical)
            if not value:
                continue
            if spec.canonical == _FONT_FAMILY and not is_alias(value):
                payload[spec.api_key] = [value]
            else:
                payload[spec.api_key] = value
        return payload
