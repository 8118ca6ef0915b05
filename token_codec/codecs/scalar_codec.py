"""
Codec for single-value token types.

Handles every type without a dedicated codec (color, dimension, spacing,
opacity, ...). The value is kept verbatim apart from trimming; aliases and
mixed values pass through untouched.
"""

from typing import Dict

from token_codec.codecs.base_codec import BaseCodec
from token_codec.domain.constants import DEFAULT_HARVEST_DEPTH, SCALAR_FIELD
from token_codec.domain.models import FieldSpec


class ScalarCodec(BaseCodec):
    """Codec for tokens whose value is a single string."""

    fields = (FieldSpec(SCALAR_FIELD, SCALAR_FIELD, (SCALAR_FIELD,)),)

    def __init__(self, token_type: str = '', max_harvest_depth: int = DEFAULT_HARVEST_DEPTH):
        super().__init__(max_harvest_depth)
        self.token_type = token_type

    def normalize(self, raw: str) -> Dict[str, str]:
        value = raw.strip() if isinstance(raw, str) else ''
        return {SCALAR_FIELD: value} if value else {}

    def to_api_shape(self, form: Dict[str, str]) -> str:
        return self._clean(form, SCALAR_FIELD)
