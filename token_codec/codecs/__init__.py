"""Per-type token value codecs."""

from token_codec.codecs.base_codec import BaseCodec
from token_codec.codecs.typography_codec import TypographyCodec
from token_codec.codecs.shadow_codec import ShadowCodec
from token_codec.codecs.font_family_codec import FontFamilyCodec
from token_codec.codecs.scalar_codec import ScalarCodec

__all__ = [
    'BaseCodec', 'TypographyCodec', 'ShadowCodec',
    'FontFamilyCodec', 'ScalarCodec',
]
