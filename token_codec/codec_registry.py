"""Codec registry for token types."""

from dataclasses import dataclass

from token_codec.codecs.base_codec import BaseCodec
from token_codec.codecs.scalar_codec import ScalarCodec
from token_codec.domain.constants import DEFAULT_HARVEST_DEPTH, TOKEN_TYPES


@dataclass
class CodecOptions:
    """Options controlling codec behavior."""

    max_harvest_depth: int = DEFAULT_HARVEST_DEPTH
    pretty: bool = False


class CodecRegistry:
    """Registry mapping token types to codec instances.

    Types without a dedicated codec get a ScalarCodec.
    """

    def __init__(self, max_harvest_depth: int = DEFAULT_HARVEST_DEPTH):
        self._max_harvest_depth = max_harvest_depth
        self._codecs: dict[str, BaseCodec] = {}
        self._register_default_codecs()

    def _register_default_codecs(self) -> None:
        from token_codec.codecs.typography_codec import TypographyCodec
        from token_codec.codecs.shadow_codec import ShadowCodec
        from token_codec.codecs.font_family_codec import FontFamilyCodec

        depth = self._max_harvest_depth
        self.register_codec(TypographyCodec(depth))
        self.register_codec(ShadowCodec(depth))
        self.register_codec(FontFamilyCodec(depth))

    def get_codec(self, token_type: str) -> BaseCodec:
        codec = self._codecs.get(token_type)
        if codec is None:
            codec = ScalarCodec(token_type, self._max_harvest_depth)
        return codec

    def register_codec(self, codec: BaseCodec) -> None:
        self._codecs[codec.token_type] = codec

    def is_composite(self, token_type: str) -> bool:
        return self.get_codec(token_type).is_composite

    def get_supported_types(self) -> list[str]:
        return sorted(set(TOKEN_TYPES) | set(self._codecs))
