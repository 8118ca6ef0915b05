"""Editing of one field of a composite token value.

Lets a single field (just the shadow color, just the typography line
height) be turned into or out of an alias reference without disturbing
its sibling fields.
"""

from token_codec.codec_registry import CodecRegistry
from token_codec.codecs.base_codec import BaseCodec
from token_codec.domain.models import SerializedToken, SubValue
from token_codec.exceptions import NotCompositeError, UnknownFieldError
from token_codec.resolution.alias_parser import is_alias


class SubValueEditor:
    """Reads and rewrites single fields of composite token values.

    Args:
        registry: Codec lookup; a default registry is built when omitted.
    """

    def __init__(self, registry: CodecRegistry | None = None) -> None:
        self.registry = registry or CodecRegistry()

    def get_sub_value(self, token: SerializedToken, field_key: str) -> str:
        """Current value of one field, or '' when the field is not set."""
        codec = self._composite_codec(token.type, field_key)
        return codec.normalize(token.value).get(field_key, '')

    def set_sub_value(self, token: SerializedToken, field_key: str, new_value: str) -> str:
        """Rebuild the token's wire value with exactly one field changed.

        A blank new value removes the field from the form.

        Returns:
            The new wire value string, in the shape the host write API expects.
        """
        codec = self._composite_codec(token.type, field_key)
        form = codec.normalize(token.value)
        value = new_value.strip() if new_value else ''
        if value:
            form[field_key] = value
        else:
            form.pop(field_key, None)
        return codec.encode(form)

    def sub_values(self, token: SerializedToken) -> list[SubValue]:
        """All set fields of a composite token, in table order."""
        codec = self.registry.get_codec(token.type)
        if not codec.is_composite:
            raise NotCompositeError(token.type)
        form = codec.normalize(token.value)
        return [
            SubValue(spec.canonical, form[spec.canonical], is_alias(form[spec.canonical]), spec.alias_type)
            for spec in codec.fields
            if spec.canonical in form
        ]

    def _composite_codec(self, token_type: str, field_key: str) -> BaseCodec:
        codec = self.registry.get_codec(token_type)
        if not codec.is_composite:
            raise NotCompositeError(token_type)
        if codec.field_spec(field_key) is None:
            raise UnknownFieldError(token_type, field_key)
        return codec
