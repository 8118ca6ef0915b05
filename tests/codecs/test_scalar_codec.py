"""Tests for the single-value codec."""

from token_codec.codecs.scalar_codec import ScalarCodec


class TestScalarCodec:

    def test_value_kept_verbatim(self):
        codec = ScalarCodec("color")
        assert codec.normalize(" #ff0000 ") == {"value": "#ff0000"}
        assert codec.normalize("calc({spacing.sm} + 4px)") == {"value": "calc({spacing.sm} + 4px)"}

    def test_alias_passes_through(self):
        codec = ScalarCodec("spacing")
        assert codec.normalize("{spacing.sm}") == {"value": "{spacing.sm}"}
        assert codec.encode({"value": "{spacing.sm}"}) == "{spacing.sm}"

    def test_blank(self):
        codec = ScalarCodec("opacity")
        assert codec.normalize("") == {}
        assert codec.normalize(None) == {}
        assert codec.encode({}) == ""

    def test_not_composite(self):
        codec = ScalarCodec("dimension")
        assert codec.token_type == "dimension"
        assert not codec.is_composite
        assert codec.field_keys == ["value"]
