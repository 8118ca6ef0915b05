"""Tests for the font family codec."""

import json

import pytest

from token_codec.codecs.font_family_codec import FontFamilyCodec

from tests.conftest import encoded_vector


@pytest.fixture
def codec():
    return FontFamilyCodec()


class TestFontFamilyNormalize:

    def test_bare_string(self, codec):
        assert codec.normalize(" Inter ") == {"fontFamily": "Inter"}

    def test_alias(self, codec):
        assert codec.normalize("{font.body}") == {"fontFamily": "{font.body}"}

    def test_single_element_list(self, codec):
        assert codec.normalize('["Inter"]') == {"fontFamily": "Inter"}

    def test_fragments_joined(self, codec):
        assert codec.normalize('["Open", "Sans"]') == {"fontFamily": "Open Sans"}

    def test_alias_fragment_wins(self, codec):
        assert codec.normalize('["Inter", "{font.brand}"]') == {"fontFamily": "{font.brand}"}

    def test_list_of_families_takes_first(self, codec):
        assert codec.normalize('[["Open", "Sans"], ["Arial"]]') == {"fontFamily": "Open Sans"}

    def test_list_of_families_prefers_alias(self, codec):
        assert codec.normalize('[["Arial"], ["{font.body}"]]') == {"fontFamily": "{font.body}"}

    def test_encoded_vector(self, codec):
        assert codec.normalize(json.dumps(encoded_vector("Inter"))) == {"fontFamily": "Inter"}

    @pytest.mark.parametrize("raw", ["", "   ", "[not json", "[]", None])
    def test_unrecognized_input_is_inert(self, codec, raw):
        assert codec.normalize(raw) == {}


class TestFontFamilyApiShape:

    def test_literal_wrapped(self, codec):
        assert codec.to_api_shape({"fontFamily": "Inter"}) == ["Inter"]
        assert codec.encode({"fontFamily": "Inter"}) == '["Inter"]'

    def test_alias_bare(self, codec):
        assert codec.encode({"fontFamily": "{font.body}"}) == "{font.body}"

    def test_empty(self, codec):
        assert codec.encode({}) == ""
