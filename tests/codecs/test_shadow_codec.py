"""Tests for the shadow codec."""

import json

import pytest

from token_codec.codecs.shadow_codec import ShadowCodec, extract_color_string

from tests.conftest import encoded_map, encoded_vector


@pytest.fixture
def codec():
    return ShadowCodec()


class TestShadowNormalize:

    def test_api_list(self, codec, api_shadow):
        assert codec.normalize(api_shadow) == {
            "x": "4", "y": "4", "blur": "8", "spread": "0",
            "color": "#000000", "type": "drop-shadow",
        }

    def test_encoded_vector_of_maps(self, codec, encoded_shadow):
        assert codec.normalize(encoded_shadow) == {
            "x": "2", "y": "3", "blur": "6", "spread": "1",
            "color": "{color.shadow}", "type": "inner-shadow",
        }

    def test_form_keys(self, codec):
        raw = json.dumps({"x": 1, "y": 2, "blur": 3, "spread": 0, "color": "red", "type": "inner-shadow"})
        assert codec.normalize(raw) == {
            "x": "1", "y": "2", "blur": "3", "spread": "0", "color": "red", "type": "inner-shadow",
        }

    def test_kebab_offsets(self, codec):
        raw = json.dumps({"offset-x": "5", "offset-y": "6"})
        assert codec.normalize(raw) == {"x": "5", "y": "6"}

    def test_type_wins_over_inset(self, codec):
        raw = json.dumps({"type": "drop-shadow", "inset": True})
        assert codec.normalize(raw) == {"type": "drop-shadow"}

    @pytest.mark.parametrize("inset, expected", [
        (True, "inner-shadow"),
        ("true", "inner-shadow"),
        (False, "drop-shadow"),
        ("false", "drop-shadow"),
    ])
    def test_type_from_inset(self, codec, inset, expected):
        assert codec.normalize(json.dumps({"inset": inset})) == {"type": expected}

    def test_no_type_without_inset(self, codec):
        assert "type" not in codec.normalize(json.dumps({"blur": "4"}))

    def test_nested_color_never_stringified(self, codec):
        raw = json.dumps({"color": {"shift": 5, "hex": "#123456"}})
        assert codec.normalize(raw) == {"color": "#123456"}

    def test_empty_list(self, codec):
        assert codec.normalize("[]") == {}

    @pytest.mark.parametrize("raw", ["", "{color.red}", "not json", "[\"a\"]", None])
    def test_unrecognized_input_is_inert(self, codec, raw):
        assert codec.normalize(raw) == {}


class TestShadowApiShape:

    def test_full_record_with_defaults(self, codec):
        assert codec.to_api_shape({"color": "{color.shadow}", "blur": "12"}) == [{
            "offsetX": "0",
            "offsetY": "0",
            "blur": "12",
            "spread": "0",
            "color": "{color.shadow}",
            "inset": False,
        }]

    def test_inner_shadow_sets_inset(self, codec):
        assert codec.to_api_shape({"type": "inner-shadow"})[0]["inset"] is True

    def test_encode_is_json_list(self, codec):
        encoded = json.loads(codec.encode({"x": "1"}))
        assert isinstance(encoded, list)
        assert encoded[0]["offsetX"] == "1"


class TestExtractColorString:

    def test_plain_string(self):
        assert extract_color_string(" rgba(0,0,0,0.5) ") == "rgba(0,0,0,0.5)"

    def test_read_key_order(self):
        assert extract_color_string({"name": "shadow", "value": "#fff"}) == "#fff"
        assert extract_color_string({"rgba": "rgba(1,2,3,1)"}) == "rgba(1,2,3,1)"

    def test_encoded_structures(self):
        assert extract_color_string(encoded_map(("color", "#abc"))) == "#abc"
        assert extract_color_string(encoded_vector("#def")) == "#def"

    def test_nothing_found(self):
        assert extract_color_string({"shift": 5}) is None
        assert extract_color_string("  ") is None
