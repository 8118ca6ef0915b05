"""Tests for composite sub-value editing."""

import json

import pytest

from token_codec.codecs.shadow_codec import ShadowCodec
from token_codec.codecs.typography_codec import TypographyCodec
from token_codec.domain.models import SerializedToken
from token_codec.exceptions import NotCompositeError, UnknownFieldError
from token_codec.sub_value_editor import SubValueEditor


@pytest.fixture
def editor():
    return SubValueEditor()


@pytest.fixture
def shadow_token():
    form = {"x": "4", "y": "4", "blur": "8", "spread": "0", "color": "#000000", "type": "drop-shadow"}
    return SerializedToken(id="s1", name="shadow.card", type="shadow", value=ShadowCodec().encode(form))


@pytest.fixture
def typography_token(encoded_typography):
    return SerializedToken(id="t1", name="type.body", type="typography", value=encoded_typography)


class TestGetSubValue:

    def test_reads_field(self, editor, shadow_token):
        assert editor.get_sub_value(shadow_token, "blur") == "8"

    def test_missing_field_is_blank(self, editor, typography_token):
        assert editor.get_sub_value(typography_token, "textCase") == ""

    def test_reads_from_encoded_map(self, editor, typography_token):
        assert editor.get_sub_value(typography_token, "fontFamily") == "Inter"


class TestSetSubValue:
    """Only the edited field changes."""

    def test_shadow_color_isolation(self, editor, shadow_token):
        rebuilt = editor.set_sub_value(shadow_token, "color", "{color.shadow}")
        form = ShadowCodec().normalize(rebuilt)
        assert form == {
            "x": "4", "y": "4", "blur": "8", "spread": "0",
            "color": "{color.shadow}", "type": "drop-shadow",
        }

    def test_typography_field_alias(self, editor, typography_token):
        rebuilt = editor.set_sub_value(typography_token, "lineHeight", "{line.tight}")
        assert json.loads(rebuilt) == {
            "fontFamilies": ["Inter"],
            "fontSizes": "16",
            "fontWeight": "400",
            "lineHeight": "{line.tight}",
            "letterSpacing": "{spacing.tight}",
        }

    def test_value_trimmed(self, editor, typography_token):
        rebuilt = editor.set_sub_value(typography_token, "fontSize", "  18 ")
        assert TypographyCodec().normalize(rebuilt)["fontSize"] == "18"

    def test_blank_removes_field(self, editor, typography_token):
        rebuilt = editor.set_sub_value(typography_token, "letterSpacing", "  ")
        assert "letterSpacing" not in json.loads(rebuilt)

    def test_unset_token_gets_field(self, editor):
        token = SerializedToken(id="t2", name="type.new", type="typography", value="")
        assert json.loads(editor.set_sub_value(token, "fontWeight", "700")) == {"fontWeight": "700"}


class TestSubValues:

    def test_lists_set_fields_in_table_order(self, editor, shadow_token):
        shadow_token.value = ShadowCodec().encode({"color": "{color.shadow}", "blur": "2"})
        chips = editor.sub_values(shadow_token)
        assert [c.field_key for c in chips] == ["x", "y", "blur", "spread", "color", "type"]
        color = chips[4]
        assert color.is_alias
        assert color.alias_type == "color"
        assert chips[5].alias_type is None

    def test_typography_alias_types(self, editor, typography_token):
        chips = {c.field_key: c for c in editor.sub_values(typography_token)}
        assert chips["fontFamily"].alias_type == "fontFamilies"
        assert chips["lineHeight"].alias_type == "number"
        assert chips["letterSpacing"].is_alias


class TestErrors:

    def test_not_composite(self, editor):
        token = SerializedToken(id="c", name="color.red", type="color", value="#f00")
        with pytest.raises(NotCompositeError):
            editor.get_sub_value(token, "value")
        with pytest.raises(NotCompositeError):
            editor.sub_values(token)

    def test_unknown_field(self, editor, shadow_token):
        with pytest.raises(UnknownFieldError) as exc:
            editor.set_sub_value(shadow_token, "offsetX", "4")
        assert exc.value.field_key == "offsetX"

    def test_errors_are_value_errors(self, editor, shadow_token):
        with pytest.raises(ValueError):
            editor.get_sub_value(shadow_token, "fontSize")
