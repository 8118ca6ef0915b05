"""Tests for alias detection and mixed-value parsing."""

import pytest

from token_codec.domain.enums import SegmentKind, ValueKind
from token_codec.resolution.alias_parser import (
    alias_name,
    classify_value,
    has_alias_reference,
    is_alias,
    join_segments,
    parse_mixed,
    rename_reference,
)


class TestIsAlias:

    def test_pure_alias(self):
        assert is_alias("{color.red}")

    def test_trimmed(self):
        assert is_alias("{color.red} ")
        assert is_alias("  {color.red}")

    def test_embedded_reference_is_not_alias(self):
        assert not is_alias("calc({a})")

    def test_two_spans_are_not_one_alias(self):
        assert not is_alias("{a}{b}")

    def test_not_alias(self):
        for value in ("", "#ff0000", "{}", "{a", "a}", "{{a}}"):
            assert not is_alias(value)


class TestAliasName:

    def test_name(self):
        assert alias_name(" {color.brand.primary} ") == "color.brand.primary"

    def test_non_alias(self):
        assert alias_name("calc({a})") is None


class TestParseMixed:

    def test_calc_split_points(self):
        segments = parse_mixed("calc({spacing.sm} + 4px)")
        assert [(s.kind, s.text) for s in segments] == [
            (SegmentKind.TEXT, "calc("),
            (SegmentKind.ALIAS, "spacing.sm"),
            (SegmentKind.TEXT, " + 4px)"),
        ]

    def test_adjacent_aliases(self):
        segments = parse_mixed("{a}{b}")
        assert [s.text for s in segments] == ["a", "b"]
        assert all(s.is_alias for s in segments)

    def test_no_aliases(self):
        segments = parse_mixed("16px")
        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.TEXT

    def test_empty(self):
        assert parse_mixed("") == []

    @pytest.mark.parametrize("value", [
        "calc({spacing.sm} + 4px)",
        "{a}{b}",
        "  {color.red}  ",
        "rgba({r}, {g}, 0, 0.5)",
        "{not closed",
        "}{",
        "{{nested}}",
        "",
    ])
    def test_segments_rebuild_the_value(self, value):
        assert join_segments(parse_mixed(value)) == value

    def test_segment_to_dict(self):
        alias, text = parse_mixed("{a}px")
        assert alias.to_dict() == {"kind": "alias", "name": "a"}
        assert text.to_dict() == {"kind": "text", "content": "px"}



class TestRenameReference:

    def test_mixed_value(self):
        assert rename_reference("calc({spacing.sm} * 2)", "spacing.sm", "spacing.small") == "calc({spacing.small} * 2)"

    def test_every_occurrence(self):
        assert rename_reference("{a} {b} {a}", "a", "c") == "{c} {b} {c}"

    def test_no_match_is_unchanged(self):
        assert rename_reference("{spacing.sm} 4px", "spacing", "x") == "{spacing.sm} 4px"
        assert rename_reference("", "a", "b") == ""

class TestClassifyValue:

    def test_kinds(self):
        assert classify_value("{color.red}") is ValueKind.ALIAS
        assert classify_value("calc({spacing.sm} + 4px)") is ValueKind.MIXED
        assert classify_value("{a}{b}") is ValueKind.MIXED
        assert classify_value("#ff0000") is ValueKind.PLAIN

    def test_has_alias_reference(self):
        assert has_alias_reference("1px solid {color.border}")
        assert not has_alias_reference("1px solid red")
