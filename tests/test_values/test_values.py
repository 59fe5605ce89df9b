"""Tests for the shared value grammars."""

import pytest

from figscript.parser.numeric import NumericLiteral, Unit
from figscript.parser.values import (
    color_class,
    expand,
    looks_like_color,
    match_prefix,
    normalize_marker,
    opacity_class,
    parse_flag,
    parse_percent,
    parse_pixels,
    pixel_class,
    split_annotation,
    strip_quotes,
    unwrap,
)


# ---------------------------------------------------------------------------
# Markers and annotations
# ---------------------------------------------------------------------------


class TestMarkers:
    def test_variation_selector_removed(self):
        assert normalize_marker("↔️") == "↔"
        assert normalize_marker(" ✂️ ") == "✂"

    def test_annotation_split(self):
        assert split_annotation("TRUE(✂)") == ("TRUE", "✂")
        assert split_annotation("center( 🔯 )") == ("center", "🔯")

    def test_plain_text_has_no_annotation(self):
        assert split_annotation("plain") == ("plain", None)


class TestUnwrap:
    def test_single_value_braces(self):
        assert unwrap("{10px}") == "10px"
        assert unwrap("( center )") == "center"

    def test_only_one_group_removed(self):
        assert unwrap("{{a}}") == "{a}"

    def test_annotation_kept(self):
        assert unwrap("TRUE(✂️)") == "TRUE(✂️)"
        assert unwrap("{TRUE(✂️)}") == "TRUE(✂️)"


class TestExpand:
    def test_braces(self):
        assert expand("{a, b}") == ["a", "b"]

    def test_parens(self):
        assert expand("(a,b)") == ["a", "b"]

    def test_unwrapped(self):
        assert expand("a, b") == ["a", "b"]

    def test_single(self):
        assert expand("r-90") == ["r-90"]


class TestMatchPrefix:
    def test_longest_wins(self):
        table = {"w-": "w", "min-w-": "min-w"}
        assert match_prefix("min-w-10px", table) == ("min-w", "10px")
        assert match_prefix("w-10px", table) == ("w", "10px")

    def test_no_match(self):
        assert match_prefix("gap-1px", {"w-": 1}) is None


# ---------------------------------------------------------------------------
# Flags, pixels and opacity
# ---------------------------------------------------------------------------


class TestParseFlag:
    @pytest.mark.parametrize("text", ["TRUE", "true", "TRUE(✂️)", "yes", "On"])
    def test_true(self, text):
        assert parse_flag(text) is True

    @pytest.mark.parametrize("text", ["FALSE", "false", "no", "off"])
    def test_false(self, text):
        assert parse_flag(text) is False

    def test_marker_is_true(self):
        assert parse_flag("↔️", markers=("↔",)) is True

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_flag("maybe")


class TestPixels:
    def test_pixel_value(self):
        assert parse_pixels("10px") == NumericLiteral(10.0, Unit.PIXELS)

    def test_unitless_needs_opt_in(self):
        with pytest.raises(ValueError):
            parse_pixels("10")
        assert parse_pixels("10", allow_unitless=True).magnitude == 10

    def test_negative_needs_opt_in(self):
        with pytest.raises(ValueError):
            parse_pixels("-5px")
        assert parse_pixels("-5px", allow_negative=True).magnitude == -5

    def test_wrong_unit(self):
        with pytest.raises(ValueError):
            parse_pixels("10deg")

    def test_pixel_class(self):
        assert pixel_class("w", NumericLiteral(100.0, Unit.PIXELS)) == "w-[100px]"
        assert pixel_class("top", NumericLiteral(-8.0, Unit.PIXELS)) == "top-[-8px]"


class TestPercent:
    @pytest.mark.parametrize("text", ["50", "50%", "opacity-50", "bg-opacity-50", "border-opacity-50"])
    def test_spellings(self, text):
        assert parse_percent(text).magnitude == 50

    @pytest.mark.parametrize("text", ["150%", "-1", "10px", "half"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_percent(text)

    def test_step_class(self):
        assert opacity_class("opacity", NumericLiteral(50.0)) == "opacity-50"
        assert opacity_class("bg-opacity", NumericLiteral(0.0)) == "bg-opacity-0"

    def test_off_step_class(self):
        assert opacity_class("opacity", NumericLiteral(33.0)) == "opacity-[0.33]"
        assert opacity_class("opacity", NumericLiteral(12.5)) == "opacity-[0.125]"

    @pytest.mark.parametrize("step", [0, 5, 10, 20, 25, 30, 40, 50, 60, 70, 75, 80, 90, 95, 100])
    def test_safelisted_steps(self, step):
        assert opacity_class("opacity", NumericLiteral(float(step))) == f"opacity-{step}"

    @pytest.mark.parametrize("value, expected", [(15, "opacity-[0.15]"), (35, "opacity-[0.35]"), (85, "opacity-[0.85]")])
    def test_multiples_of_five_outside_safelist(self, value, expected):
        assert opacity_class("opacity", NumericLiteral(float(value))) == expected


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------


class TestColor:
    def test_hex(self):
        assert color_class("#abc", "bg") == "bg-[#abc]"
        assert color_class("#1E293B", "border") == "border-[#1E293B]"

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            color_class("#abcd", "bg")

    def test_tailwind_name(self):
        assert color_class("tailwind-red-500", "bg") == "bg-red-500"

    def test_layer(self):
        assert color_class("layer-1", "bg") == "bg-layer-1"

    def test_ready_made_passes_through(self):
        assert color_class("bg-red-500", "bg") == "bg-red-500"

    def test_alias_rewritten(self):
        assert color_class("bg-red-500", "border", ("bg",)) == "border-red-500"

    def test_unsupported(self):
        with pytest.raises(ValueError):
            color_class("red", "bg")

    def test_detection_skips_opacity_utilities(self):
        assert looks_like_color("bg-red-500", "bg")
        assert not looks_like_color("bg-opacity-50", "bg")
        assert looks_like_color("#fff", "border")


def test_strip_quotes():
    assert strip_quotes("'a'") == "a"
    assert strip_quotes('"a"') == "a"
    assert strip_quotes("'a\"") == "'a\""
