"""Tests for the Appearance parser."""

from figscript.domains.appearance import parse_appearance


# ---------------------------------------------------------------------------
# Visibility and opacity
# ---------------------------------------------------------------------------


class TestVisibilityOpacity:
    def test_collapsed(self):
        result = parse_appearance("visible, 100%")
        assert result.classes == ["visible", "opacity-100"]
        assert result.errors == []
        assert result.warnings == []

    def test_keyed(self):
        result = parse_appearance("visibility=hidden, opacity=opacity-25")
        assert result.classes == ["invisible", "opacity-25"]

    def test_keyed_braced_values(self):
        result = parse_appearance("visibility={visible}, opacity={50%}")
        assert result.classes == ["visible", "opacity-50"]
        assert result.errors == []

    def test_flag_visibility(self):
        result = parse_appearance("visible=FALSE, 40")
        assert result.classes == ["invisible", "opacity-40"]

    def test_off_step_opacity(self):
        result = parse_appearance("visible, 33%")
        assert result.classes == ["visible", "opacity-[0.33]"]

    def test_last_opacity_wins(self):
        result = parse_appearance("visible, 50%, 70%")
        assert result.classes == ["visible", "opacity-70"]
        assert any("defined multiple times" in w for w in result.warnings)

    def test_missing_visibility(self):
        result = parse_appearance("80%")
        assert result.classes == ["opacity-80"]
        assert result.errors == ['Appearance "visibility" is required. Defaulting to visible.']

    def test_missing_opacity_defaults(self):
        result = parse_appearance("visible")
        assert result.classes == ["visible", "opacity-100"]
        assert len(result.errors) == 1
        assert "opacity" in result.errors[0]

    def test_invalid_opacity(self):
        result = parse_appearance("visible, 150%")
        assert any("Invalid opacity" in e for e in result.errors)
        assert "opacity-100" in result.classes

    def test_invalid_visibility(self):
        result = parse_appearance("visibility=ghostly, 100%")
        assert any("Invalid visibility" in e for e in result.errors)


# ---------------------------------------------------------------------------
# Corner radius
# ---------------------------------------------------------------------------


class TestCornerRadius:
    def test_uniform(self):
        result = parse_appearance("hidden, 50%, corner-12px")
        assert result.classes == ["invisible", "opacity-50", "rounded-[12px]"]

    def test_keyed_bundle_with_markers(self):
        result = parse_appearance(
            "visibility=visible, opacity=80%, corner-radius=(↖️4px, ↘️8px)"
        )
        assert result.classes == ["visible", "opacity-80", "rounded-tl-[4px]", "rounded-br-[8px]"]
        assert result.errors == []

    def test_bare_bundle(self):
        result = parse_appearance("visible, 100%, corner(tl-4px, bottom-right-8px)")
        assert result.classes[-2:] == ["rounded-tl-[4px]", "rounded-br-[8px]"]

    def test_bare_corner_prefix(self):
        result = parse_appearance("visible, 100%, tr-6px")
        assert result.classes[-1] == "rounded-tr-[6px]"

    def test_all_clears_corners(self):
        result = parse_appearance("visible, 100%, tl-4px, corner-8px")
        assert result.classes == ["visible", "opacity-100", "rounded-[8px]"]
        assert any("redefined" in w for w in result.warnings)

    def test_corner_replaces_all(self):
        result = parse_appearance("visible, 100%, corner-8px, br-2px")
        assert result.classes == ["visible", "opacity-100", "rounded-br-[2px]"]

    def test_repeated_corner_warns(self):
        result = parse_appearance("visible, 100%, tl-4px, tl-6px")
        assert result.classes[-1] == "rounded-tl-[6px]"
        assert any("defined multiple times" in w for w in result.warnings)

    def test_invalid_radius(self):
        result = parse_appearance("visible, 100%, corner-radius=big")
        assert any("Invalid corner radius" in e for e in result.errors)

    def test_smoothing_ignored(self):
        result = parse_appearance("visible, 100%, corner-smoothing-60%")
        assert result.classes == ["visible", "opacity-100"]
        assert any("no CSS equivalent" in w for w in result.warnings)


def test_empty_input_applies_defaults():
    for raw in (None, "", "  "):
        result = parse_appearance(raw)
        assert result.classes == []
        assert result.errors == []
        assert len(result.warnings) == 1
        assert "Defaults applied" in result.warnings[0]


def test_unknown_token_warns():
    result = parse_appearance("visible, 100%, glow")
    assert any('"glow"' in w for w in result.warnings)
