"""Tests for the Position parser."""

import pytest

from figscript.domains.position import DEFAULT_Z_CLASS, parse_position


# ---------------------------------------------------------------------------
# Detachment
# ---------------------------------------------------------------------------


class TestDetached:
    def test_detached_with_rotation(self):
        result = parse_position("ignore-auto-layout=TRUE,rotation=r-90")
        assert result.is_fixed is True
        assert result.classes == ["fixed", DEFAULT_Z_CLASS, "rotate-90"]
        assert result.errors == []

    def test_explicit_z_suppresses_default(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, z-10")
        assert result.classes == ["fixed", "z-10"]

    def test_marker_detaches(self):
        result = parse_position("↔️, r-0, h-stretch, align-bottom")
        assert result.is_fixed
        assert result.classes == ["fixed", "z-50", "left-0", "right-0", "bottom-0"]
        assert result.errors == []

    def test_centering_pairs_translate(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, align-h-center, v-center")
        assert result.classes == [
            "fixed",
            "z-50",
            "left-1/2",
            "-translate-x-1/2",
            "top-1/2",
            "-translate-y-1/2",
        ]

    def test_offsets(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, x-24, y=-8px")
        assert "left-[24px]" in result.classes
        assert "top-[-8px]" in result.classes

    def test_keyed_braced_values(self):
        result = parse_position("ignore-auto-layout={TRUE}, rotation={r-0}, x={24}, y={-8px}, z={10}")
        assert result.is_fixed is True
        assert result.classes[:2] == ["fixed", "z-10"]
        assert "left-[24px]" in result.classes
        assert "top-[-8px]" in result.classes
        assert result.errors == []

    def test_scale_constraints(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, constraints={h-scale, v-scale}")
        assert result.classes[-2:] == ["w-full", "h-full"]

    def test_keyed_alignment_list(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, align={left, top}")
        assert result.classes[-2:] == ["left-0", "top-0"]

    def test_later_anchor_wins(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, align-left, align-right")
        assert "right-0" in result.classes
        assert "left-0" not in result.classes


class TestNotDetached:
    def test_detached_only_tokens_rejected(self):
        result = parse_position("ignore-auto-layout=FALSE, r-0, align-left, x-10")
        assert result.is_fixed is False
        assert result.classes == []
        assert len(result.errors) == 2
        assert all("ignore-auto-layout=TRUE" in e for e in result.errors)

    def test_z_adds_relative(self):
        result = parse_position("ignore-auto-layout=FALSE, r-0, z-20")
        assert result.classes == ["relative", "z-20"]
        assert any("relative" in w for w in result.warnings)

    def test_rotation_kept(self):
        result = parse_position("ignore-auto-layout=FALSE, r-45")
        assert result.classes == ["rotate-[45deg]"]
        assert result.errors == []


# ---------------------------------------------------------------------------
# Rotation and flips
# ---------------------------------------------------------------------------


class TestRotation:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("r-90", ["rotate-90"]),
            ("r-180", ["rotate-180"]),
            ("r-270", ["-rotate-90"]),
            ("r--90", ["-rotate-90"]),
            ("r-450", ["rotate-90"]),
            ("r-45.5", ["rotate-[45.5deg]"]),
            ("r-30deg", ["rotate-[30deg]"]),
            ("r-405", ["rotate-[45deg]"]),
            ("r--45", ["rotate-[315deg]"]),
            ("r-0", []),
            ("r-360", []),
        ],
    )
    def test_angles(self, token, expected):
        result = parse_position(f"ignore-auto-layout=FALSE, {token}")
        assert result.classes == expected
        assert result.errors == []

    def test_flips_count_as_rotation(self):
        result = parse_position("ignore-auto-layout=FALSE, rotation={flip-h, flip-v}")
        assert result.classes == ["scale-x-[-1]", "scale-y-[-1]"]
        assert result.errors == []

    def test_invalid_rotation(self):
        result = parse_position("ignore-auto-layout=FALSE, r-abc")
        assert any("Invalid rotation" in e for e in result.errors)
        assert any('"rotation" is required' in e for e in result.errors)

    def test_last_rotation_wins(self):
        result = parse_position("ignore-auto-layout=FALSE, r-90, r-180")
        assert result.classes == ["rotate-180"]
        assert any("defined multiple times" in w for w in result.warnings)


# ---------------------------------------------------------------------------
# z-order
# ---------------------------------------------------------------------------


class TestZOrder:
    @pytest.mark.parametrize(
        "token, expected",
        [("z-0", "z-0"), ("z-auto", "z-auto"), ("z=40", "z-40"), ("z-100", "z-[100]"), ("z--1", "z-[-1]")],
    )
    def test_values(self, token, expected):
        result = parse_position(f"ignore-auto-layout=TRUE, r-0, {token}")
        assert result.classes == ["fixed", expected]

    def test_invalid(self):
        result = parse_position("ignore-auto-layout=TRUE, r-0, z-high")
        assert result.classes == ["fixed", "z-50"]
        assert any("Invalid z-order" in e for e in result.errors)


# ---------------------------------------------------------------------------
# Required fields and diagnostics
# ---------------------------------------------------------------------------


class TestRequired:
    def test_empty(self):
        result = parse_position(None)
        assert result.classes == []
        assert result.is_fixed is False
        assert len(result.errors) == 2

    def test_invalid_flag(self):
        result = parse_position("ignore-auto-layout=maybe, r-0")
        assert any("Invalid ignore-auto-layout" in e for e in result.errors)

    def test_duplicate_flag_warns(self):
        result = parse_position("ignore-auto-layout=FALSE, r-0, ignore-auto-layout=TRUE")
        assert result.is_fixed
        assert any("defined multiple times" in w for w in result.warnings)

    def test_unknown_token_warns(self):
        result = parse_position("ignore-auto-layout=FALSE, r-0, wobble")
        assert any('"wobble"' in w for w in result.warnings)
        assert result.errors == []
