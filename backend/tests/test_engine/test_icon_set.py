"""Tests for the set consistency validator."""

from __future__ import annotations

import pytest

from iconforge.engine.icon_set import (
    analyze_icon_set,
    classify_style,
    extract_metaphor,
    metaphor_conflicts,
    set_recommendations,
    similar_metaphors,
    summarize_icon,
    validate_against_set,
)
from iconforge.models.icon_set import BrandGuidelines, IconSetStats, SetProfile, SiblingIcon, ValueRange
from iconforge.models.shapes import ShapeKind
from tests.conftest import FOLDER_ADD_SVG, VALID_RECT_SVG, make_rect


def _icon(stroke_width: float = 2, rx: float = 2, fill: str = "none") -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
        f'<rect x="4" y="4" width="16" height="16" rx="{rx:g}" stroke="#000000" '
        f'stroke-width="{stroke_width:g}" fill="{fill}"/></svg>'
    )


@pytest.fixture
def siblings() -> list[SiblingIcon]:
    return [
        SiblingIcon(svg=_icon(), name="folder_open"),
        SiblingIcon(svg=_icon(), name="save_document"),
        SiblingIcon(svg=_icon(), name="user_settings"),
    ]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class TestAnalyzeSet:
    def test_ranges(self, siblings):
        stats = analyze_icon_set(siblings)
        assert stats.stroke_weight == ValueRange(min=2, max=2, avg=2)
        assert stats.corner_radius.avg == 2
        assert stats.complexity.avg == 1
        assert stats.dominant_styles == ["outlined"]
        assert stats.icon_names == ["folder_open", "save_document", "user_settings"]

    def test_common_metaphors(self, siblings):
        stats = analyze_icon_set(siblings)
        assert stats.common_metaphors == ["folder", "save", "user"]

    def test_visual_language(self, siblings):
        # Outlined counts toward geometric
        assert analyze_icon_set(siblings).visual_language == "geometric"

    def test_zero_values_excluded(self):
        icons = [SiblingIcon(svg=VALID_RECT_SVG, name="a"), SiblingIcon(svg=FOLDER_ADD_SVG, name="b")]
        stats = analyze_icon_set(icons)
        # Only the rect carries a corner radius
        assert stats.corner_radius == ValueRange(min=2, max=2, avg=2)
        assert stats.complexity == ValueRange(min=1, max=3, avg=2)

    def test_empty_set(self):
        stats = analyze_icon_set([])
        assert stats.stroke_weight == ValueRange()
        assert stats.dominant_styles == []


class TestSummary:
    def test_summarize(self):
        summary = summarize_icon(FOLDER_ADD_SVG)
        assert summary.stroke_weight == 2
        assert summary.corner_radius == 0
        assert summary.complexity == 3
        assert summary.style == "outlined"

    def test_unparseable(self):
        assert summarize_icon("not an icon").complexity == 0

    def test_styles(self):
        assert classify_style([make_rect()]) == "outlined"
        assert classify_style([make_rect(fill="#000000", corner_radius=2)]) == "rounded"
        assert classify_style([make_rect(fill="#000000")]) == "geometric"

    def test_filled_without_stroke(self):
        shape = make_rect(fill="#000000").model_copy(update={"stroke": None})
        assert classify_style([shape]) == "filled"
        assert shape.kind == ShapeKind.RECT


# ---------------------------------------------------------------------------
# Candidate validation
# ---------------------------------------------------------------------------


class TestValidateAgainstSet:
    def test_matching_candidate(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(), stats)
        assert result.is_consistent
        assert result.consistency_score == 100
        assert result.visual_similarity == 100

    def test_heavy_stroke(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(stroke_width=4), stats)
        assert not result.is_consistent
        assert len(result.violations) == 1
        assert "stroke weight" in result.violations[0].lower()
        assert result.consistency_score == 85
        assert result.recommendations == ["Adjust stroke weight to 2.0dp"]
        assert result.visual_similarity == 80

    def test_within_tolerance(self, siblings):
        stats = analyze_icon_set(siblings)
        assert validate_against_set(_icon(stroke_width=2.5), stats).is_consistent

    def test_custom_tolerance(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(stroke_width=4), stats, SetProfile(stroke_tolerance=3))
        assert result.is_consistent

    def test_corner_radius(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(rx=6), stats)
        assert result.violations == ["Corner radius (6dp) differs from set average (2.0dp)"]

    def test_style_mismatch(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(fill="#000000"), stats)
        assert any(v.startswith("Visual style (rounded)") for v in result.violations)
        assert "Adjust to match outlined style" in result.recommendations

    def test_complexity(self, siblings):
        stats = analyze_icon_set(siblings)
        busy = VALID_RECT_SVG.replace(
            "</svg>",
            "".join(f'<line x1="{x}" y1="8" x2="{x}" y2="16"/>' for x in (6, 8, 10, 12, 14)) + "</svg>",
        )
        result = validate_against_set(busy, stats)
        assert "Simplify icon geometry" in result.recommendations

    def test_empty_set_compares_nothing(self):
        result = validate_against_set(_icon(stroke_width=4, rx=6), IconSetStats())
        assert result.is_consistent
        assert result.violations == []

    def test_brand_guidelines(self, siblings):
        stats = analyze_icon_set(siblings)
        profile = SetProfile(brand_guidelines=BrandGuidelines(stroke_weight=1.5, corner_radius=2, visual_style="outlined"))
        result = validate_against_set(_icon(), stats, profile)
        assert result.violations == ["Stroke weight doesn't match brand guidelines (1.5dp)"]

    def test_metaphor_conflict(self, siblings):
        stats = analyze_icon_set(siblings)
        result = validate_against_set(_icon(), stats, name="directory_tree")
        assert not result.is_consistent
        assert result.violations == []
        assert result.metaphor_conflicts == ['Similar to existing icon "folder_open" (folder)']


# ---------------------------------------------------------------------------
# Metaphors
# ---------------------------------------------------------------------------


class TestMetaphors:
    def test_known_word_wins(self):
        assert extract_metaphor("open_folder") == "folder"
        assert extract_metaphor("Quick Search") == "search"

    def test_first_word_fallback(self):
        assert extract_metaphor("part-structure") == "part"
        assert extract_metaphor("") is None
        assert extract_metaphor(None) is None

    def test_synonyms_are_symmetric(self):
        assert similar_metaphors("add", "plus")
        assert similar_metaphors("plus", "add")
        assert similar_metaphors("trash", "delete")
        assert not similar_metaphors("add", "delete")

    def test_conflicts(self):
        names = ["delete_part", "edit_bom", "trash_bin"]
        assert len(metaphor_conflicts("trash_can", names)) == 2
        assert metaphor_conflicts(None, names) == []


class TestSetRecommendations:
    def test_consistent_set(self, siblings):
        assert set_recommendations(analyze_icon_set(siblings)) == []

    def test_spread(self):
        stats = IconSetStats(
            stroke_weight=ValueRange(min=1, max=3, avg=2),
            corner_radius=ValueRange(min=0, max=4, avg=2),
            complexity=ValueRange(min=1, max=9, avg=4),
        )
        assert set_recommendations(stats) == [
            "Standardize stroke weights (current range: 1-3dp)",
            "Standardize corner radii (current range: 0-4dp)",
            "Balance icon complexity (current range: 1-9 elements)",
        ]

    def test_design_system_targets(self):
        stats = IconSetStats(
            stroke_weight=ValueRange(min=1.5, max=1.5, avg=1.5),
            corner_radius=ValueRange(min=2, max=2, avg=2),
            dominant_styles=["filled"],
        )
        assert set_recommendations(stats, "material") == ["Use 2dp stroke weight for Material Design consistency"]
        assert set_recommendations(stats, "carbon") == ["Use outlined style for Carbon Design consistency"]
