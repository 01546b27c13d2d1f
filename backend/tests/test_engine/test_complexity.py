"""Tests for the complexity scorer."""

from __future__ import annotations

import pytest

from iconforge.engine.complexity import (
    WEIGHTS,
    analyze_complexity,
    assess_quality,
    match_design_system,
    simplification_suggestions,
)
from iconforge.models.shapes import DecorationKind, Role
from iconforge.svg.parser import extract_shapes
from tests.conftest import SETTINGS_PATH_SVG, SPARKLES_SVG, VALID_RECT_SVG, make_path, make_rect

DESCRIPTION = "A rounded square representing a container"


def _alt_types(analysis) -> list[str]:
    return [a.type for a in analysis.alternatives]


class TestScoring:
    def test_simple_icon_is_low(self):
        analysis = analyze_complexity(extract_shapes(VALID_RECT_SVG), description=DESCRIPTION)
        assert analysis.score == 0
        assert analysis.rating == "low"
        assert analysis.flags == []
        assert not analysis.recommend_simplification

    def test_missing_description_counts(self):
        shapes = extract_shapes(VALID_RECT_SVG)
        with_desc = analyze_complexity(shapes, description=DESCRIPTION)
        without = analyze_complexity(shapes)
        assert without.score == pytest.approx(with_desc.score + 0.3 * WEIGHTS["metaphor_clarity"])
        short = analyze_complexity(shapes, description="box")
        assert short.score == without.score

    def test_factors_are_normalized(self):
        analysis = analyze_complexity(extract_shapes(SETTINGS_PATH_SVG))
        assert set(analysis.factors) == set(WEIGHTS)
        assert all(0.0 <= v <= 1.0 for v in analysis.factors.values())
        assert 0.0 <= analysis.score <= 1.0

    def test_weights_sum_to_one(self):
        assert sum(WEIGHTS.values()) == pytest.approx(1.0)

    def test_busy_icon_is_high(self):
        # Seven tiny overlapping primaries: every factor fires
        shapes = [make_rect(4 + i, 4 + i, 1, 1 + 10 * (i % 2), element_id=f"E{i}") for i in range(7)]
        shapes += [
            make_rect(3, 3, 2, 2, role=Role.DECORATION, decoration_kind=DecorationKind.DOT, element_id=f"D{i}")
            for i in range(5)
        ]
        curvy = "M2 2 " + "C4 4 6 6 8 8 " * 45
        shapes.append(make_path(curvy, element_id="P1"))
        analysis = analyze_complexity(shapes)
        assert analysis.rating == "high"
        assert analysis.recommend_simplification
        assert "Excessive element count" in analysis.flags
        assert "Stroke paths too complex" in analysis.flags
        assert _alt_types(analysis) == ["simplified", "material_style", "carbon_style", "custom_refinement"]
        assert analysis.feedback[0].type == "error"

    def test_idempotent(self):
        shapes = extract_shapes(SETTINGS_PATH_SVG)
        assert analyze_complexity(shapes) == analyze_complexity(shapes)

    def test_order_independent(self):
        shapes = extract_shapes(SPARKLES_SVG)
        assert analyze_complexity(shapes).score == analyze_complexity(list(reversed(shapes))).score


class TestMonotonic:
    def test_adding_main_shapes_never_lowers_score(self):
        shapes = [make_rect(4, 4, 4, 4, role=Role.SUPPORTING, element_id="E0")]
        previous = analyze_complexity(shapes, description=DESCRIPTION).score
        for i in range(1, 9):
            x, y = 4 + 5 * (i % 3), 4 + 5 * (i // 3)
            shapes.append(make_rect(x, y, 4, 4, role=Role.SUPPORTING, element_id=f"E{i}"))
            score = analyze_complexity(shapes, description=DESCRIPTION).score
            assert score >= previous
            previous = score
        assert previous > 0


class TestFlags:
    def test_two_primaries_is_at_least_medium(self):
        shapes = [make_rect(4, 4, 6, 6, element_id="E1"), make_rect(14, 14, 6, 6, element_id="E2")]
        analysis = analyze_complexity(shapes, description=DESCRIPTION)
        assert "Multiple competing metaphors" in analysis.flags
        assert analysis.rating in ("medium", "high")
        assert any("primary metaphor" in f.message for f in analysis.feedback)

    def test_no_primary(self):
        shapes = [make_rect(role=Role.SUPPORTING)]
        assert "No clear primary element" in analyze_complexity(shapes).flags

    def test_too_many_main_elements(self):
        shapes = [make_rect(2 + 5 * i, 4, 4, 4, element_id=f"E{i}") for i in range(4)]
        flags = analyze_complexity(shapes).flags
        assert "Too many main elements" in flags
        assert "Excessive element count" not in flags

    def test_small_elements(self):
        flags = analyze_complexity([make_rect(4, 4, 16, 1)]).flags
        assert "Elements too small for 16dp scaling" in flags

    def test_insufficient_whitespace(self):
        analysis = analyze_complexity([make_rect(1, 1, 22, 22)])
        assert "Insufficient whitespace" in analysis.flags
        assert any("whitespace" in f.message for f in analysis.feedback)

    def test_overlapping_elements(self):
        shapes = [make_rect(4 + i, 4 + i, 10, 10, element_id=f"E{i}") for i in range(3)]
        assert "Too many overlapping elements" in analyze_complexity(shapes).flags

    def test_flags_unique(self):
        flags = analyze_complexity(extract_shapes(SETTINGS_PATH_SVG)).flags
        assert len(flags) == len(set(flags))

    def test_empty_shape_set(self):
        analysis = analyze_complexity([])
        assert analysis.flags == ["No clear primary element"]
        assert analysis.rating == "low"


class TestAlternatives:
    def test_custom_refinement_always_offered(self):
        analysis = analyze_complexity(extract_shapes(VALID_RECT_SVG), description=DESCRIPTION)
        assert _alt_types(analysis) == ["custom_refinement"]
        assert analysis.alternatives[0].confidence == 0.7

    def test_design_system_suggestions_above_low(self):
        shapes = [make_rect(4, 4, 6, 6, element_id="E1"), make_rect(4, 4, 6, 1, element_id="E2")]
        shapes += [make_rect(12, 12, 2, 2, element_id=f"E{i}") for i in range(3, 6)]
        analysis = analyze_complexity(shapes, name="add_folder")
        assert 0.4 < analysis.score <= 0.7
        assert _alt_types(analysis) == ["material_style", "carbon_style", "custom_refinement"]
        material, carbon = analysis.alternatives[0], analysis.alternatives[1]
        assert material.reference == "add_circle_outline"
        assert carbon.reference == "add"

    def test_match_design_system(self):
        assert match_design_system("delete-user") == {"material": "delete_outline", "carbon": "trash-can"}
        assert match_design_system("rocket") == {}
        assert match_design_system(None) == {}


class TestQuality:
    def test_clean_icon_scores_full(self):
        metrics = assess_quality(extract_shapes(VALID_RECT_SVG))
        assert (metrics.clarity, metrics.consistency, metrics.scalability, metrics.accessibility) == (50, 50, 50, 50)
        assert metrics.total == 200

    def test_mixed_strokes_lose_consistency(self):
        metrics = assess_quality([make_rect(), make_rect(stroke_width=3, element_id="E2")])
        assert metrics.consistency == 0

    def test_small_shape_loses_scalability(self):
        metrics = assess_quality([make_rect(4, 4, 3, 3)])
        assert metrics.scalability == 25

    def test_non_black_stroke(self):
        assert assess_quality([make_rect(color="#333333")]).accessibility == 0

    def test_empty(self):
        assert assess_quality([]).total == 0


class TestSimplification:
    def test_suggestions(self):
        suggestions = simplification_suggestions(extract_shapes(SPARKLES_SVG))
        types = [s.type for s in suggestions]
        assert types[0] == "remove_decorations"
        assert "Remove 5 decorative elements" == suggestions[0].description
        assert types[-1] == "simplify_paths"

    def test_always_suggest_path_simplification(self):
        assert [s.type for s in simplification_suggestions([make_rect()])] == ["simplify_paths"]
