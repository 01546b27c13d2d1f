"""Tests for the engine facade and settings."""

from iconforge.config import Settings, get_settings
from iconforge.main import ComplianceEngine, EvaluationReport, create_engine
from iconforge.models.icon_set import SiblingIcon
from tests.conftest import THICK_RECT_SVG, VALID_RECT_SVG


def test_default_settings():
    settings = get_settings()
    assert settings.iconforge_profile == "generic"
    assert settings.max_generation_attempts == 2
    assert settings.preview_sizes == [16, 20, 24, 32, 48]


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ICONFORGE_PROFILE", "windchill")
    monkeypatch.setenv("MAX_GENERATION_ATTEMPTS", "4")
    settings = Settings()
    assert settings.iconforge_profile == "windchill"
    assert settings.max_generation_attempts == 4


def test_create_engine():
    engine = create_engine()
    assert isinstance(engine, ComplianceEngine)
    assert engine.profile.name == "generic"
    assert engine.preview_sizes == [16, 20, 24, 32, 48]


def test_create_engine_with_settings():
    engine = create_engine(Settings(iconforge_profile="windchill", max_generation_attempts=3))
    assert engine.profile.name == "windchill"
    assert engine.max_attempts == 3


def test_evaluate_valid_icon():
    report = create_engine().evaluate(VALID_RECT_SVG, description="A box", name="box")
    assert isinstance(report, EvaluationReport)
    assert report.is_valid
    assert report.viewbox == "0 0 24 24"
    assert len(report.shapes) == 1
    assert report.geometry.score == 100
    assert report.preview.overall_score == 100
    assert report.directive is None


def test_evaluate_invalid_icon():
    report = create_engine().evaluate(THICK_RECT_SVG)
    assert not report.is_valid
    assert report.directive is not None
    assert report.directive.attempt == 2


def test_generate_repairs_with_auto_fix():
    engine = create_engine()
    outcome = engine.generate("a box", lambda prompt, directive: THICK_RECT_SVG)
    assert outcome.accepted
    assert outcome.attempts == 1


def test_check_against_set():
    engine = create_engine()
    siblings = [SiblingIcon(svg=VALID_RECT_SVG, name="box"), SiblingIcon(svg=VALID_RECT_SVG, name="crate")]
    result = engine.check_against_set(THICK_RECT_SVG.replace('stroke-width="3"', 'stroke-width="4"'), siblings)
    assert not result.is_consistent



def test_compliance_enforces_metadata_enumerations():
    metadata = {
        "domain": "bogus",
        "function": "add_workspace",
        "userRole": "nobody",
        "iconType": "weird",
        "description": "Creates a new workspace",
    }
    engine = create_engine()
    assert engine.profile.name == "generic"
    result = engine.check_compliance(VALID_RECT_SVG, metadata)
    assert result.profile == "windchill"
    assert not result.is_valid
    assert [i.message for i in result.issues_for("semantics.metadata")] == [
        "Invalid domain: bogus",
        "Invalid user role: nobody",
        "Invalid icon type: weird",
    ]


def test_compliance_profile_from_settings():
    engine = create_engine(Settings(iconforge_compliance_profile="generic"))
    metadata = {"domain": "bogus", "function": "box", "userRole": "x", "iconType": "y"}
    result = engine.check_compliance(VALID_RECT_SVG, metadata)
    assert result.issues_for("semantics.metadata") == []
