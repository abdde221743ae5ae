"""Tests for app.core.scoring.band_editor: preset / custom band authoring."""

import pytest

from app.core.scoring.band_editor import BandEditor, BandSelection
from app.core.scoring.errors import ConfigurationError
from app.core.scoring.presets import CUSTOM, default_custom_bands, get_preset_bands
from app.core.scoring.types import Band, Question, QuestionType, Section, Template


def _ranges(bands: list[Band]) -> list[tuple[float, float]]:
    return [(b.min_score, b.max_score) for b in bands]


@pytest.fixture
def template():
    return Template(
        id="tpl",
        sections=[Section(id="s1", category="general", questions=[
            Question(id="q", type=QuestionType.BOOLEAN),
        ])],
        bands=get_preset_bands("beginner"),
    )


class TestSelection:
    def test_new_editor_starts_on_default_custom_bands(self):
        editor = BandEditor()

        assert editor.active == CUSTOM
        assert editor.bands == default_custom_bands()

    def test_default_preset_comes_from_settings(self, override_settings):
        override_settings(DEFAULT_BAND_PRESET="Intermediate")

        editor = BandEditor()

        assert editor.active == "intermediate"
        assert _ranges(editor.bands) == [(0, 50), (50, 80), (80, 100)]

    def test_select_preset_replaces_active_bands(self):
        editor = BandEditor()

        editor.select_preset("professional")

        assert editor.active == "professional"
        assert _ranges(editor.bands) == [(0, 75), (75, 90), (90, 100)]

    def test_unknown_preset_leaves_selection_alone(self):
        editor = BandEditor()

        with pytest.raises(ConfigurationError):
            editor.select_preset("elite")

        assert editor.active == CUSTOM

    def test_switching_back_to_custom_restores_edits(self):
        editor = BandEditor()
        editor.update_band("Good", feedback="Solid week, keep it up.")

        editor.select_preset("beginner")
        restored = editor.select_custom()

        good = next(b for b in restored if b.name == "Good")
        assert good.feedback == "Solid week, keep it up."
        assert editor.is_custom

    def test_selecting_presets_repeatedly_keeps_custom_snapshot(self):
        editor = BandEditor()
        editor.update_band("Excellent", min_score=90)
        editor.update_band("Good", max_score=90)

        editor.select_preset("beginner")
        editor.select_preset("advanced")
        editor.select_custom()

        assert _ranges(editor.bands) == [(0, 50), (50, 90), (90, 100)]


class TestEditing:
    def test_editing_a_preset_forks_it_into_custom(self):
        editor = BandEditor()
        editor.select_preset("advanced")

        updated = editor.update_band("Excellent", feedback="Elite consistency")

        assert editor.active == CUSTOM
        assert updated.feedback == "Elite consistency"
        assert _ranges(editor.custom_bands) == [(0, 60), (60, 85), (85, 100)]

    def test_unknown_band_name(self):
        editor = BandEditor()
        editor.select_preset("advanced")

        with pytest.raises(ConfigurationError, match="No band named"):
            editor.update_band("Legendary", feedback="x")

        assert editor.active == "advanced"

    def test_unknown_field(self):
        editor = BandEditor()

        with pytest.raises(ConfigurationError, match="Unknown band field"):
            editor.update_band("Good", colour="blue")

    def test_replace_custom_bands_sorts_and_activates(self):
        editor = BandEditor()
        editor.select_preset("beginner")

        editor.replace_custom_bands([
            Band(name="pass", min_score=60, max_score=100),
            Band(name="fail", min_score=0, max_score=60),
        ])

        assert editor.active == CUSTOM
        assert [b.name for b in editor.bands] == ["fail", "pass"]

    def test_check_reports_partition_problems(self):
        editor = BandEditor()

        editor.update_band("Good", min_score=60)

        assert editor.check()


class TestPersistence:
    def test_snapshot_round_trip(self):
        editor = BandEditor()
        editor.update_band("Needs Improvement", feedback="Let's talk this week.")
        editor.select_preset("intermediate")

        reloaded = BandEditor(BandSelection.model_validate_json(editor.snapshot().model_dump_json()))

        assert reloaded.active == "intermediate"
        assert reloaded.custom_bands == editor.custom_bands

    def test_snapshot_is_a_copy(self):
        editor = BandEditor()

        snapshot = editor.snapshot()
        snapshot.custom_bands[0].feedback = "mutated"

        assert editor.custom_bands[0].feedback != "mutated"


class TestApply:
    def test_apply_swaps_template_bands(self, template):
        editor = BandEditor()
        editor.select_preset("professional")

        updated = editor.apply(template)

        assert _ranges(updated.bands) == [(0, 75), (75, 90), (90, 100)]
        assert updated.id == template.id
        assert _ranges(template.bands) == [(0, 40), (40, 70), (70, 100)]

    def test_apply_rejects_invalid_custom_bands(self, template):
        editor = BandEditor()
        editor.update_band("Good", min_score=60)

        with pytest.raises(ConfigurationError):
            editor.apply(template)
