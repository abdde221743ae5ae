"""Tests for band partition checks, classification and presets."""

import pytest

from app.core.scoring.bands import check_band_partition, classify
from app.core.scoring.errors import ComputationError, ConfigurationError
from app.core.scoring.presets import (
    PRESET_RANGES,
    default_custom_bands,
    get_preset_bands,
    list_presets,
)
from app.core.scoring.types import Band, Question, QuestionType, Section, Template


def _band(name: str, low: float, high: float) -> Band:
    return Band(name=name, min_score=low, max_score=high, feedback=f"{name} feedback")


@pytest.fixture
def traffic_light():
    return [_band("red", 0, 40), _band("orange", 40, 70), _band("green", 70, 100)]


# =============================================================================
# Partition checks
# =============================================================================


class TestCheckBandPartition:
    def test_valid_partition(self, traffic_light):
        assert check_band_partition(traffic_light) == []

    def test_order_does_not_matter(self, traffic_light):
        assert check_band_partition(list(reversed(traffic_light))) == []

    def test_no_bands(self):
        assert check_band_partition([]) == ["Template has no scoring bands"]

    def test_gap(self):
        issues = check_band_partition([_band("low", 0, 40), _band("high", 50, 100)])

        assert len(issues) == 1
        assert "Gap" in issues[0]

    def test_overlap(self):
        issues = check_band_partition([_band("low", 0, 60), _band("high", 50, 100)])

        assert len(issues) == 1
        assert "overlap" in issues[0]

    def test_must_start_at_zero(self):
        issues = check_band_partition([_band("low", 10, 50), _band("high", 50, 100)])

        assert any("expected 0" in issue for issue in issues)

    def test_non_finite_bounds(self):
        issues = check_band_partition([_band("low", float("nan"), 50), _band("high", 50, 100)])

        assert len(issues) == 1
        assert "non-finite" in issues[0]

    def test_must_end_at_hundred(self):
        issues = check_band_partition([_band("low", 0, 50), _band("high", 50, 95)])

        assert any("expected 100" in issue for issue in issues)

    def test_empty_band(self):
        issues = check_band_partition(
            [_band("low", 0, 50), _band("empty", 50, 50), _band("high", 50, 100)]
        )

        assert any("empty range" in issue for issue in issues)

    def test_duplicate_names(self):
        issues = check_band_partition([_band("same", 0, 50), _band("same", 50, 100)])

        assert issues == ["Duplicate band name 'same'"]

    def test_template_with_gap_cannot_be_constructed(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Template(
                id="tpl",
                sections=[Section(id="s1", category="general", questions=[
                    Question(id="q", type=QuestionType.BOOLEAN),
                ])],
                bands=[_band("low", 0, 40), _band("high", 50, 100)],
            )

        assert any("Gap" in issue for issue in exc_info.value.issues)


# =============================================================================
# Classification
# =============================================================================


class TestClassify:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0, "red"),
            (39.9, "red"),
            (40, "orange"),
            (69.99, "orange"),
            (70, "green"),
            (100, "green"),
        ],
    )
    def test_boundaries(self, traffic_light, score, expected):
        assert classify(score, traffic_light).name == expected

    def test_unsorted_bands(self, traffic_light):
        assert classify(55, list(reversed(traffic_light))).name == "orange"

    def test_returns_band_with_feedback(self, traffic_light):
        band = classify(85, traffic_light)

        assert band.feedback == "green feedback"

    @pytest.mark.parametrize("score", [-0.1, 100.1, float("nan")])
    def test_out_of_range(self, traffic_light, score):
        with pytest.raises(ComputationError):
            classify(score, traffic_light)


# =============================================================================
# Presets
# =============================================================================


class TestPresets:
    def test_available_presets(self):
        assert list_presets() == ["beginner", "intermediate", "advanced", "professional"]

    @pytest.mark.parametrize("name", list(PRESET_RANGES))
    def test_every_preset_partitions_the_scale(self, name):
        assert check_band_partition(get_preset_bands(name)) == []

    def test_default_custom_bands_partition_the_scale(self):
        assert check_band_partition(default_custom_bands()) == []

    def test_advanced_ranges(self):
        bands = get_preset_bands("Advanced")

        assert [(b.color, b.min_score, b.max_score) for b in bands] == [
            ("red", 0, 60),
            ("orange", 60, 85),
            ("green", 85, 100),
        ]
        assert [b.name for b in bands] == ["Needs Improvement", "Good", "Excellent"]

    def test_presets_return_fresh_copies(self):
        first = get_preset_bands("beginner")
        first[0].feedback = "changed"

        assert get_preset_bands("beginner")[0].feedback != "changed"

    def test_unknown_preset(self):
        with pytest.raises(ConfigurationError, match="Unknown band preset"):
            get_preset_bands("olympian")
