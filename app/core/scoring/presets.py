"""Named band presets offered in the template editor.

Presets are immutable. Each one splits [0, 100] into three bands: red
(needs improvement), orange (good) and green (excellent). Bump
PRESETS_VERSION whenever a range changes so stored templates can tell which
table their bands came from.
"""

from app.core.scoring.errors import ConfigurationError
from app.core.scoring.types import Band

PRESETS_VERSION = 1

CUSTOM = "custom"

# (color, default band name, default feedback), lowest band first
BAND_LEVELS = (
    ("red", "Needs Improvement", "Additional focus and effort required."),
    ("orange", "Good", "Good progress, keep working on improvements."),
    ("green", "Excellent", "Outstanding performance!"),
)

# name -> (min_score, max_score) per level, lowest band first
PRESET_RANGES: dict[str, tuple[tuple[float, float], ...]] = {
    "beginner": ((0, 40), (40, 70), (70, 100)),
    "intermediate": ((0, 50), (50, 80), (80, 100)),
    "advanced": ((0, 60), (60, 85), (85, 100)),
    "professional": ((0, 75), (75, 90), (90, 100)),
}

PRESET_DESCRIPTIONS = {
    "beginner": "For individuals starting their journey",
    "intermediate": "For individuals with established habits seeking improvement",
    "advanced": "For experienced individuals with high standards",
    "professional": "For elite athletes and professionals requiring strict adherence",
}

DEFAULT_CUSTOM_RANGES = ((0, 50), (50, 85), (85, 100))


def _build_bands(ranges: tuple[tuple[float, float], ...]) -> list[Band]:
    return [
        Band(
            name=name,
            color=color,
            min_score=low,
            max_score=high,
            feedback=feedback,
        )
        for (color, name, feedback), (low, high) in zip(BAND_LEVELS, ranges)
    ]


def list_presets() -> list[str]:
    return list(PRESET_RANGES)


def get_preset_bands(name: str) -> list[Band]:
    """
    Get a fresh copy of a preset's bands.

    Args:
        name: Preset name (case-insensitive)

    Returns:
        Three bands, lowest first

    Raises:
        ConfigurationError: If the preset does not exist
    """
    key = name.strip().lower()
    if key not in PRESET_RANGES:
        raise ConfigurationError(
            f"Unknown band preset '{name}'. Available: {', '.join(PRESET_RANGES)}"
        )
    return _build_bands(PRESET_RANGES[key])


def default_custom_bands() -> list[Band]:
    """Starting point for a coach's own band configuration."""
    return _build_bands(DEFAULT_CUSTOM_RANGES)
