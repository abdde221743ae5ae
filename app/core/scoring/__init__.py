"""Check-in template scoring.

Scores a client's check-in answers against a coach-authored template:
- Visibility: which questions apply, given conditional dependencies
- Normalization: every answer type mapped onto [0, 1]
- Aggregation: weighted overall and per-category scores out of 100
- Classification: the band (label, colour, feedback) the score falls into

Usage:
    from app.core.scoring import compute_score

    result = compute_score(template, answers)
    print(f"{result.band.name}: {result.overall}%")
"""

from app.core.scoring.band_editor import BandEditor, BandSelection
from app.core.scoring.bands import check_band_partition, classify
from app.core.scoring.engine import compute_score
from app.core.scoring.errors import (
    ComputationError,
    ConfigurationError,
    ScoringError,
    ValidationError,
)
from app.core.scoring.presets import (
    CUSTOM,
    PRESETS_VERSION,
    get_preset_bands,
    list_presets,
)
from app.core.scoring.summary import summarize_score
from app.core.scoring.types import (
    Answer,
    AnswerOption,
    Band,
    Dependency,
    NumericRange,
    Polarity,
    Question,
    QuestionType,
    ScoreResult,
    Section,
    Template,
    TemplateWarning,
)
from app.core.scoring.validation import check_template, validate_answers
from app.core.scoring.visibility import resolve_visibility

__all__ = [
    "compute_score",
    "summarize_score",
    "check_template",
    "validate_answers",
    "resolve_visibility",
    "classify",
    "check_band_partition",
    "get_preset_bands",
    "list_presets",
    "BandEditor",
    "BandSelection",
    "CUSTOM",
    "PRESETS_VERSION",
    "Answer",
    "AnswerOption",
    "Band",
    "Dependency",
    "NumericRange",
    "Polarity",
    "Question",
    "QuestionType",
    "ScoreResult",
    "Section",
    "Template",
    "TemplateWarning",
    "ScoringError",
    "ConfigurationError",
    "ValidationError",
    "ComputationError",
]
