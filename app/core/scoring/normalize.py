"""Answer normalization.

Turns one raw answer into a dimensionless sub-score in [0, 1] according to
the question's type and polarity. ``None`` means "skip": the question does
not take part in aggregation at all.
"""

import math
from typing import Any

from app.core.scoring.errors import ConfigurationError, ValidationError
from app.core.scoring.types import Answer, Question, QuestionType
from app.core.scoring.validation import check_answer_value


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def normalize(question: Question, answer: Answer | None) -> float | None:
    """
    Normalize a single answer.

    Args:
        question: The (visible) question being scored
        answer: The client's answer, or None when nothing was submitted

    Returns:
        Sub-score in [0, 1], or None to skip the question

    Raises:
        ConfigurationError: If the question lacks what its type needs
        ValidationError: If the answer does not fit the question
    """
    if question.type == QuestionType.TEXT:
        return None

    value = answer.value if answer is not None else None
    if value is None:
        # Non-response to a required question is penalized, not skipped
        return 0.0 if question.required else None

    problems = check_answer_value(question, value)
    if problems:
        raise ValidationError(problems[0], issues=problems)

    if question.type in (QuestionType.NUMBER, QuestionType.SCALE):
        return _normalize_numeric(question, value)
    if question.type == QuestionType.BOOLEAN:
        return 1.0 if value == question.polarity.positive_value else 0.0
    if question.type == QuestionType.SINGLE_CHOICE:
        return _option_score(question, value)

    # Multi choice: an empty selection is a real answer worth 0
    if not value:
        return 0.0
    return sum(_option_score(question, item) for item in value) / len(value)


def _normalize_numeric(question: Question, value: float) -> float:
    bounds = question.range
    if bounds is None:
        raise ConfigurationError(
            f"{question.type.value} question '{question.id}' has no range"
        )
    span = bounds.max - bounds.min
    if not (span > 0 and math.isfinite(span)):
        raise ConfigurationError(f"Question '{question.id}' has an empty or unbounded range")

    # Compare before dividing: an int beyond float range cannot be converted
    if value <= bounds.min:
        normalized = 0.0
    elif value >= bounds.max:
        normalized = 1.0
    else:
        normalized = _clamp((value - bounds.min) / span)
    if not question.polarity.higher_is_better:
        normalized = 1.0 - normalized
    return normalized


def _option_score(question: Question, value: Any) -> float:
    option = question.option(value)
    if option is None:
        raise ValidationError(f"Question '{question.id}' has no option '{value}'")
    if option.score is None:
        raise ConfigurationError(
            f"Option '{option.value}' of question '{question.id}' has no score"
        )
    return option.score
