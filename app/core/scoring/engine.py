"""Check-in score computation.

This module orchestrates scoring by:
1. Validating the template configuration
2. Resolving which questions apply to the submission
3. Validating the submitted answers
4. Normalizing and aggregating the visible answers
5. Classifying the overall score into a band

Any failure aborts the whole computation; there is no partial score.
"""

import logging
from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError

from app.core.logging import get_logger, log_with_context
from app.core.scoring.aggregate import aggregate
from app.core.scoring.bands import classify
from app.core.scoring.errors import ScoringError, ValidationError
from app.core.scoring.normalize import normalize
from app.core.scoring.types import Answer, ScoreResult, Template
from app.core.scoring.validation import check_template, validate_answers
from app.core.scoring.visibility import resolve_visibility

logger = get_logger(__name__)


def compute_score(
    template: Template,
    answers: Iterable[Answer | dict[str, Any]],
) -> ScoreResult:
    """
    Compute the score for one check-in submission.

    Pure function of its inputs: the same template version and answers
    always produce an identical result, so scores can be recomputed rather
    than stored.

    Args:
        template: Fully materialized template
        answers: Submitted answers (Answer models or plain dicts)

    Returns:
        ScoreResult with overall and per-category scores and the band

    Raises:
        ConfigurationError: The template is invalid
        ValidationError: The answers do not fit the template
        ComputationError: Nothing scorable was visible
    """
    try:
        return _compute(template, answers)
    except ScoringError as e:
        log_with_context(
            logger,
            logging.WARNING,
            f"Check-in not scored: {type(e).__name__}: {e}",
            template_id=template.id,
            template_version=template.version,
            issues=len(e.issues),
        )
        raise


def _compute(template: Template, raw_answers: Iterable[Answer | dict[str, Any]]) -> ScoreResult:
    # ==========================================================================
    # 1. Template configuration
    # ==========================================================================
    check_template(template)

    answers = _coerce_answers(raw_answers)

    # ==========================================================================
    # 2. Visibility
    # ==========================================================================
    visibility = resolve_visibility(template, answers)
    if visibility.errors:
        raise visibility.errors[0]
    visible = visibility.visible

    # ==========================================================================
    # 3. Answer validation
    # ==========================================================================
    validate_answers(template, answers)

    # ==========================================================================
    # 4. Normalize and aggregate
    # ==========================================================================
    answer_by_id = {a.question_id: a for a in answers}
    normalized: dict[str, float | None] = {}
    unanswered_required: list[str] = []

    for question in template.questions():
        if question.id not in visible:
            continue
        answer = answer_by_id.get(question.id)
        if question.required and (answer is None or answer.value is None):
            unanswered_required.append(question.id)
        normalized[question.id] = normalize(question, answer)

    totals = aggregate(template, visible, normalized, unanswered_required)

    # ==========================================================================
    # 5. Classify
    # ==========================================================================
    band = classify(totals.overall, template.bands)

    log_with_context(
        logger,
        logging.INFO,
        "Check-in scored",
        template_id=template.id,
        template_version=template.version,
        overall=totals.overall,
        band=band.name,
        visible=len(visible),
        unanswered_required=len(unanswered_required),
    )

    return ScoreResult(
        template_id=template.id,
        template_version=template.version,
        overall=totals.overall,
        per_category=totals.per_category,
        band=band,
        unanswered_required=unanswered_required,
        questions=totals.questions,
        breakdown=totals.breakdown,
    )


def _coerce_answers(raw_answers: Iterable[Answer | dict[str, Any]]) -> list[Answer]:
    answers: list[Answer] = []
    for raw in raw_answers:
        if isinstance(raw, Answer):
            answers.append(raw)
            continue
        try:
            answers.append(Answer.model_validate(raw))
        except PydanticValidationError as e:
            raise ValidationError(f"Malformed answer {raw!r}: {e}") from e
    return answers
