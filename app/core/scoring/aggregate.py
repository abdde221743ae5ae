"""Weighted aggregation of normalized answers.

overall = 100 * sum(normalized * weight) / sum(weight), over visible,
non-skipped questions. Weights are never pre-normalized: dividing by the
total weight does that at compute time, so authors can use any scale.
"""

from dataclasses import dataclass

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.scoring.errors import ComputationError
from app.core.scoring.types import QuestionScore, ScoreBreakdown, Template

logger = get_logger(__name__)


@dataclass
class Aggregate:
    """Output of aggregate()."""

    overall: float
    per_category: dict[str, float]
    questions: dict[str, QuestionScore]
    breakdown: ScoreBreakdown


@dataclass
class _Totals:
    earned: float = 0.0
    weight: float = 0.0

    def add(self, contribution: float, weight: float) -> None:
        self.earned += contribution
        self.weight += weight

    def percent(self, decimals: int) -> float:
        return round(100.0 * self.earned / self.weight, decimals)


def aggregate(
    template: Template,
    visible: frozenset[str] | set[str],
    normalized_by_question: dict[str, float | None],
    required_unanswered: list[str] | None = None,
) -> Aggregate:
    """
    Combine normalized sub-scores into overall and per-category scores.

    Args:
        template: Template being scored
        visible: Ids of the questions that apply to this submission
        normalized_by_question: Sub-score per visible question (None = skip)
        required_unanswered: Visible required questions left blank, used for
            the unanswered-weight figure in the breakdown

    Returns:
        Aggregate with scores out of 100, rounded to SCORE_DECIMALS

    Raises:
        ComputationError: If no visible question carries scorable weight
    """
    decimals = get_settings().SCORE_DECIMALS
    blank = set(required_unanswered or [])

    overall = _Totals()
    by_category: dict[str, _Totals] = {}
    questions: dict[str, QuestionScore] = {}
    scored: list[str] = []
    skipped: list[str] = []
    hidden: list[str] = []
    unanswered_weight = 0.0

    # Template order keeps float summation, and so the output, stable
    for section in template.sections:
        for question in section.questions:
            if question.id not in visible:
                hidden.append(question.id)
                continue

            normalized = normalized_by_question.get(question.id)
            if normalized is None:
                skipped.append(question.id)
                questions[question.id] = QuestionScore(
                    normalized=None,
                    weight=question.weight,
                    contribution=0.0,
                    category=section.category,
                )
                continue

            contribution = normalized * question.weight
            overall.add(contribution, question.weight)
            by_category.setdefault(section.category, _Totals()).add(
                contribution, question.weight
            )
            if question.id in blank:
                unanswered_weight += question.weight

            scored.append(question.id)
            questions[question.id] = QuestionScore(
                normalized=normalized,
                weight=question.weight,
                contribution=contribution,
                category=section.category,
            )

    if overall.weight <= 0:
        logger.info(
            f"Nothing scorable for template {template.id}: "
            f"{len(scored)} scored, {len(skipped)} skipped, {len(hidden)} hidden"
        )
        raise ComputationError(
            "Insufficient data to score: no visible question carries scorable weight"
        )

    per_category = {
        category: totals.percent(decimals)
        for category, totals in by_category.items()
        if totals.weight > 0
    }

    return Aggregate(
        overall=overall.percent(decimals),
        per_category=per_category,
        questions=questions,
        breakdown=ScoreBreakdown(
            earned_weight=overall.earned,
            total_weight=overall.weight,
            unanswered_weight=unanswered_weight,
            scored_questions=scored,
            skipped_questions=skipped,
            hidden_questions=hidden,
        ),
    )
