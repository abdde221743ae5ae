"""Template and answer-set validation.

Template checks run when a template is constructed (i.e. at save time) and
again before scoring. Every problem is collected so the coach sees the whole
list at once; anything fatal is raised as a single ConfigurationError.
"""

import math
from collections import Counter
from typing import Any, Iterable

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.scoring.bands import check_band_partition
from app.core.scoring.errors import ConfigurationError, ValidationError
from app.core.scoring.types import (
    CHOICE_TYPES,
    NUMERIC_TYPES,
    Answer,
    Question,
    QuestionType,
    Template,
    TemplateWarning,
)
from app.core.scoring.visibility import topological_order

logger = get_logger(__name__)


# =============================================================================
# Template checks
# =============================================================================


def check_template(template: Template) -> list[TemplateWarning]:
    """
    Validate a template's scoring configuration.

    Args:
        template: Template to check

    Returns:
        Non-fatal warnings (e.g. weight set on a text question)

    Raises:
        ConfigurationError: Listing every fatal problem found
    """
    settings = get_settings()
    questions = list(template.questions())
    by_id = {q.id: q for q in questions}
    issues: list[str] = []
    warnings: list[TemplateWarning] = []

    if len(questions) > settings.MAX_TEMPLATE_QUESTIONS:
        issues.append(
            f"Template has {len(questions)} questions, "
            f"limit is {settings.MAX_TEMPLATE_QUESTIONS}"
        )

    for qid, count in Counter(q.id for q in questions).items():
        if count > 1:
            issues.append(f"Question id '{qid}' is used {count} times")

    for question in questions:
        issues.extend(_question_issues(question, by_id))
        warnings.extend(_question_warnings(question, by_id))

    try:
        topological_order(template)
    except ConfigurationError as e:
        issues.extend(e.issues)

    issues.extend(check_band_partition(template.bands))

    if issues:
        logger.warning(
            f"Template {template.id} v{template.version} rejected: "
            f"{len(issues)} configuration problem(s)"
        )
        raise ConfigurationError(
            f"Template {template.id} has {len(issues)} configuration problem(s): "
            + "; ".join(issues),
            issues=issues,
        )

    for warning in warnings:
        logger.debug(f"Template {template.id}: {warning.code} - {warning.message}")

    return warnings


def _question_issues(question: Question, by_id: dict[str, Question]) -> list[str]:
    issues: list[str] = []
    qid = question.id

    if not math.isfinite(question.weight):
        issues.append(f"Question '{qid}' has non-finite weight {question.weight}")
    elif question.weight < 0:
        issues.append(f"Question '{qid}' has negative weight {question.weight:g}")

    if question.type in NUMERIC_TYPES:
        if question.range is None:
            issues.append(f"{question.type.value} question '{qid}' has no range")
        elif not (math.isfinite(question.range.min) and math.isfinite(question.range.max)):
            issues.append(
                f"Question '{qid}' range [{question.range.min}, {question.range.max}] "
                "must have finite bounds"
            )
        elif question.range.min >= question.range.max:
            issues.append(
                f"Question '{qid}' range min ({question.range.min:g}) "
                f"must be below max ({question.range.max:g})"
            )

    if question.type in CHOICE_TYPES:
        if not question.options:
            issues.append(f"Choice question '{qid}' has no options")
        for value, count in Counter(o.value for o in question.options).items():
            if count > 1:
                issues.append(f"Question '{qid}' lists option '{value}' {count} times")
        for option in question.options:
            if option.score is None:
                issues.append(f"Option '{option.value}' of question '{qid}' has no score")
            elif not 0.0 <= option.score <= 1.0:
                issues.append(
                    f"Option '{option.value}' of question '{qid}' has score "
                    f"{option.score:g} outside [0, 1]"
                )

    dep = question.depends_on
    if dep is not None and dep.question_id != qid and dep.question_id not in by_id:
        issues.append(f"Question '{qid}' depends on unknown question '{dep.question_id}'")

    return issues


def _question_warnings(
    question: Question, by_id: dict[str, Question]
) -> list[TemplateWarning]:
    warnings: list[TemplateWarning] = []
    qid = question.id

    if question.type == QuestionType.TEXT:
        if "weight" in question.model_fields_set and question.weight != 0:
            warnings.append(TemplateWarning(
                question_id=qid,
                code="text_weight_ignored",
                message="Text answers are never scored; the weight has no effect",
            ))
    elif question.weight == 0:
        warnings.append(TemplateWarning(
            question_id=qid,
            code="zero_weight",
            message="Weight is 0, so this question never affects the score",
        ))

    dep = question.depends_on
    controller = by_id.get(dep.question_id) if dep is not None else None
    if controller is None or controller.id == qid:
        return warnings

    if controller.type in CHOICE_TYPES and controller.option(dep.equals) is None:
        warnings.append(TemplateWarning(
            question_id=qid,
            code="unreachable_dependency",
            message=f"'{dep.equals}' is not an option of '{controller.id}'; "
                    "this question can never be shown",
        ))
    elif controller.type == QuestionType.BOOLEAN and not isinstance(dep.equals, bool):
        warnings.append(TemplateWarning(
            question_id=qid,
            code="unreachable_dependency",
            message=f"'{controller.id}' is a yes/no question but the condition "
                    f"expects {dep.equals!r}; this question can never be shown",
        ))
    elif controller.type == QuestionType.TEXT:
        warnings.append(TemplateWarning(
            question_id=qid,
            code="text_dependency",
            message=f"Depends on free text '{controller.id}'; only an exact match shows it",
        ))

    return warnings


# =============================================================================
# Answer checks
# =============================================================================


def validate_answers(template: Template, answers: Iterable[Answer]) -> None:
    """
    Validate a submitted answer set against a template.

    Answers to hidden questions are checked too: a reference to an unknown
    question or option is malformed whatever the visibility.

    Raises:
        ValidationError: Listing every invalid answer
    """
    questions = template.question_map()
    seen: set[str] = set()
    issues: list[str] = []

    for answer in answers:
        question = questions.get(answer.question_id)
        if question is None:
            issues.append(f"Answer references unknown question '{answer.question_id}'")
            continue
        if answer.question_id in seen:
            issues.append(f"Question '{answer.question_id}' was answered more than once")
            continue
        seen.add(answer.question_id)

        if answer.value is not None:
            issues.extend(check_answer_value(question, answer.value))

    if issues:
        raise ValidationError(
            f"Submission has {len(issues)} invalid answer(s): " + "; ".join(issues),
            issues=issues,
        )


def is_real_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are exact and may be too large to convert to float
    return isinstance(value, int) or math.isfinite(value)


def check_answer_value(question: Question, value: Any) -> list[str]:
    """Problems with one non-blank answer value; empty when it fits."""
    qid = question.id

    if question.type == QuestionType.TEXT:
        if not isinstance(value, str):
            return [f"Question '{qid}' expects text, got {type(value).__name__}"]
        return []

    if question.type in NUMERIC_TYPES:
        if not is_real_number(value):
            return [f"Question '{qid}' expects a number, got {value!r}"]
        return []

    if question.type == QuestionType.BOOLEAN:
        if not isinstance(value, bool):
            return [f"Question '{qid}' expects true or false, got {value!r}"]
        return []

    if question.type == QuestionType.SINGLE_CHOICE:
        if isinstance(value, (list, tuple, dict)):
            return [f"Question '{qid}' accepts a single option, got {value!r}"]
        if question.option(value) is None:
            return [f"Question '{qid}' has no option '{value}'"]
        return []

    # Multi choice
    if not isinstance(value, (list, tuple)):
        return [f"Question '{qid}' expects a list of options, got {value!r}"]
    issues = [
        f"Question '{qid}' has no option '{item}'"
        for item in value
        if question.option(item) is None
    ]
    for item, count in Counter(v for v in value if isinstance(v, str)).items():
        if count > 1:
            issues.append(f"Option '{item}' of question '{qid}' was selected {count} times")
    return issues
