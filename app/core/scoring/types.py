"""Pydantic models for check-in templates, answers and score results."""

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Template Types
# =============================================================================


class QuestionType(str, Enum):
    """Answer type of a check-in question."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SCALE = "scale"
    SINGLE_CHOICE = "singleChoice"
    MULTI_CHOICE = "multiChoice"


NUMERIC_TYPES = frozenset({QuestionType.NUMBER, QuestionType.SCALE})
CHOICE_TYPES = frozenset({QuestionType.SINGLE_CHOICE, QuestionType.MULTI_CHOICE})


class NumericRange(BaseModel):
    """Bounds used to normalize number and scale answers."""

    min: float = Field(..., description="Value that normalizes to 0.0")
    max: float = Field(..., description="Value that normalizes to 1.0")


class AnswerOption(BaseModel):
    """One selectable option of a choice question."""

    value: str = Field(..., description="Value submitted when this option is picked")
    label: str | None = Field(None, description="Display text (defaults to value)")
    score: float | None = Field(
        None, description="Contribution of this option, 0.0-1.0 (required for scoring)"
    )


class Polarity(BaseModel):
    """Which answers count as desirable."""

    positive_value: bool = Field(
        default=True, description="Boolean questions: the answer that scores 1.0"
    )
    higher_is_better: bool = Field(
        default=True, description="Number/scale questions: False inverts the scale"
    )


class Dependency(BaseModel):
    """Show a question only when another question was answered a certain way."""

    question_id: str = Field(..., description="Controlling question")
    equals: Any = Field(..., description="Answer that makes the dependent visible")


class Question(BaseModel):
    """A single question on a check-in template."""

    id: str = Field(..., min_length=1, description="Unique within the template")
    text: str = Field(default="", description="Prompt shown to the client")
    type: QuestionType
    required: bool = False
    weight: float = Field(default=1.0, description="Importance factor, >= 0")
    range: NumericRange | None = None
    options: list[AnswerOption] = Field(default_factory=list)
    polarity: Polarity = Field(default_factory=Polarity)
    depends_on: Dependency | None = None

    @property
    def is_scorable(self) -> bool:
        return self.type != QuestionType.TEXT

    def option(self, value: Any) -> AnswerOption | None:
        """Look up an option by its submitted value."""
        for opt in self.options:
            if opt.value == value:
                return opt
        return None


class Section(BaseModel):
    """Ordered group of questions sharing a score category."""

    id: str = Field(..., min_length=1)
    title: str = ""
    category: str = Field(..., min_length=1, description="Per-category score key")
    questions: list[Question] = Field(default_factory=list)


class Band(BaseModel):
    """A named score range with coach-authored feedback.

    Covers ``[min_score, max_score)``; the highest band also includes 100.
    """

    name: str = Field(..., min_length=1)
    color: str | None = Field(None, description="Display colour, e.g. green/orange/red")
    min_score: float
    max_score: float
    feedback: str = ""


class Template(BaseModel):
    """A coach-authored check-in form with its scoring bands.

    Construction validates the whole configuration and raises
    ``ConfigurationError`` for a template that cannot be scored.
    """

    id: str = Field(..., min_length=1)
    name: str = ""
    version: int = Field(default=1, ge=1)
    sections: list[Section] = Field(default_factory=list)
    bands: list[Band] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_configuration(self) -> "Template":
        from app.core.scoring.validation import check_template

        check_template(self)
        return self

    def questions(self) -> Iterator[Question]:
        """All questions in template order."""
        for section in self.sections:
            yield from section.questions

    def question_map(self) -> dict[str, Question]:
        return {q.id: q for q in self.questions()}

    def category_of(self, question_id: str) -> str | None:
        for section in self.sections:
            for question in section.questions:
                if question.id == question_id:
                    return section.category
        return None


class TemplateWarning(BaseModel):
    """Non-fatal finding reported when a template is saved."""

    question_id: str | None = None
    code: str
    message: str


# =============================================================================
# Submission Types
# =============================================================================


class Answer(BaseModel):
    """A client's answer to one question. Immutable once submitted."""

    model_config = ConfigDict(frozen=True)

    question_id: str = Field(..., min_length=1)
    value: Any = Field(None, description="None means the question was left blank")


# =============================================================================
# Result Types
# =============================================================================


class QuestionScore(BaseModel):
    """How a single visible question fed into the score."""

    normalized: float | None = Field(
        None, ge=0, le=1, description="Sub-score 0.0-1.0, None when skipped"
    )
    weight: float = Field(..., ge=0)
    contribution: float = Field(..., ge=0, description="normalized * weight")
    category: str


class ScoreBreakdown(BaseModel):
    """Totals behind the overall score."""

    earned_weight: float = Field(..., description="Sum of contributions")
    total_weight: float = Field(..., description="Sum of weights of scored questions")
    unanswered_weight: float = Field(
        default=0.0, description="Weight of required questions left blank"
    )
    scored_questions: list[str] = Field(default_factory=list)
    skipped_questions: list[str] = Field(
        default_factory=list, description="Visible but unscored (text, optional blanks)"
    )
    hidden_questions: list[str] = Field(
        default_factory=list, description="Excluded by unmet dependencies"
    )


class ScoreResult(BaseModel):
    """Complete score for one check-in submission."""

    template_id: str
    template_version: int
    overall: float = Field(..., ge=0, le=100, description="Overall score out of 100")
    per_category: dict[str, float] = Field(
        default_factory=dict, description="Score out of 100 per section category"
    )
    band: Band
    unanswered_required: list[str] = Field(
        default_factory=list, description="Visible required questions left blank"
    )
    questions: dict[str, QuestionScore] = Field(
        default_factory=dict, description="Per-question breakdown for visible questions"
    )
    breakdown: ScoreBreakdown
