"""Human-readable rendering of a score result for the coach review screen."""

from app.core.scoring.types import ScoreResult


def summarize_score(result: ScoreResult) -> str:
    """
    Render a short multi-line summary of a score.

    Example:
        Good - Score: 72.5%
        Good progress, keep working on improvements.
        Categories: nutrition 80%, sleep 50%
        Weighted points: 5.8 of 8 (1 unanswered)
        Unanswered required: water_intake
    """
    band = result.band
    lines = [f"{band.name} - Score: {result.overall:g}%"]

    if band.feedback:
        lines.append(band.feedback)

    if result.per_category:
        categories = ", ".join(
            f"{category} {score:g}%" for category, score in result.per_category.items()
        )
        lines.append(f"Categories: {categories}")

    breakdown = result.breakdown
    points = (
        f"Weighted points: {round(breakdown.earned_weight, 2):g} "
        f"of {round(breakdown.total_weight, 2):g}"
    )
    if breakdown.unanswered_weight:
        points += f" ({round(breakdown.unanswered_weight, 2):g} unanswered)"
    lines.append(points)

    if result.unanswered_required:
        lines.append(f"Unanswered required: {', '.join(result.unanswered_required)}")

    if breakdown.hidden_questions:
        lines.append(f"Not applicable: {len(breakdown.hidden_questions)} question(s)")

    return "\n".join(lines)
