"""Score band partition checks and classification.

Bands cover half-open ranges ``[min_score, max_score)``. The highest band is
closed so that a perfect score of 100 has a home.
"""

import math
from bisect import bisect_right

from app.core.scoring.errors import ComputationError
from app.core.scoring.types import Band

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def sorted_bands(bands: list[Band]) -> list[Band]:
    return sorted(bands, key=lambda b: (b.min_score, b.max_score))


def check_band_partition(bands: list[Band]) -> list[str]:
    """
    Check that bands partition [0, 100] with no gaps and no overlaps.

    Args:
        bands: Bands in any order

    Returns:
        One line per problem; empty when the bands are valid
    """
    if not bands:
        return ["Template has no scoring bands"]

    issues: list[str] = []

    seen_names: set[str] = set()
    for band in bands:
        if band.name in seen_names:
            issues.append(f"Duplicate band name '{band.name}'")
        seen_names.add(band.name)

        if not (math.isfinite(band.min_score) and math.isfinite(band.max_score)):
            issues.append(
                f"Band '{band.name}' has non-finite bounds "
                f"[{band.min_score}, {band.max_score})"
            )
        elif band.min_score >= band.max_score:
            issues.append(
                f"Band '{band.name}' has an empty range "
                f"[{band.min_score:g}, {band.max_score:g})"
            )

    # NaN bounds make ordering meaningless
    if any(not math.isfinite(b.min_score) or not math.isfinite(b.max_score) for b in bands):
        return issues

    ordered = sorted_bands(bands)

    if ordered[0].min_score != MIN_SCORE:
        issues.append(
            f"Lowest band '{ordered[0].name}' starts at {ordered[0].min_score:g}, expected 0"
        )
    if ordered[-1].max_score != MAX_SCORE:
        issues.append(
            f"Highest band '{ordered[-1].name}' ends at {ordered[-1].max_score:g}, expected 100"
        )

    for lower, upper in zip(ordered, ordered[1:]):
        if lower.max_score < upper.min_score:
            issues.append(
                f"Gap between bands '{lower.name}' and '{upper.name}': "
                f"[{lower.max_score:g}, {upper.min_score:g}) is not covered"
            )
        elif lower.max_score > upper.min_score:
            issues.append(
                f"Bands '{lower.name}' and '{upper.name}' overlap on "
                f"[{upper.min_score:g}, {lower.max_score:g})"
            )

    return issues


def classify(score: float, bands: list[Band]) -> Band:
    """
    Find the band containing a score.

    Assumes ``bands`` already passed ``check_band_partition`` (templates are
    checked when saved), so this is a single bisect over the lower bounds.
    A score equal to a band's ``max_score`` belongs to the next band up.

    Args:
        score: Score out of 100
        bands: A valid partition of [0, 100]

    Returns:
        The matching band

    Raises:
        ComputationError: If the score lies outside [0, 100]
    """
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ComputationError(f"Score {score} is outside [0, 100]")

    ordered = sorted_bands(bands)
    index = bisect_right([b.min_score for b in ordered], score) - 1
    return ordered[max(index, 0)]
