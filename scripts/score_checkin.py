#!/usr/bin/env python3
"""
Score a check-in submission from JSON files.

Useful for reproducing a coach's reported score locally: export the template
version and the submitted answers, then run this against them.

Usage:
    python scripts/score_checkin.py TEMPLATE_JSON ANSWERS_JSON [--preset NAME] [--summary]

Options:
    --preset: Replace the template's bands with a named preset before scoring
    --summary: Print the human-readable summary instead of the JSON result

ANSWERS_JSON holds a list of {"question_id": ..., "value": ...} objects.
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError as PydanticValidationError

from app.core.logging import get_logger
from app.core.scoring import (
    BandEditor,
    ScoringError,
    Template,
    compute_score,
    summarize_score,
)

logger = get_logger(__name__)


def load_json(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main():
    """Score one submission and print the result."""
    parser = argparse.ArgumentParser(description="Score a check-in submission")
    parser.add_argument("template", help="Path to the template JSON")
    parser.add_argument("answers", help="Path to the answers JSON")
    parser.add_argument(
        "--preset",
        type=str,
        help="Score against a named band preset instead of the template's bands",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the human-readable summary",
    )

    args = parser.parse_args()

    try:
        template = Template.model_validate(load_json(args.template))
        if args.preset:
            editor = BandEditor()
            editor.select_preset(args.preset)
            template = editor.apply(template)

        result = compute_score(template, load_json(args.answers))

    except ScoringError as e:
        logger.error(f"{type(e).__name__}: {e}")
        for issue in e.issues:
            print(f"  - {issue}", file=sys.stderr)
        sys.exit(1)
    except PydanticValidationError as e:
        logger.error(f"Malformed input: {e.error_count()} error(s)")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            print(f"  - {location}: {error['msg']}", file=sys.stderr)
        sys.exit(1)

    if args.summary:
        print(summarize_score(result))
    else:
        print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
