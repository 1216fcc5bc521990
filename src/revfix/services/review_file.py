"""Loading and saving review files.

A review file holds the JSON envelope returned by the AI reviewer. Models
often wrap their JSON in a Markdown code fence; one surrounding fence is
tolerated.
"""

import json
import re
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from ..errors import ReviewFileError
from ..models import ReviewResult

_FENCE_OPEN = re.compile(r"^[ \t]*```json", re.MULTILINE)
_FENCE_CLOSE = re.compile(r"^[ \t]*```", re.MULTILINE)


def strip_code_fence(text: str) -> str:
    """Remove one Markdown code fence around JSON content."""
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_review(text: str) -> ReviewResult:
    """Parse review JSON (optionally fenced).

    Raises:
        ReviewFileError: If the content is not valid JSON or not a valid review
    """
    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise ReviewFileError(f"Review is not valid JSON: {e}") from e
    try:
        return ReviewResult.model_validate(data)
    except PydanticValidationError as e:
        raise ReviewFileError(f"Invalid review: {e}") from e


def load_review(path: Path) -> ReviewResult:
    """Load a review file.

    Args:
        path: Path to the review JSON

    Returns:
        Parsed review

    Raises:
        ReviewFileError: If the file cannot be read or parsed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ReviewFileError(f"Could not read review {path}: {e}") from e
    return parse_review(text)


def save_review(path: Path, review: ReviewResult) -> None:
    """Write a review back with the reviewer's camelCase keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        review.model_dump_json(by_alias=True, indent=2, exclude_none=True) + "\n",
        encoding="utf-8",
    )
