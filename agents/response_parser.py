# agents/response_parser.py
import json
import re
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from models import ParseResult, ReviewComment
from utils.errors import MalformedModelOutput

# an opening fence (with optional language tag) or a closing fence, only at the ends
FENCE_RE = re.compile(r"^\s*```[\w+-]*\s*|\s*```\s*$")

_COMMENTS = TypeAdapter(List[ReviewComment])


def strip_fences(text: str) -> str:
    """
    Remove the markdown code fences models like to wrap JSON in,
    along with any language tag on the opening fence.
    """
    return FENCE_RE.sub("", text).strip()


def _failure(raw: Optional[str], error: str) -> ParseResult:
    return ParseResult(ok=False, comments=[], raw=raw, error=MalformedModelOutput(error, raw=raw))


def parse_review_comments(raw: Optional[str]) -> ParseResult:
    """
    Parse the inline-review JSON array the model was asked for.

    Never raises. A failed parse comes back as ParseResult(ok=False) with
    a MalformedModelOutput carrying the raw text so the caller can log it;
    comments is then empty.
    """
    if raw is None or not raw.strip():
        return _failure(raw, "empty model response")

    cleaned = strip_fences(raw)

    try:
        parsed: Any = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return _failure(raw, f"invalid JSON: {e}")

    if not isinstance(parsed, list):
        return _failure(raw, f"expected a JSON array, got {type(parsed).__name__}")

    try:
        comments = _COMMENTS.validate_python(parsed)
    except ValidationError as e:
        return _failure(raw, f"invalid review comment: {e.errors()[0]['msg']}")

    return ParseResult(ok=True, comments=comments, raw=raw)
