# utils/errors.py
from typing import Any, Optional


class ReviewError(Exception):
    """Base class for every error the reviewer raises itself."""


class ConfigurationError(ReviewError):
    """Startup configuration is missing or invalid. Always fatal."""


class MalformedModelOutput(ReviewError):
    """
    The model's structured output could not be parsed.

    The parser does not raise it: a failed ParseResult carries an instance
    in its `error` field, with the raw model text on `raw`.
    """

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class PostingError(ReviewError):
    """GitHub rejected a review or comment we tried to create."""

    def __init__(self, message: str, status_code: int, response_text: str, payload: Any):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
        self.payload = payload
