# utils/config.py

import json
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from models import ReviewConfig, ReviewMode
from utils.errors import ConfigurationError


def read_pr_number(event_path: Optional[str]) -> int:
    """
    Read the pull request number from the GitHub Actions event payload.
    """
    if not event_path:
        raise ConfigurationError("Cannot determine pull request number.")
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot determine pull request number. ({e})") from e

    pr = event.get("pull_request") if isinstance(event, dict) else None
    number = pr.get("number") if isinstance(pr, dict) else None
    if not isinstance(number, int) or isinstance(number, bool) or number < 1:
        raise ConfigurationError("Cannot determine pull request number.")
    return number


def _require(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> ReviewConfig:
    """
    Build the ReviewConfig once at startup.

    With no explicit mapping the process environment is used, after loading
    a local .env file if one exists.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    # the PR number comes first: nothing else matters without it
    pr_number = read_pr_number(env.get("GITHUB_EVENT_PATH"))

    repository = _require(env, "GITHUB_REPOSITORY")
    owner, _, repo = repository.partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigurationError(f"GITHUB_REPOSITORY must look like owner/repo, got {repository!r}")

    try:
        mode = ReviewMode((env.get("REVIEW_MODE") or "").strip().lower() or "full")
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    # each mode has its own key; either one stands in for the other
    primary = (env.get("GEMINI_API_KEY") or "").strip()
    secondary = (env.get("GEMINI_API_KEY_2") or "").strip()
    inline_key = primary or secondary or None
    summary_key = secondary or primary or None
    if mode.includes(ReviewMode.INLINE) and not inline_key:
        raise ConfigurationError("GEMINI_API_KEY is not set")
    if mode.includes(ReviewMode.SUMMARY) and not summary_key:
        raise ConfigurationError("GEMINI_API_KEY_2 (or GEMINI_API_KEY) is not set")

    values = {
        "owner": owner,
        "repo": repo,
        "pr_number": pr_number,
        "github_token": _require(env, "GITHUB_TOKEN"),
        "inline_api_key": inline_key,
        "summary_api_key": summary_key,
        "mode": mode,
    }
    optional = {
        "model": "GEMINI_MODEL",
        "language": "REVIEW_LANGUAGE",
        "position_strategy": "POSITION_STRATEGY",
        "api_base": "GITHUB_API_URL",
    }
    for field, name in optional.items():
        value = (env.get(name) or "").strip()
        if value:
            values[field] = value.lower() if field == "position_strategy" else value

    try:
        return ReviewConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
