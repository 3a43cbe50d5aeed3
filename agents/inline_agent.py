# agents/inline_agent.py
import logging
from typing import Dict, List, Optional

from agents.llm_client import GenerateFn
from agents.prompts import build_prompt
from agents.response_parser import parse_review_comments
from diff_position import added_line_numbers, find_diff_position
from models import ChangedFile, InlineComment, ParseResult, PositionStrategy, ReviewComment, ReviewMode

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "💡 "


def inline_agent(generate: GenerateFn, api_key: str, language: str, diff_text: str,
                 strategy: PositionStrategy) -> ParseResult:
    prompt = build_prompt(language, ReviewMode.INLINE, diff_text, strategy)
    out = generate(prompt, api_key)
    result = parse_review_comments(out)
    if not result.ok:
        logger.error("⚠️ Gemini returned invalid JSON for inline review: %s", result.error)
        logger.error("Raw inline response:\n%s", result.error.raw)
    return result


def _resolve(comment: ReviewComment, patches: Dict[str, Optional[str]]) -> Optional[int]:
    if comment.file not in patches:
        logger.warning("⚠️ Skipping comment on %s: file is not part of this PR", comment.file)
        return None

    # a bare "position" is a diff index, not a file line: never feed it to the resolver
    line = comment.line
    if line is None:
        logger.warning("⚠️ Skipping comment on %s: no file line given (position=%s)",
                       comment.file, comment.position)
        return None

    patch = patches[comment.file]
    position = find_diff_position(patch, line)
    if position is None:
        logger.warning(
            "⚠️ Skipping comment on %s:%d: not an added line (added lines: %s)",
            comment.file, line, added_line_numbers(patch),
        )
    return position


def to_inline_comments(comments: List[ReviewComment], files: List[ChangedFile],
                       strategy: PositionStrategy) -> List[InlineComment]:
    """
    Turn parsed model comments into review payload entries.

    With RESOLVE the model's file line is mapped through the real patch and
    comments that do not land on an added line are dropped. With MODEL the
    position the model claims is posted as-is.
    """
    patches = {f.filename: f.patch for f in files}
    inline: List[InlineComment] = []

    for c in comments:
        if strategy is PositionStrategy.RESOLVE:
            position = _resolve(c, patches)
        else:
            position = c.position if c.position is not None else c.line

        if position is None:
            if strategy is PositionStrategy.MODEL:
                logger.warning("⚠️ Skipping comment on %s: no position given", c.file)
            continue

        inline.append(InlineComment(path=c.file, position=position, body=f"{COMMENT_PREFIX}{c.comment}"))

    return inline
