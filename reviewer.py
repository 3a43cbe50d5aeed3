import logging
from typing import List

from agents.inline_agent import inline_agent, to_inline_comments
from agents.llm_client import GenerateFn
from agents.summary_agent import summary_agent
from diff_parser import build_diff_text, summarize_changes
from models import ChangedFile, ModeOutcome, ReviewConfig, ReviewMode
from utils.errors import PostingError
from utils.github_client import GitHubClient

logger = logging.getLogger(__name__)


async def run_inline_review(config: ReviewConfig, github: GitHubClient, generate: GenerateFn,
                            files: List[ChangedFile], diff_text: str) -> ModeOutcome:
    logger.info("💬 Generating inline comments...")
    result = inline_agent(generate, config.inline_api_key, config.language, diff_text,
                          config.position_strategy)
    if not result.ok:
        return ModeOutcome(mode=ReviewMode.INLINE, error=f"malformed model output: {result.error}")

    comments = to_inline_comments(result.comments, files, config.position_strategy)
    if not comments:
        logger.info("✅ No inline issues found.")
        return ModeOutcome(mode=ReviewMode.INLINE)

    head_sha = await github.fetch_pr_head_sha(config.pr_number)
    try:
        await github.create_review(config.pr_number, head_sha, comments)
    except PostingError as e:
        logger.error("❌ Failed to create review: %s", e)
        logger.error("Attempted review payload: %s", e.payload)
        return ModeOutcome(mode=ReviewMode.INLINE, error=str(e))

    logger.info("✅ Added %d inline comments.", len(comments))
    return ModeOutcome(mode=ReviewMode.INLINE, posted=len(comments))


async def run_summary_review(config: ReviewConfig, github: GitHubClient, generate: GenerateFn,
                             diff_text: str) -> ModeOutcome:
    logger.info("🧠 Generating summary review...")
    body = summary_agent(generate, config.summary_api_key, config.language, diff_text)
    if body is None:
        logger.warning("⚠️ No summary review generated.")
        return ModeOutcome(mode=ReviewMode.SUMMARY)

    try:
        await github.post_issue_comment(config.pr_number, body)
    except PostingError as e:
        logger.error("❌ Failed to post summary comment: %s", e)
        logger.error("Attempted comment payload: %s", e.payload)
        return ModeOutcome(mode=ReviewMode.SUMMARY, error=str(e))

    logger.info("✅ Summary review posted.")
    return ModeOutcome(mode=ReviewMode.SUMMARY, posted=1)


async def run_review(config: ReviewConfig, github: GitHubClient, generate: GenerateFn) -> List[ModeOutcome]:
    """
    Review one pull request: fetch its diffs, then run each requested mode
    in turn. A failure inside one mode is logged and recorded in its
    outcome; the next mode still runs. Errors fetching the changed files
    propagate.
    """
    logger.info("📦 Fetching changed files for PR #%d...", config.pr_number)
    files = await github.list_pr_files(config.pr_number)

    if not files:
        logger.warning("⚠️ No files changed in this PR. Nothing to review.")
        return []

    for stats in summarize_changes(files):
        if stats["binary"]:
            logger.info("  %s (no patch, skipped)", stats["file"])
        else:
            logger.info("  %s: %d hunk(s), +%d/-%d", stats["file"], stats["hunks"],
                        stats["added_count"], stats["removed_count"])

    diff_text = build_diff_text(files)
    if not diff_text:
        logger.warning("⚠️ No textual patches in this PR (binary or too large). Nothing to review.")
        return []

    logger.info("🤖 Sending diff to Gemini...")
    outcomes: List[ModeOutcome] = []

    if config.mode.includes(ReviewMode.INLINE):
        try:
            outcomes.append(await run_inline_review(config, github, generate, files, diff_text))
        except Exception as e:
            logger.exception("❌ Inline review failed: %s", e)
            outcomes.append(ModeOutcome(mode=ReviewMode.INLINE, error=str(e)))

    if config.mode.includes(ReviewMode.SUMMARY):
        try:
            outcomes.append(await run_summary_review(config, github, generate, diff_text))
        except Exception as e:
            logger.exception("❌ Summary review failed: %s", e)
            outcomes.append(ModeOutcome(mode=ReviewMode.SUMMARY, error=str(e)))

    logger.info("🏁 Review completed.")
    return outcomes
