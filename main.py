import asyncio
import logging
import os
import sys
from typing import List, Mapping, Optional

from agents.llm_client import GenerateFn, make_generator
from models import ModeOutcome, ReviewConfig
from reviewer import run_review
from utils.config import load_config
from utils.errors import ConfigurationError
from utils.github_client import GitHubClient

logger = logging.getLogger("gemini_pr_review")


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


async def review_pull_request(config: ReviewConfig, github: Optional[GitHubClient] = None,
                              generate: Optional[GenerateFn] = None) -> List[ModeOutcome]:
    if github is None:
        github = GitHubClient(config.owner, config.repo, config.github_token,
                              api_base=config.api_base, timeout=config.timeout)
    if generate is None:
        generate = make_generator(config.model)
    return await run_review(config, github, generate)


def main(env: Optional[Mapping[str, str]] = None, github: Optional[GitHubClient] = None,
         generate: Optional[GenerateFn] = None) -> int:
    setup_logging()

    try:
        config = load_config(env)
    except ConfigurationError as e:
        logger.error("❌ %s", e)
        return 1

    try:
        asyncio.run(review_pull_request(config, github, generate))
    except Exception as e:
        detail = getattr(getattr(e, "response", None), "text", None) or str(e)
        logger.error("❌ Error: %s", detail)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
