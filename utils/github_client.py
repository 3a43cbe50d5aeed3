# utils/github_client.py

import logging
from typing import Any, List, Optional

import httpx

from models import ChangedFile, InlineComment
from utils.errors import PostingError

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"

PER_PAGE = 100


class GitHubClient:
    """
    Thin async wrapper over the GitHub REST endpoints the reviewer needs.

    Every call opens its own short-lived httpx client; `transport` is only
    there so tests can swap in an httpx.MockTransport.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        api_base: str = GITHUB_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        # base request headers
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "Gemini-PR-Reviewer",
            "Authorization": f"token {token}",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, headers=self.headers, transport=self.transport)

    @property
    def _repo_url(self) -> str:
        return f"{self.api_base}/repos/{self.owner}/{self.repo}"

    # -----------------------------------------------------------
    # ✅ Fetch PR file list (all changed files, every page)
    # -----------------------------------------------------------
    async def list_pr_files(self, pr_number: int) -> List[ChangedFile]:
        url = f"{self._repo_url}/pulls/{pr_number}/files"
        files: List[ChangedFile] = []
        page = 1

        async with self._client() as client:
            while True:
                resp = await client.get(url, params={"per_page": PER_PAGE, "page": page})
                resp.raise_for_status()
                batch = resp.json()
                logger.debug("Fetched page %d of changed files (%d entries)", page, len(batch))
                files.extend(ChangedFile(**item) for item in batch)
                if len(batch) < PER_PAGE:
                    break
                page += 1

        return files

    # -----------------------------------------------------------
    # ✅ Fetch PR head commit SHA (reviews attach to the latest revision)
    # -----------------------------------------------------------
    async def fetch_pr_head_sha(self, pr_number: int) -> str:
        url = f"{self._repo_url}/pulls/{pr_number}"

        async with self._client() as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.json()["head"]["sha"]

    # -----------------------------------------------------------
    # ✅ Create a review carrying inline diff comments
    # -----------------------------------------------------------
    async def create_review(self, pr_number: int, commit_id: str, comments: List[InlineComment]) -> dict:
        url = f"{self._repo_url}/pulls/{pr_number}/reviews"
        payload = {
            "commit_id": commit_id,
            "event": "COMMENT",
            "comments": [c.model_dump() for c in comments],
        }
        return await self._post(url, payload)

    # -----------------------------------------------------------
    # ✅ Post GitHub Conversation Comment (NOT inline)
    # -----------------------------------------------------------
    async def post_issue_comment(self, pr_number: int, body: str) -> dict:
        url = f"{self._repo_url}/issues/{pr_number}/comments"
        return await self._post(url, {"body": body})

    async def _post(self, url: str, payload: Any) -> dict:
        async with self._client() as client:
            resp = await client.post(url, json=payload)

        if resp.is_error:
            raise PostingError(
                f"GitHub returned {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                response_text=resp.text,
                payload=payload,
            )
        return resp.json()
