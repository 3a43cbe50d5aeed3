"""Shared fixtures: a fake GitHub API behind httpx.MockTransport and a fake Gemini."""
import json
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).parent.parent

# flat layout: make the top-level modules importable without installing
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import ReviewConfig  # noqa: E402
from utils.github_client import GitHubClient  # noqa: E402

PATCH = "@@ -1,2 +1,3 @@\n line1\n+line2\n line3"


class FakeGitHubAPI:
    """Routes requests by (method, path) and records everything it sees."""

    def __init__(self, files=None, head_sha="abc123"):
        self.files = files if files is not None else []
        self.head_sha = head_sha
        self.requests = []
        self.review_status = 200
        self.comment_status = 201
        self.files_status = 200

    def posted(self, suffix):
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path.endswith(suffix)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.endswith("/files"):
            if self.files_status != 200:
                return httpx.Response(self.files_status, json={"message": "boom"})
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "100"))
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.files[start:start + per_page])
        if request.method == "GET" and "/pulls/" in path:
            return httpx.Response(200, json={"head": {"sha": self.head_sha}})
        if request.method == "POST" and path.endswith("/reviews"):
            if self.review_status >= 400:
                return httpx.Response(self.review_status, json={"message": "position is invalid"})
            return httpx.Response(self.review_status, json={"id": 1})
        if request.method == "POST" and path.endswith("/comments"):
            if self.comment_status >= 400:
                return httpx.Response(self.comment_status, json={"message": "nope"})
            return httpx.Response(self.comment_status, json={"id": 2})
        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> GitHubClient:
        return GitHubClient("octo", "demo", "gh-token", transport=httpx.MockTransport(self.handler))


class FakeGemini:
    """Stands in for call_gemini: replies are handed out per API key."""

    def __init__(self, replies):
        self.replies = replies
        self.calls = []

    def __call__(self, prompt, api_key):
        self.calls.append((prompt, api_key))
        reply = self.replies[api_key]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def config():
    return ReviewConfig(
        owner="octo",
        repo="demo",
        pr_number=7,
        github_token="gh-token",
        inline_api_key="key-inline",
        summary_api_key="key-summary",
    )


@pytest.fixture
def api():
    return FakeGitHubAPI(files=[{"filename": "app.py", "status": "modified", "patch": PATCH}])
