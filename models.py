from enum import Enum
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List, Optional

from utils.errors import MalformedModelOutput


class ReviewMode(str, Enum):
    INLINE = "inline"
    SUMMARY = "summary"
    FULL = "full"

    def includes(self, mode: "ReviewMode") -> bool:
        return self is ReviewMode.FULL or self is mode


class PositionStrategy(str, Enum):
    # map model-reported file lines through the patch
    RESOLVE = "resolve"
    # post whatever position the model claims
    MODEL = "model"


class ChangedFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    patch: Optional[str] = None


class DiffHunk(BaseModel):
    file_path: str
    added_lines: List[str]
    removed_lines: List[str]


class ReviewComment(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file: str = Field(validation_alias=AliasChoices("file", "path"))
    line: Optional[int] = None
    position: Optional[int] = None
    comment: str = Field(validation_alias=AliasChoices("comment", "body"))


class InlineComment(BaseModel):
    path: str
    position: int
    body: str


class ParseResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    comments: List[ReviewComment] = []
    raw: Optional[str] = None
    # set exactly when ok is False
    error: Optional[MalformedModelOutput] = None


class ModeOutcome(BaseModel):
    mode: ReviewMode
    posted: int = 0
    error: Optional[str] = None


class ReviewConfig(BaseModel):
    owner: str
    repo: str
    pr_number: int
    github_token: str
    # only the keys for the selected mode(s) are guaranteed
    inline_api_key: Optional[str] = None
    summary_api_key: Optional[str] = None
    model: str = "gemini-2.5-flash"
    mode: ReviewMode = ReviewMode.FULL
    language: str = "ASP.NET Core (C# backend) and Angular (TypeScript frontend)"
    position_strategy: PositionStrategy = PositionStrategy.RESOLVE
    api_base: str = "https://api.github.com"
    timeout: float = 30.0
