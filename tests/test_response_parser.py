import pytest

from agents.response_parser import parse_review_comments, strip_fences
from utils.errors import MalformedModelOutput

PAYLOAD = '[{"file": "app.py", "line": 2, "comment": "Handle None here"}]'


def test_plain_json_array_parses() -> None:
    result = parse_review_comments(PAYLOAD)

    assert result.ok
    assert result.error is None
    assert len(result.comments) == 1
    c = result.comments[0]
    assert (c.file, c.line, c.position, c.comment) == ("app.py", 2, None, "Handle None here")


@pytest.mark.parametrize(
    "wrapped",
    [
        f"```json\n{PAYLOAD}\n```",
        f"```JSON\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"  \n```json{PAYLOAD}```\n\n",
    ],
)
def test_fenced_output_matches_unfenced(wrapped: str) -> None:
    assert parse_review_comments(wrapped).comments == parse_review_comments(PAYLOAD).comments


def test_empty_array_is_a_successful_parse() -> None:
    result = parse_review_comments("```json\n[]\n```")
    assert result.ok
    assert result.comments == []


def test_truncated_json_is_reported_not_raised() -> None:
    raw = '["not json"'
    result = parse_review_comments(raw)

    assert not result.ok
    assert result.comments == []
    assert result.raw == raw
    assert isinstance(result.error, MalformedModelOutput)
    assert result.error.raw == raw
    assert "invalid JSON" in str(result.error)


@pytest.mark.parametrize("raw", [None, "", "   \n"])
def test_empty_response_is_malformed(raw) -> None:
    result = parse_review_comments(raw)
    assert not result.ok
    assert result.comments == []


def test_object_instead_of_array_is_malformed() -> None:
    result = parse_review_comments('{"file": "a.py", "line": 1, "comment": "x"}')
    assert not result.ok
    assert "expected a JSON array" in str(result.error)


def test_records_missing_fields_are_malformed() -> None:
    result = parse_review_comments('[{"file": "a.py", "line": 1}]')
    assert not result.ok
    assert result.comments == []


def test_path_and_body_aliases_are_accepted() -> None:
    result = parse_review_comments('[{"path": "a.py", "position": 4, "body": "nit"}]')
    assert result.ok
    assert result.comments[0].file == "a.py"
    assert result.comments[0].position == 4
    assert result.comments[0].comment == "nit"


def test_strip_fences_trims_whitespace() -> None:
    assert strip_fences("```typescript\n[1]\n```  ") == "[1]"


def test_backticks_inside_comment_text_survive() -> None:
    raw = '```json\n[{"file": "a.py", "line": 1, "comment": "wrap it in ```python fences"}]\n```'

    result = parse_review_comments(raw)

    assert result.ok
    assert result.comments[0].comment == "wrap it in ```python fences"


def test_successful_parse_carries_no_error() -> None:
    assert parse_review_comments("[]").error is None
