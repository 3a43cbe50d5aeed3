from diff_parser import build_diff_text, file_to_unified_diff, parse_unified_diff, summarize_changes
from models import ChangedFile

PATCH = "\n".join(
    [
        "@@ -1,3 +1,4 @@",
        " import os",
        "-import sys",
        "+import json",
        "+import re",
        " ",
        "@@ -10,2 +11,2 @@",
        " def main():",
        "-    pass",
        "+    return 0",
    ]
)


def test_parse_unified_diff_splits_hunks() -> None:
    hunks = parse_unified_diff(file_to_unified_diff(ChangedFile(filename="cli.py", patch=PATCH)))

    assert len(hunks) == 2
    assert hunks[0].file_path == "cli.py"
    assert hunks[0].added_lines == ["import json", "import re"]
    assert hunks[0].removed_lines == ["import sys"]
    assert hunks[1].added_lines == ["    return 0"]


def test_summarize_changes_counts_lines_and_flags_binaries() -> None:
    files = [
        ChangedFile(filename="cli.py", patch=PATCH),
        ChangedFile(filename="logo.png", status="added"),
    ]

    stats = summarize_changes(files)

    assert stats[0] == {"file": "cli.py", "hunks": 2, "added_count": 3, "removed_count": 2, "binary": False}
    assert stats[1]["binary"] is True


def test_build_diff_text_skips_files_without_patch() -> None:
    files = [
        ChangedFile(filename="a.py", patch="@@ -1 +1 @@\n-x\n+y"),
        ChangedFile(filename="b.bin"),
    ]

    assert build_diff_text(files) == "\nFile: a.py\n@@ -1 +1 @@\n-x\n+y\n"
