import logging
from unidiff import PatchSet
from unidiff.errors import UnidiffParseError
from typing import List
from models import ChangedFile, DiffHunk

logger = logging.getLogger(__name__)


def parse_unified_diff(diff_text: str) -> List[DiffHunk]:
    """Split a unified diff into per-hunk added/removed line lists."""
    hunks = []
    for patched_file in PatchSet(diff_text.splitlines(keepends=True)):
        for hunk in patched_file:
            hunks.append(DiffHunk(
                file_path=patched_file.path,
                added_lines=[ln.value.rstrip("\n") for ln in hunk if ln.is_added],
                removed_lines=[ln.value.rstrip("\n") for ln in hunk if ln.is_removed],
            ))
    return hunks


def file_to_unified_diff(changed: ChangedFile) -> str:
    # the files API returns bare hunks; unidiff wants the file headers too
    name = changed.filename
    patch = changed.patch.rstrip("\n")
    return f"diff --git a/{name} b/{name}\n--- a/{name}\n+++ b/{name}\n{patch}\n"


def build_diff_text(files: List[ChangedFile]) -> str:
    """Concatenate every file's patch into the block sent to the model."""
    diff_text = ""
    for f in files:
        if f.patch:
            diff_text += f"\nFile: {f.filename}\n{f.patch}\n"
    return diff_text


def summarize_changes(files: List[ChangedFile]) -> List[dict]:
    summaries = []
    for f in files:
        if not f.patch:
            summaries.append({"file": f.filename, "hunks": 0, "added_count": 0,
                              "removed_count": 0, "binary": True})
            continue
        try:
            hunks = parse_unified_diff(file_to_unified_diff(f))
        except UnidiffParseError as e:
            logger.warning("⚠️ Could not parse patch for %s: %s", f.filename, e)
            hunks = []
        summaries.append({
            "file": f.filename,
            "hunks": len(hunks),
            "added_count": sum(len(h.added_lines) for h in hunks),
            "removed_count": sum(len(h.removed_lines) for h in hunks),
            "binary": False,
        })
    return summaries
