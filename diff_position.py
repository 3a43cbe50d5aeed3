"""Map new-file line numbers to GitHub diff positions.

GitHub's review-comment API addresses a line by its ``position``: the
1-based offset of that line within the file's patch, counted from the
first ``@@`` hunk header: the line right below it is position 1. Every
physical line after that counts, later hunk headers and removals included,
and the count never resets between hunks.
"""

import re
from typing import List, Optional

HUNK_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)


def find_diff_position(patch: Optional[str], target_line: int) -> Optional[int]:
    """
    Return the diff position of new-file line `target_line`, or None.

    Only added lines are addressable: a target that falls on a context
    line, a removed line or outside every hunk is not found.
    """
    if not patch or target_line < 1:
        return None

    file_line = 0
    position = 0
    in_hunk = False

    for raw in patch.splitlines():
        m = HUNK_RE.match(raw)
        if m:
            # the first header is position 0; later headers count like any line
            if in_hunk:
                position += 1
            in_hunk = True
            file_line = int(m.group("new_start")) - 1
            continue

        # file headers before the first hunk are not part of the position count
        if not in_hunk:
            continue

        position += 1

        if raw.startswith("+"):
            file_line += 1
            if file_line == target_line:
                return position
        elif raw.startswith("-"):
            continue
        elif raw.startswith("\\"):
            # "\ No newline at end of file"
            continue
        else:
            file_line += 1

    return None


def added_line_numbers(patch: Optional[str]) -> List[int]:
    """New-file line numbers of every added line in `patch`."""
    numbers: List[int] = []
    if not patch:
        return numbers

    file_line = None
    for raw in patch.splitlines():
        m = HUNK_RE.match(raw)
        if m:
            file_line = int(m.group("new_start")) - 1
            continue
        if file_line is None or raw.startswith("-") or raw.startswith("\\"):
            continue
        file_line += 1
        if raw.startswith("+"):
            numbers.append(file_line)
    return numbers
