"""Pure utilities for line-level diffs between two text strings"""

import difflib
from typing import NamedTuple


class Opcode(NamedTuple):
    """One region of a line diff; old[i1:i2] became new[j1:j2]."""
    tag: str    # equal | replace | insert | delete
    i1: int
    i2: int
    j1: int
    j2: int


def _matcher(old_lines: list[str], new_lines: list[str]) -> difflib.SequenceMatcher:
    # Rendered pages repeat closing tags often; autojunk would treat them as noise.
    return difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)


def diff_lines(old_lines: list[str], new_lines: list[str]) -> list[Opcode]:
    """Return the opcodes turning old_lines into new_lines."""
    return [Opcode(*op) for op in _matcher(old_lines, new_lines).get_opcodes()]


def diff_summary(old: str, new: str) -> dict[str, int]:
    """Return added/deleted/unchanged line counts. Useful for compact change stats."""
    added = deleted = unchanged = 0
    for tag, i1, i2, j1, j2 in diff_lines(old.splitlines(), new.splitlines()):
        if tag == "equal":
            unchanged += i2 - i1
        else:
            deleted += i2 - i1
            added += j2 - j1
    return {"added": added, "deleted": deleted, "unchanged": unchanged}


def unified_diff(
    old: str,
    new: str,
    from_label: str = "old",
    to_label: str = "new",
    context: int = 3,
    ) -> list[str]:
    """Unified diff of old against new, hunked from the same opcodes diff_lines reports.

    Every returned line ends with a newline, so ''.join() is ready to print.
    Empty list if identical.
    """
    old_lines = old.splitlines()
    new_lines = new.splitlines()
    out: list[str] = []
    for group in _matcher(old_lines, new_lines).get_grouped_opcodes(context):
        if not out:
            out += [f"--- {from_label}\n", f"+++ {to_label}\n"]
        first, last = Opcode(*group[0]), Opcode(*group[-1])
        out.append(f"@@ -{_span(first.i1, last.i2)} +{_span(first.j1, last.j2)} @@\n")
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                out += [f" {line}\n" for line in old_lines[i1:i2]]
                continue
            out += [f"-{line}\n" for line in old_lines[i1:i2]]
            out += [f"+{line}\n" for line in new_lines[j1:j2]]
    return out


def _span(start: int, stop: int) -> str:
    """Hunk range as 'line,count'; a single line drops the count."""
    length = stop - start
    if length == 1:
        return str(start + 1)
    if not length:
        return f"{start},0"
    return f"{start + 1},{length}"
