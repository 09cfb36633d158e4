"""Change-aware publish decision and all-or-nothing output write"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from blogbuild.core.emit import DATE_MARKER_CLASS
from blogbuild.core.utils.diff import Opcode, diff_lines, diff_summary, unified_diff
from blogbuild.errors import CannotOpenFile, CannotReadFile, CannotWriteFile


CONTENT_POLICY = "content"   # ignore pure date-text churn
EXACT_POLICY = "exact"       # rewrite on any byte difference


@dataclass(frozen=True)
class ChangeSummary:
    substantive: int = 0
    dates_removed: int = 0
    dates_added: int = 0

    @property
    def date_presence_changed(self) -> bool:
        return self.dates_added != self.dates_removed

    @property
    def requires_write(self) -> bool:
        return self.substantive > 0 or self.date_presence_changed


@dataclass
class PublishResult:
    path: Path
    written: bool
    created: bool = False
    stats: dict[str, int] = field(default_factory=dict)
    diff: list[str] = field(default_factory=list)
    source: Path | None = None


DATE_LINE = re.compile(rf'<p class="{DATE_MARKER_CLASS}">Last Updated [^<]*</p>')


def is_date_line(line: str) -> bool:
    """True only for a line holding exactly the rendered date paragraph."""
    return DATE_LINE.fullmatch(line.strip()) is not None


def classify_changes(opcodes: list[Opcode], old_lines: list[str], new_lines: list[str]) -> ChangeSummary:
    """Split every differing line into date-line churn or substantive change."""
    substantive = dates_removed = dates_added = 0
    for tag, i1, i2, j1, j2 in opcodes:
        if tag == "equal":
            continue
        for line in old_lines[i1:i2]:
            if is_date_line(line):
                dates_removed += 1
            else:
                substantive += 1
        for line in new_lines[j1:j2]:
            if is_date_line(line):
                dates_added += 1
            else:
                substantive += 1
    return ChangeSummary(substantive, dates_removed, dates_added)


def needs_update(old: bytes | None, new: bytes, policy: str = CONTENT_POLICY) -> bool:
    """Decide whether new must overwrite the previous output old (None if absent)."""
    if old is None:
        return True
    if policy == EXACT_POLICY:
        return old != new
    old_lines = old.decode("utf-8", errors="replace").splitlines()
    new_lines = new.decode("utf-8", errors="replace").splitlines()
    return classify_changes(diff_lines(old_lines, new_lines), old_lines, new_lines).requires_write


def read_previous(path: Path) -> bytes | None:
    """Prior output bytes, or None if there is none yet."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise CannotReadFile(path) from e


def write_output(path: Path, data: bytes) -> None:
    """Create or truncate path and write data in one call."""
    try:
        f = path.open("wb")
    except OSError as e:
        raise CannotOpenFile(path) from e
    with f:
        try:
            f.write(data)
        except OSError as e:
            raise CannotWriteFile(path) from e


def publish(path: Path, data: bytes, policy: str = CONTENT_POLICY, with_diff: bool = False) -> PublishResult:
    """Write data to path unless the existing output makes it redundant."""
    old = read_previous(path)
    if not needs_update(old, data, policy):
        return PublishResult(path=path, written=False)

    result = PublishResult(path=path, written=True, created=old is None)
    if old is not None:
        old_text = old.decode("utf-8", errors="replace")
        new_text = data.decode("utf-8", errors="replace")
        result.stats = diff_summary(old_text, new_text)
        if with_diff:
            result.diff = unified_diff(old_text, new_text, f"a/{path.name}", f"b/{path.name}")
    write_output(path, data)
    return result
