"""Unit tests for core/publish.py"""

import pytest

from blogbuild.core.publish import (
    EXACT_POLICY,
    ChangeSummary,
    classify_changes,
    is_date_line,
    needs_update,
    publish,
    read_previous,
    write_output,
)
from blogbuild.core.utils.diff import diff_lines
from blogbuild.errors import CannotOpenFile


DATE_MON = '<p class="last-updated-date">Last Updated Monday, October 19, 2026</p>'
DATE_TUE = '<p class="last-updated-date">Last Updated Tuesday, October 20, 2026</p>'


def _classify(old: list[str], new: list[str]) -> ChangeSummary:
    return classify_changes(diff_lines(old, new), old, new)


def _page(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


# --- classify_changes ---

def test_date_text_only_is_not_a_write():
    """A date line whose text changed counts as churn, not substance."""
    summary = _classify(["<h1>A</h1>", DATE_MON, "</body>"], ["<h1>A</h1>", DATE_TUE, "</body>"])
    assert summary == ChangeSummary(substantive=0, dates_removed=1, dates_added=1)
    assert not summary.requires_write


def test_date_line_added():
    """Introducing a date line changes its presence."""
    summary = _classify(["<h1>A</h1>"], ["<h1>A</h1>", DATE_MON])
    assert summary.date_presence_changed
    assert summary.requires_write


def test_date_line_removed():
    summary = _classify(["<h1>A</h1>", DATE_MON], ["<h1>A</h1>"])
    assert summary.dates_removed == 1
    assert summary.requires_write


def test_substantive_change():
    """Any non-date line change requires a write even if the date also moved."""
    summary = _classify(["<h1>A</h1>", DATE_MON], ["<h1>B</h1>", DATE_TUE])
    assert summary.substantive == 2
    assert summary.requires_write


@pytest.mark.parametrize("line", [
    '<p>Style last-updated-date in red</p>',
    '<h1 class="title">Hello</h1>' + DATE_MON,
    DATE_MON + "<menu></menu>",
])
def test_is_date_line_requires_whole_line(line):
    """Lines that merely contain the marker class are content."""
    assert not is_date_line(line)
    assert is_date_line("  " + DATE_MON)


def test_no_changes():
    assert _classify(["a", "b"], ["a", "b"]) == ChangeSummary()


# --- needs_update ---

def test_needs_update_without_previous():
    assert needs_update(None, b"anything")


def test_needs_update_content_policy_ignores_date():
    assert not needs_update(_page("<p>x</p>", DATE_MON), _page("<p>x</p>", DATE_TUE))


def test_needs_update_exact_policy_rewrites_on_date():
    """The byte-exact policy treats a date-only change as a change."""
    assert needs_update(_page("<p>x</p>", DATE_MON), _page("<p>x</p>", DATE_TUE), EXACT_POLICY)
    assert not needs_update(_page("<p>x</p>"), _page("<p>x</p>"), EXACT_POLICY)


# --- file operations ---

def test_read_previous_absent(tmp_path):
    assert read_previous(tmp_path / "page.html") is None


def test_write_output_truncates(tmp_path):
    """Writing replaces the whole previous content."""
    target = tmp_path / "page.html"
    target.write_bytes(b"a much longer previous page")
    write_output(target, b"short")
    assert target.read_bytes() == b"short"


def test_write_output_missing_directory(tmp_path):
    with pytest.raises(CannotOpenFile):
        write_output(tmp_path / "missing" / "page.html", b"x")


def test_publish_creates_then_skips_date_churn(tmp_path):
    """First publish writes; a date-only rerun leaves the file untouched."""
    target = tmp_path / "page.html"
    first = publish(target, _page("<p>x</p>", DATE_MON))
    assert first.written and first.created
    assert target.read_bytes() == _page("<p>x</p>", DATE_MON)

    second = publish(target, _page("<p>x</p>", DATE_TUE))
    assert not second.written
    assert target.read_bytes() == _page("<p>x</p>", DATE_MON)


def test_publish_update_reports_stats_and_diff(tmp_path):
    """A substantive update carries line stats and, on request, a unified diff."""
    target = tmp_path / "page.html"
    target.write_bytes(_page("<p>old</p>"))
    result = publish(target, _page("<p>new</p>"), with_diff=True)
    assert result.written and not result.created
    assert result.stats == {"added": 1, "deleted": 1, "unchanged": 0}
    assert "+<p>new</p>\n" in result.diff
    assert target.read_bytes() == _page("<p>new</p>")
