"""Integration tests for the compile, build and parse commands"""

import json

from typer.testing import CliRunner

from blogbuild.cli.cli import app


runner = CliRunner()


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_compile_cmd_creates_then_skips(tmp_path):
    """compile writes the page once; an immediate rerun leaves it unchanged."""
    src = _write(tmp_path / "about.txt", "@page About\n# About me\n@date\n")

    first = runner.invoke(app, ["compile", str(src)])
    assert first.exit_code == 0, first.output
    assert "created" in first.output
    assert (tmp_path / "about.html").exists()

    second = runner.invoke(app, ["compile", str(src)])
    assert second.exit_code == 0, second.output
    assert "unchanged" in second.output


def test_compile_cmd_diff_on_update(tmp_path):
    """--diff prints a unified diff when the page is rewritten."""
    src = _write(tmp_path / "post.txt", "# Old\n")
    runner.invoke(app, ["compile", str(src)])
    src.write_text("# New\n", encoding="utf-8")

    result = runner.invoke(app, ["compile", str(src), "--diff"])
    assert result.exit_code == 0, result.output
    assert "updated (+1 -1)" in result.output
    assert "-<h1>Old</h1>" in result.output
    assert "+<h1>New</h1>" in result.output


def test_compile_cmd_reports_error(tmp_path):
    """A parse failure prints one [ERROR] line and exits 1."""
    src = _write(tmp_path / "bad.txt", "> quote with no citation\n")
    result = runner.invoke(app, ["compile", str(src)])
    assert result.exit_code == 1
    assert "[ERROR] unexpected end of file" in result.output
    assert not (tmp_path / "bad.html").exists()


def test_compile_cmd_missing_file(tmp_path):
    result = runner.invoke(app, ["compile", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "[ERROR] cannot find file" in result.output


def test_build_cmd_runs_whole_directory(tmp_path):
    """build compiles every .txt file under the directory and prints a summary."""
    _write(tmp_path / "site" / "index.txt", "@page Home\n# Welcome\n")
    _write(tmp_path / "site" / "posts" / "first.txt", "# First post\nHello *world*.\n")

    result = runner.invoke(app, ["build", str(tmp_path / "site")])
    assert result.exit_code == 0, result.output
    assert f"Building {tmp_path / 'site'}" in result.output
    index = tmp_path / "site" / "index"
    assert f"  {index}.txt -> {index}.html created" in result.output
    assert "Done. updated=2 unchanged=0 total=2" in result.output
    assert (tmp_path / "site" / "posts" / "first.html").exists()

    again = runner.invoke(app, ["build", str(tmp_path / "site")])
    assert f"  {index}.txt -> {index}.html unchanged" in again.output
    assert "Done. updated=0 unchanged=2 total=2" in again.output


def test_build_cmd_missing_directory(tmp_path):
    result = runner.invoke(app, ["build", str(tmp_path / "nowhere")])
    assert result.exit_code == 1
    assert "[ERROR] cannot read input directory" in result.output


def test_build_cmd_rejects_bad_policy(tmp_path):
    """Invalid settings are reported through the same [ERROR] channel."""
    (tmp_path / "site").mkdir()
    result = runner.invoke(app, ["build", str(tmp_path / "site"), "--policy", "never"])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_parse_cmd_writes_json(tmp_path):
    """parse dumps the node tree with the resolved page name."""
    src = _write(tmp_path / "page.txt", "@page Notes\n_hi_\n")
    out = tmp_path / "page.json"
    result = runner.invoke(app, ["parse", str(src), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert f"  {src} -> {out}" in result.output

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["page_name"] == "Notes"
    assert [n["kind"] for n in data["nodes"]] == ["page_name", "line_break", "paragraph", "line_break"]
    assert data["nodes"][2]["children"][0]["kind"] == "italic"


def test_parse_cmd_unwritable_out(tmp_path):
    """A JSON target that cannot be written is reported as [ERROR], not a traceback."""
    src = _write(tmp_path / "page.txt", "# Hi\n")
    result = runner.invoke(app, ["parse", str(src), "--out", str(tmp_path / "missing" / "page.json")])
    assert result.exit_code == 1
    assert "[ERROR] cannot write to file" in result.output
