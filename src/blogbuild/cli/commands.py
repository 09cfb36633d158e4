"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from blogbuild.config import Settings, load_config
from blogbuild.core.pipeline import build_dir, compile_file, parse_tree, resolve_input
from blogbuild.core.publish import PublishResult
from blogbuild.errors import BlogBuildError, CannotWriteFile


VERSION = "0.1.0"


def _fail(error: Exception) -> None:
    """Print the single diagnostic line to stderr and exit 1."""
    msg = str(error)
    if not msg.startswith("[ERROR]"):
        msg = f"[ERROR] {msg}"
    typer.echo(msg, err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(e)


def _echo_result(result: PublishResult) -> None:
    """Print per-page status plus the diff when one was requested."""
    if not result.written:
        status = "unchanged"
    elif result.created:
        status = "created"
    else:
        status = f"updated (+{result.stats['added']} -{result.stats['deleted']})"
    typer.echo(f"  {result.source} -> {result.path} {status}")
    if result.diff:
        typer.echo("".join(result.diff), nl=False)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Blog Builder {VERSION}")
        raise typer.Exit()


def compile_cmd(
    path: Annotated[str, typer.Argument(help="Source file to compile")],
    diff: Annotated[bool, typer.Option("--diff", help="Print a unified diff when a page is rewritten")] = False,
    policy: Annotated[Optional[str], typer.Option("--policy", help="Publish policy: content or exact")] = None,
    stylesheet: Annotated[Optional[str], typer.Option("--stylesheet", help="Stylesheet href")] = None,
    ):
    """Compile one file into a sibling HTML page."""
    settings = _settings(overrides={"publish_policy": policy, "stylesheet": stylesheet})
    typer.echo(f"Compiling {path}")
    try:
        result = compile_file(path, settings, with_diff=diff)
    except BlogBuildError as e:
        _fail(e)
    _echo_result(result)


def build_cmd(
    path: Annotated[str, typer.Argument(help="Directory to build recursively")],
    diff: Annotated[bool, typer.Option("--diff", help="Print a unified diff when a page is rewritten")] = False,
    policy: Annotated[Optional[str], typer.Option("--policy", help="Publish policy: content or exact")] = None,
    stylesheet: Annotated[Optional[str], typer.Option("--stylesheet", help="Stylesheet href")] = None,
    ):
    """Compile every source file under a directory."""
    settings = _settings(overrides={"publish_policy": policy, "stylesheet": stylesheet})
    typer.echo(f"Building {path}")
    written = unchanged = 0
    try:
        for result in build_dir(path, settings, with_diff=diff):
            _echo_result(result)
            if result.written:
                written += 1
            else:
                unchanged += 1
    except BlogBuildError as e:
        _fail(e)
    typer.echo(f"Done. updated={written} unchanged={unchanged} total={written + unchanged}")


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Source file to parse")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write JSON here instead of stdout")] = None,
    ):
    """Print the parsed document tree as JSON."""
    settings = _settings()
    try:
        tree = parse_tree(resolve_input(path), settings)
    except BlogBuildError as e:
        _fail(e)
    dumped = tree.model_dump_json(indent=2)
    if out is None:
        typer.echo(dumped)
    else:
        try:
            out.write_text(dumped, encoding="utf-8")
        except OSError:
            _fail(CannotWriteFile(out))
        typer.echo(f"  {path} -> {out}")
