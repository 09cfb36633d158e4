"""Per-file compile (scan -> parse -> emit -> publish) and directory builds"""

import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from blogbuild.config import Settings
from blogbuild.core.emit import Emitter
from blogbuild.core.models import DocumentTree, Metadata, Node, resolve_page_name
from blogbuild.core.parser import Parser
from blogbuild.core.publish import PublishResult, publish
from blogbuild.errors import (
    CannotExtractFileStem,
    CannotFindFile,
    CannotGetWorkingDirectory,
    CannotReadDir,
    CannotReadFile,
)


def resolve_input(path: str | Path) -> Path:
    """Absolute path for path, resolving relative ones against the working directory."""
    path = Path(path)
    if path.is_absolute():
        return path
    try:
        return Path.cwd() / path
    except OSError as e:
        raise CannotGetWorkingDirectory() from e


def discover_files(root: Path, extension: str = "txt") -> list[Path]:
    """Return sorted files under root with the extension, or [root] if it is a matching file."""
    suffix = f".{extension.lstrip('.')}"
    if root.is_file():
        return [root] if root.suffix == suffix else []
    if not root.is_dir():
        raise CannotReadDir(root)

    def _raise(e: OSError) -> None:
        raise CannotReadDir(e.filename) from e

    found = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        found.extend(Path(dirpath) / name for name in filenames if Path(name).suffix == suffix)
    return sorted(found)


def read_source(path: Path) -> str:
    if not path.is_file():
        raise CannotFindFile(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CannotReadFile(path) from e


def output_path(path: Path, extension: str = "html") -> Path:
    """Sibling of path with the same stem and the output extension."""
    if not path.stem or path.name in (".", ".."):
        raise CannotExtractFileStem(path)
    return path.with_name(f"{path.stem}.{extension.lstrip('.')}")


def parse_file(path: Path) -> list[Node]:
    return Parser().parse(read_source(path))


def parse_tree(path: Path, settings: Settings) -> DocumentTree:
    """Parsed document with its resolved page name, for JSON dumps."""
    nodes = parse_file(path)
    return DocumentTree(page_name=resolve_page_name(nodes, settings.default_title), nodes=tuple(nodes))


def compile_file(
    path: str | Path,
    settings: Settings,
    now: datetime = None,
    with_diff: bool = False,
    ) -> PublishResult:
    """Compile one source file to its sibling HTML page, writing only when needed."""
    source = resolve_input(path)
    nodes = parse_file(source)
    page_name = resolve_page_name(nodes, settings.default_title)

    metadata = Metadata(
        source=source,
        now=now or datetime.now(),
        snippet_dir=source.parent,
        stylesheet=settings.stylesheet,
        date_format=settings.date_format,
        lang=settings.lang,
    )
    html = Emitter(metadata).emit(nodes, page_name)
    result = publish(
        output_path(source, settings.output_extension), html, settings.publish_policy, with_diff,
    )
    result.source = source
    return result


def build_dir(
    root: str | Path,
    settings: Settings,
    now: datetime = None,
    with_diff: bool = False,
    ) -> Iterator[PublishResult]:
    """Compile every matching file under root, one at a time, yielding each result.

    Files are discovered up front; the first failure propagates and ends the build.
    """
    now = now or datetime.now()
    for p in discover_files(resolve_input(root), settings.input_extension):
        yield compile_file(p, settings, now, with_diff)
