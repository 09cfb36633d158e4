"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional

import typer

from blogbuild.cli.commands import build_cmd, compile_cmd, parse_cmd, version_callback


app = typer.Typer(name="blogbuild", no_args_is_help=True, help="Compile page markup into HTML pages")


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option(
        "--version", callback=version_callback, is_eager=True, help="Show the version and exit",
    )] = None,
    ):
    """Blog Builder: compile one page or build a whole directory."""


app.command(name="compile")(compile_cmd)
app.command(name="build")(build_cmd)
app.command(name="parse")(parse_cmd)
