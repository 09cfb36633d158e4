"""HTML rendering of a parsed document tree"""

from pathlib import Path

from blogbuild.core.models import (
    BlockQuote, Bold, Code, Date, FloatingImage, Footer, Footnote, Footnotes,
    Header, Heading, Hyperlink, Image, Italic, LineBreak, Menu, Metadata,
    PageName, Paragraph, Subheading, Text, Tile, Tiles, Title, Topblock,
)
from blogbuild.errors import CannotOpenFile


DATE_MARKER_CLASS = "last-updated-date"

# Composite nodes that render as open tag + children + close tag.
WRAPPERS: dict[type, tuple[str, str]] = {
    Title:     ('<h1 class="title">', "</h1>"),
    Paragraph: ("<p>", "</p>"),
    Bold:      ("<strong>", "</strong>"),
    Italic:    ("<em>", "</em>"),
    Header:    ('<h1 class="header">', "</h1>"),
    Footer:    ('<h6 class="footer">', "</h6>"),
    Topblock:  ('<div class="topblock">', "</div>"),
    Footnote:  ("<footnote>", "</footnote>"),
    Tiles:     ('<div class="tiles">\n', "\n</div>"),
}

# Stateless leaves with fixed markup.
FIXED: dict[type, str] = {
    LineBreak: "\n",
    Menu:      "<menu></menu>",
    Footnotes: "<footnotes></footnotes>",
    PageName:  "",
}

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{lang}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<link rel="stylesheet" href="{stylesheet}">
</head>
<body>
{body}
</body>
</html>
"""


def escape_code(code: str) -> str:
    """Only angle brackets are escaped; raw < and > would be read as tags."""
    return code.replace("<", "&lt;").replace(">", "&gt;")


class Emitter:
    """Render nodes to HTML bytes. Code and Date nodes read the filesystem and clock."""

    def __init__(self, metadata: Metadata) -> None:
        self.metadata = metadata

    def emit(self, nodes: list, page_name: str) -> bytes:
        """Render a full page for nodes titled page_name."""
        html = PAGE_TEMPLATE.format(
            lang=self.metadata.lang,
            title=page_name,
            stylesheet=self.metadata.stylesheet,
            body=self.render_all(nodes),
        )
        return html.encode("utf-8")

    def render_all(self, nodes) -> str:
        return "".join(self.render(n) for n in nodes)

    def render(self, node) -> str:
        kind = type(node)
        if kind in FIXED:
            return FIXED[kind]
        if kind in WRAPPERS:
            open_tag, close_tag = WRAPPERS[kind]
            return f"{open_tag}{self.render_all(node.children)}{close_tag}"

        if isinstance(node, Text):
            return node.value
        if isinstance(node, Heading):
            return f"<h{node.level}>{self.render_all(node.children)}</h{node.level}>"
        if isinstance(node, Subheading):
            return (
                f'<h{node.level} class="subheading">'
                f"{self.render_all(node.children)}</h{node.level}>"
            )
        if isinstance(node, BlockQuote):
            return (
                f'<p class="block">{self.render_all(node.quote)}</p>'
                f'<p class="citation">~ {self.render_all(node.citation)}</p>'
            )
        if isinstance(node, Hyperlink):
            return f'<a href="{node.href}">{self.render_all(node.children)}</a>'
        if isinstance(node, Tile):
            return (
                f'<a class="tile" href="{node.href}" style="background-image: '
                f"url('{node.img}'); background-position: center;\">"
                f"{self.render_all(node.children)}</a>"
            )
        if isinstance(node, Image):
            return f'<img src="{node.src}" style="height: {node.scale}px;" alt="{node.alt}">'
        if isinstance(node, FloatingImage):
            return f'<img src="{node.src}" class="floating" alt="{node.alt}">'
        if isinstance(node, Code):
            return self.render_code(node)
        if isinstance(node, Date):
            return self.render_date()
        raise TypeError(f"cannot render {kind.__name__}")

    def render_code(self, node: Code) -> str:
        path = Path(node.path)
        if not path.is_absolute():
            path = self.metadata.snippet_dir / path
        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CannotOpenFile(path) from e
        return f'<pre><code class="language-{node.language}">{escape_code(code)}</code></pre>'

    def render_date(self) -> str:
        """The date paragraph always occupies a line of its own."""
        date = self.metadata.now.strftime(self.metadata.date_format)
        return f'\n<p class="{DATE_MARKER_CLASS}">Last Updated {date}</p>\n'
