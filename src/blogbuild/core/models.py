"""Document tree node kinds and per-compile metadata"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    """Immutable tree node. Children are owned tuples; no back-references."""
    model_config = ConfigDict(frozen=True)


# --- leaves ---

class Text(_Node):
    kind: Literal["text"] = "text"
    value: str


class LineBreak(_Node):
    kind: Literal["line_break"] = "line_break"


class Menu(_Node):
    kind: Literal["menu"] = "menu"


class Footnotes(_Node):
    kind: Literal["footnotes"] = "footnotes"


class Date(_Node):
    """Renders the compile-time date; the publisher special-cases its line."""
    kind: Literal["date"] = "date"


class PageName(_Node):
    """Metadata carrier: never renders, only names the page."""
    kind: Literal["page_name"] = "page_name"
    name: str


class Code(_Node):
    kind: Literal["code"] = "code"
    language: str
    path: str


class Image(_Node):
    kind: Literal["image"] = "image"
    src: str
    alt: str
    scale: str


class FloatingImage(_Node):
    kind: Literal["floating_image"] = "floating_image"
    src: str
    alt: str


# --- composites ---

class Heading(_Node):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    children: tuple[Node, ...] = ()


class Subheading(_Node):
    kind: Literal["subheading"] = "subheading"
    level: int = Field(ge=1, le=6)
    children: tuple[Node, ...] = ()


class Title(_Node):
    kind: Literal["title"] = "title"
    children: tuple[Node, ...] = ()


class Paragraph(_Node):
    kind: Literal["paragraph"] = "paragraph"
    children: tuple[Node, ...] = ()


class Bold(_Node):
    kind: Literal["bold"] = "bold"
    children: tuple[Node, ...] = ()


class Italic(_Node):
    kind: Literal["italic"] = "italic"
    children: tuple[Node, ...] = ()


class BlockQuote(_Node):
    kind: Literal["blockquote"] = "blockquote"
    quote: tuple[Node, ...] = ()
    citation: tuple[Node, ...] = ()


class Hyperlink(_Node):
    kind: Literal["hyperlink"] = "hyperlink"
    children: tuple[Node, ...] = ()
    href: str


class Tile(_Node):
    kind: Literal["tile"] = "tile"
    children: tuple[Node, ...] = ()
    img: str
    href: str


class Header(_Node):
    kind: Literal["header"] = "header"
    children: tuple[Node, ...] = ()


class Footer(_Node):
    kind: Literal["footer"] = "footer"
    children: tuple[Node, ...] = ()


class Topblock(_Node):
    kind: Literal["topblock"] = "topblock"
    children: tuple[Node, ...] = ()


class Footnote(_Node):
    kind: Literal["footnote"] = "footnote"
    children: tuple[Node, ...] = ()


class Tiles(_Node):
    kind: Literal["tiles"] = "tiles"
    children: tuple[Node, ...] = ()


Node = Annotated[
    Union[
        Text, LineBreak, Menu, Footnotes, Date, PageName, Code, Image, FloatingImage,
        Heading, Subheading, Title, Paragraph, Bold, Italic, BlockQuote, Hyperlink,
        Tile, Header, Footer, Topblock, Footnote, Tiles,
    ],
    Field(discriminator="kind"),
]

for _model in (Heading, Subheading, Title, Paragraph, Bold, Italic, BlockQuote,
               Hyperlink, Tile, Header, Footer, Topblock, Footnote, Tiles):
    _model.model_rebuild()


class DocumentTree(BaseModel):
    """Top-level node sequence; used to dump a parsed page as JSON."""
    model_config = ConfigDict(frozen=True)
    page_name: str
    nodes: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Metadata:
    """Run-time inputs to rendering that do not come from the markup."""
    source: Path
    now: datetime
    snippet_dir: Path
    stylesheet: str = "style.css"
    date_format: str = "%A, %B %d, %Y"
    lang: str = "en"


def resolve_page_name(nodes: list, default: str) -> str:
    """Page name is the first node's payload when it is a PageName, else default."""
    if nodes and isinstance(nodes[0], PageName):
        return nodes[0].name
    return default
