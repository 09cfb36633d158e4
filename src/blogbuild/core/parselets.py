"""Prefix parselets: one handler per construct, keyed by triggering token"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from blogbuild.core.models import (
    BlockQuote, Bold, Code, Date, FloatingImage, Footer, Footnote, Footnotes,
    Header, Heading, Hyperlink, Image, Italic, LineBreak, Menu, Node, PageName,
    Paragraph, Subheading, Text, Tile, Tiles, Title, Topblock,
)
from blogbuild.core.scanner import Scanner, Token, TokenClass
from blogbuild.errors import ExpectedTokenOfClass, TooManyHashes

if TYPE_CHECKING:
    from blogbuild.core.parser import Parser


MAX_LEVEL = 6

T = TokenClass
D = TokenClass.DIRECTIVE

# Line constructs end at a newline, or at the brace closing an enclosing body.
LINE_END = frozenset({T.NEWLINE, T.RBRACE})


class Parselet(Protocol):
    def parse(self, parser: Parser, scanner: Scanner, token: Token) -> Node:
        """Consume the tokens of one construct (token already consumed) and return its node."""
        ...


def _text(scanner: Scanner) -> str:
    """Next token must be a text run; return it stripped."""
    return scanner.expect(T.ALPHANUMERIC).value.strip()


def _payload(scanner: Scanner, stop: frozenset[TokenClass]) -> str:
    """Raw text of every token up to a stop class or the end of the line, stripped.

    Markers are not interpreted here, so URLs and paths keep '#', '_', '~' and '@'.
    """
    parts = []
    while (nxt := scanner.peek()) is not None and nxt.cls not in stop and nxt.cls is not T.NEWLINE:
        parts.append(scanner.advance().source)
    return "".join(parts).strip()


_ARGUMENT_END = frozenset({T.PIPE, T.RBRACE})


def _arguments(scanner: Scanner, count: int) -> list[str]:
    """Parse '{a|b|...}' with exactly count raw-text arguments."""
    scanner.expect(T.LBRACE)
    args = []
    for i in range(count):
        if i:
            scanner.expect(T.PIPE)
        args.append(_payload(scanner, _ARGUMENT_END))
    scanner.expect(T.RBRACE)
    return args


class TextParselet:
    def parse(self, parser, scanner, token):
        return Text(value=token.value)


class NewlineParselet:
    """Collapse a run of newlines and blank text into one LineBreak."""

    def parse(self, parser, scanner, token):
        while (nxt := scanner.peek()) is not None:
            if nxt.cls is T.NEWLINE or (nxt.cls is T.ALPHANUMERIC and not nxt.value.strip()):
                scanner.advance()
            else:
                break
        return LineBreak()


class ParagraphParselet:
    """A line of inline content; the triggering token is its first element."""

    def parse(self, parser, scanner, token):
        first = parser.dispatch(scanner, token)
        rest = parser.parse_until(scanner, LINE_END, eof_ok=True)
        return Paragraph(children=parser.trim((first, *rest)))


class HeadingParselet:
    """Count a run of the marker for the level, then read the rest of the line."""

    def __init__(self, node_cls: type[Heading] | type[Subheading]) -> None:
        self.node_cls = node_cls

    def parse(self, parser, scanner, token):
        level = 1
        while scanner.at(token.cls):
            scanner.advance()
            level += 1
            if level > MAX_LEVEL:
                raise TooManyHashes(f"{level} > {MAX_LEVEL}")
        return self.node_cls(level=level, children=parser.parse_line(scanner))


class DelimitedParselet:
    """Inline span closed by a matching marker, e.g. *bold* and _italic_."""

    def __init__(self, node_cls: type[Bold] | type[Italic], closer: TokenClass) -> None:
        self.node_cls = node_cls
        self.closer = closer

    def parse(self, parser, scanner, token):
        children = parser.parse_until(scanner, {self.closer})
        scanner.expect(self.closer)
        return self.node_cls(children=children)


class HyperlinkParselet:
    """[name|href]"""

    def parse(self, parser, scanner, token):
        name = parser.parse_until(scanner, {T.PIPE})
        scanner.expect(T.PIPE)
        href = _payload(scanner, frozenset({T.RBRACKET}))
        scanner.expect(T.RBRACKET)
        return Hyperlink(children=name, href=href)


class BlockQuoteParselet:
    """> quote ~ citation"""

    def parse(self, parser, scanner, token):
        quote = parser.trim(parser.parse_until(scanner, {T.TILDE}))
        scanner.expect(T.TILDE)
        return BlockQuote(quote=quote, citation=parser.parse_line(scanner))


class CodeParselet:
    """`language|path/to/snippet`"""

    def parse(self, parser, scanner, token):
        language = _text(scanner)
        scanner.expect(T.PIPE)
        path = _payload(scanner, frozenset({T.BACKTICK}))
        scanner.expect(T.BACKTICK)
        return Code(language=language, path=path)


class PageNameParselet:
    """@page Name, alone on its line."""

    def parse(self, parser, scanner, token):
        name = _text(scanner)
        nxt = scanner.peek()
        if nxt is not None and nxt.cls is not T.NEWLINE:
            raise ExpectedTokenOfClass(f"NEWLINE, got {nxt.cls.name} {nxt.value!r}")
        return PageName(name=name)


class MarkerParselet:
    """Stateless directive with no payload."""

    def __init__(self, node_cls: type[Menu] | type[Footnotes] | type[Date]) -> None:
        self.node_cls = node_cls

    def parse(self, parser, scanner, token):
        return self.node_cls()


class BodyParselet:
    """@name{...}; block bodies may hold headings and paragraphs."""

    def __init__(self, node_cls, block: bool = False) -> None:
        self.node_cls = node_cls
        self.block = block

    def parse(self, parser, scanner, token):
        scanner.expect(T.LBRACE)
        children = parser.parse_until(scanner, {T.RBRACE}, block=self.block)
        scanner.expect(T.RBRACE)
        if not self.block:
            children = parser.trim(children)
        return self.node_cls(children=children)


class TileParselet:
    """@tile{name|img|href}"""

    def parse(self, parser, scanner, token):
        scanner.expect(T.LBRACE)
        name = parser.trim(parser.parse_until(scanner, {T.PIPE}))
        scanner.expect(T.PIPE)
        img = _payload(scanner, _ARGUMENT_END)
        scanner.expect(T.PIPE)
        href = _payload(scanner, _ARGUMENT_END)
        scanner.expect(T.RBRACE)
        return Tile(children=name, img=img, href=href)


class ImageParselet:
    """@img{src|alt|scale}"""

    def parse(self, parser, scanner, token):
        src, alt, scale = _arguments(scanner, 3)
        return Image(src=src, alt=alt, scale=scale)


class FloatingImageParselet:
    """@float{src|alt}"""

    def parse(self, parser, scanner, token):
        src, alt = _arguments(scanner, 2)
        return FloatingImage(src=src, alt=alt)


_paragraph = ParagraphParselet()
_newline = NewlineParselet()
_tile = TileParselet()

# Constructs allowed inside other constructs.
INLINE_PARSELETS: dict[object, Parselet] = {
    T.ALPHANUMERIC:  TextParselet(),
    T.NEWLINE:       _newline,
    T.ASTERISK:      DelimitedParselet(Bold, T.ASTERISK),
    T.UNDERSCORE:    DelimitedParselet(Italic, T.UNDERSCORE),
    T.LBRACKET:      HyperlinkParselet(),
    (D, "tile"):     _tile,
    (D, "img"):      ImageParselet(),
    (D, "float"):    FloatingImageParselet(),
    (D, "note"):     BodyParselet(Footnote),
}

# Constructs at top level and inside block bodies. Inline starters open a paragraph.
BLOCK_PARSELETS: dict[object, Parselet] = {
    T.ALPHANUMERIC:  _paragraph,
    T.ASTERISK:      _paragraph,
    T.UNDERSCORE:    _paragraph,
    T.LBRACKET:      _paragraph,
    (D, "img"):      _paragraph,
    (D, "float"):    _paragraph,
    (D, "note"):     _paragraph,
    T.NEWLINE:       _newline,
    T.HASH:          HeadingParselet(Heading),
    T.CARET:         HeadingParselet(Subheading),
    T.GT:            BlockQuoteParselet(),
    T.BACKTICK:      CodeParselet(),
    (D, "page"):     PageNameParselet(),
    (D, "title"):    BodyParselet(Title),
    (D, "header"):   BodyParselet(Header),
    (D, "footer"):   BodyParselet(Footer),
    (D, "top"):      BodyParselet(Topblock, block=True),
    (D, "tiles"):    BodyParselet(Tiles, block=True),
    (D, "tile"):     _tile,
    (D, "menu"):     MarkerParselet(Menu),
    (D, "footnotes"): MarkerParselet(Footnotes),
    (D, "date"):     MarkerParselet(Date),
}
