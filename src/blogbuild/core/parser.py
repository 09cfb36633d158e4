"""Dispatch-table driven recursive descent over the token stream"""

from __future__ import annotations

from types import MappingProxyType

from blogbuild.core.models import Node, Text
from blogbuild.core.parselets import BLOCK_PARSELETS, INLINE_PARSELETS, LINE_END, Parselet
from blogbuild.core.scanner import Scanner, Token, TokenClass
from blogbuild.errors import UnexpectedEof, UnrecognizedControlSequence


def dispatch_key(token: Token) -> object:
    """Directives share one class, so their word disambiguates the handler."""
    if token.cls is TokenClass.DIRECTIVE:
        return (token.cls, token.value.lower())
    return token.cls


def _describe(token: Token) -> str:
    if token.cls is TokenClass.DIRECTIVE:
        return f"@{token.value}"
    return repr(token.value)


class Parser:
    """Builds the document node sequence for one text. Holds no per-document state."""

    def __init__(self) -> None:
        self.block_parselets: MappingProxyType = MappingProxyType(dict(BLOCK_PARSELETS))
        self.inline_parselets: MappingProxyType = MappingProxyType(dict(INLINE_PARSELETS))

    def parse(self, text: str) -> list[Node]:
        """Parse text into an ordered top-level node list."""
        scanner = Scanner(text)
        nodes: list[Node] = []
        while True:
            self.skip_blank(scanner)
            token = scanner.advance()
            if token is None:
                return nodes
            nodes.append(self.dispatch(scanner, token, block=True))

    def lookup(self, token: Token, block: bool = False) -> Parselet:
        table = self.block_parselets if block else self.inline_parselets
        parselet = table.get(dispatch_key(token))
        if parselet is None:
            raise UnrecognizedControlSequence(_describe(token))
        return parselet

    def dispatch(self, scanner: Scanner, token: Token, block: bool = False) -> Node:
        """Hand an already-consumed token to its parselet."""
        return self.lookup(token, block).parse(self, scanner, token)

    def parse_until(
        self,
        scanner: Scanner,
        stop: set[TokenClass] | frozenset[TokenClass],
        block: bool = False,
        eof_ok: bool = False,
        ) -> tuple[Node, ...]:
        """Parse children until the next token is in stop (left unconsumed).

        Raises UnexpectedEof if input ends first, unless eof_ok.
        """
        children: list[Node] = []
        while True:
            if block:
                self.skip_blank(scanner)
            token = scanner.peek()
            if token is None:
                if eof_ok:
                    break
                raise UnexpectedEof("expected " + " or ".join(sorted(c.name for c in stop)))
            if token.cls in stop:
                break
            children.append(self.dispatch(scanner, scanner.advance(), block=block))
        return tuple(children)

    def parse_line(self, scanner: Scanner) -> tuple[Node, ...]:
        """Inline content up to the end of the line or input, whitespace-trimmed."""
        return self.trim(self.parse_until(scanner, LINE_END, eof_ok=True))

    @staticmethod
    def skip_blank(scanner: Scanner) -> None:
        while scanner.at(TokenClass.ALPHANUMERIC) and not scanner.peek().value.strip():
            scanner.advance()

    @staticmethod
    def trim(children: tuple[Node, ...]) -> tuple[Node, ...]:
        """Strip outer whitespace from edge text nodes, dropping ones left empty."""
        nodes = list(children)
        if nodes and isinstance(nodes[0], Text):
            nodes[0] = Text(value=nodes[0].value.lstrip())
        if nodes and isinstance(nodes[-1], Text):
            nodes[-1] = Text(value=nodes[-1].value.rstrip())
        return tuple(n for n in nodes if not (isinstance(n, Text) and not n.value))
