"""Lazy tokenizer for the page markup: classifies raw text into Tokens"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from blogbuild.errors import ExpectedTokenOfClass, UnexpectedEof, UnrecognizedToken


class TokenClass(Enum):
    ALPHANUMERIC = "alphanumeric"   # run of plain text, escapes resolved
    NEWLINE = "newline"
    HASH = "#"
    CARET = "^"
    ASTERISK = "*"
    UNDERSCORE = "_"
    LBRACKET = "["
    RBRACKET = "]"
    PIPE = "|"
    GT = ">"
    TILDE = "~"
    BACKTICK = "`"
    LBRACE = "{"
    RBRACE = "}"
    DIRECTIVE = "@"                 # value holds the directive word as written


MARKERS: dict[str, TokenClass] = {
    c.value: c for c in TokenClass
    if len(c.value) == 1 and c is not TokenClass.DIRECTIVE
}

ESCAPE = "\\"
DIRECTIVE_SIGIL = "@"
_TEXT_STOPS = frozenset(MARKERS) | {"\n", "\r", DIRECTIVE_SIGIL}


@dataclass(frozen=True)
class Token:
    cls: TokenClass
    value: str

    @property
    def source(self) -> str:
        """The token as it reads in the input, escapes resolved."""
        if self.cls is TokenClass.DIRECTIVE:
            return DIRECTIVE_SIGIL + self.value
        return self.value


def _is_control(ch: str) -> bool:
    """True for C0 control characters the grammar has no use for."""
    return (ord(ch) < 0x20 and ch not in "\t\n\r") or ch == "\x7f"


def _where(text: str, i: int) -> str:
    line = text.count("\n", 0, i) + 1
    return f"line {line}: {text[i]!r}"


def tokenize(text: str) -> Iterator[Token]:
    """Yield tokens for text. Raises UnrecognizedToken on unclassifiable input."""
    i, n = 0, len(text)
    while i < n:
        ch = text[i]

        if ch == "\n":
            yield Token(TokenClass.NEWLINE, "\n")
            i += 1
        elif ch == "\r":
            if text.startswith("\r\n", i):
                yield Token(TokenClass.NEWLINE, "\n")
                i += 2
                continue
            raise UnrecognizedToken(_where(text, i))
        elif ch == DIRECTIVE_SIGIL:
            j = i + 1
            while j < n and text[j].isascii() and text[j].isalpha():
                j += 1
            if j == i + 1:
                raise UnrecognizedToken(_where(text, i))
            yield Token(TokenClass.DIRECTIVE, text[i + 1:j])
            i = j
        elif ch in MARKERS:
            yield Token(MARKERS[ch], ch)
            i += 1
        else:
            # Plain run; an escape pulls the next character in verbatim.
            chars: list[str] = []
            while i < n and text[i] not in _TEXT_STOPS:
                c = text[i]
                if c == ESCAPE:
                    if i + 1 >= n:
                        raise UnrecognizedToken("dangling escape at end of input")
                    chars.append(text[i + 1])
                    i += 2
                    continue
                if _is_control(c):
                    raise UnrecognizedToken(_where(text, i))
                chars.append(c)
                i += 1
            yield Token(TokenClass.ALPHANUMERIC, "".join(chars))


class Scanner:
    """Single-token lookahead over a lazy token stream. Not restartable."""

    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._peeked: Token | None = None

    def __iter__(self) -> Iterator[Token]:
        while (token := self.advance()) is not None:
            yield token

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at end of input."""
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def advance(self) -> Token | None:
        """Consume and return the next token, or None at end of input."""
        token = self.peek()
        self._peeked = None
        return token

    def expect(self, cls: TokenClass) -> Token:
        """Consume the next token, which must be of class cls."""
        token = self.advance()
        if token is None:
            raise UnexpectedEof(f"expected {cls.name}")
        if token.cls is not cls:
            raise ExpectedTokenOfClass(f"{cls.name}, got {token.cls.name} {token.value!r}")
        return token

    def at(self, *classes: TokenClass) -> bool:
        """True if the next token is one of classes."""
        token = self.peek()
        return token is not None and token.cls in classes
