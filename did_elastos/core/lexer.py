"""Tokenizer for DID URL strings."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from string import hexdigits

from ..const import DID_PREFIX, STRING_EXTRA_CHARS, WHITESPACE
from .errors import DIDUrlSyntaxError, InvalidHexError


class TokenKind(Enum):
    """The token alphabet of the DID URL grammar."""

    SEMICOLON = ";"
    SLASH = "/"
    QUESTION = "?"
    HASH = "#"
    COLON = ":"
    EQUALS = "="
    AMPERSAND = "&"
    DID = "did"
    STRING = "STRING"
    HEX = "HEX"
    SPACE = "SPACE"
    EOF = "EOF"


SEPARATORS = {
    kind.value: kind
    for kind in (
        TokenKind.SEMICOLON,
        TokenKind.SLASH,
        TokenKind.QUESTION,
        TokenKind.HASH,
        TokenKind.COLON,
        TokenKind.EQUALS,
        TokenKind.AMPERSAND,
    )
}

# token kinds which may be joined to form a grammar-level STRING
STRING_KINDS = frozenset((TokenKind.STRING, TokenKind.DID, TokenKind.HEX))


@dataclass(frozen=True)
class Token:
    """A token and its offset within the scanned text."""

    kind: TokenKind
    text: str
    position: int


def is_string_char(ch: str) -> bool:
    """Check whether a character may appear in a STRING token."""
    return ch.isalnum() or ch in STRING_EXTRA_CHARS


def tokenize(text: str) -> Iterator[Token]:
    """Scan a DID URL string, yielding tokens up to and including EOF.

    Tokens are produced lazily so that the first offending character is
    reported before anything that follows it.

    Raises:
        DIDUrlSyntaxError: on a character outside the token alphabet
        InvalidHexError: on a percent sign not followed by two hex digits

    """
    pos = 0
    end = len(text)
    while pos < end:
        ch = text[pos]
        start = pos
        if (kind := SEPARATORS.get(ch)) is not None:
            pos += 1
            yield Token(kind, ch, start)
        elif ch == "%":
            escape = text[pos + 1 : pos + 3]
            if len(escape) != 2 or not all(c in hexdigits for c in escape):
                raise InvalidHexError(start)
            pos += 3
            yield Token(TokenKind.HEX, text[start:pos], start)
        elif ch in WHITESPACE:
            while pos < end and text[pos] in WHITESPACE:
                pos += 1
            yield Token(TokenKind.SPACE, text[start:pos], start)
        elif is_string_char(ch):
            while pos < end and is_string_char(text[pos]):
                pos += 1
            word = text[start:pos]
            kind = TokenKind.DID if word == DID_PREFIX else TokenKind.STRING
            yield Token(kind, word, start)
        else:
            raise DIDUrlSyntaxError(start)
    yield Token(TokenKind.EOF, "", end)
