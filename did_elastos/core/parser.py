"""Recursive descent parser for the DID URL grammar.

The grammar handled here is::

    didurl      := [did] [';' params] ['/' path] ['?' query] ['#' frag]
    did         := 'did' ':' method ':' methodSpecificString
    params      := param (';' param)*
    param       := paramQName ['=' paramValue]
    paramQName  := [paramMethod ':'] paramName
    path        := STRING ('/' STRING)*
    query       := queryParam ('&' queryParam)*
    queryParam  := queryParamName ['=' queryParamValue]
    frag        := STRING

All offsets reported in errors refer to the input after surrounding
whitespace has been trimmed.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, TypeVar

from ..const import (
    METHOD_NAME,
    SEP_METHOD,
    SEP_PATH,
    STRING_LEADING_EXTRA_CHARS,
    WHITESPACE,
)
from .errors import (
    DIDUrlError,
    DIDUrlSyntaxError,
    IllegalArgumentError,
    UnsupportedMethodError,
)
from .lexer import STRING_KINDS, Token, TokenKind, tokenize

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DIDParts(NamedTuple):
    """The method and method-specific identifier of a parsed DID."""

    method: str
    method_specific_id: str


@dataclass
class ParsedUrl:
    """The sections of a parsed DID URL."""

    did: Optional[DIDParts] = None
    params: dict[str, Optional[str]] = field(default_factory=dict)
    path: Optional[str] = None
    query: dict[str, Optional[str]] = field(default_factory=dict)
    fragment: Optional[str] = None


class Parser:
    """Parser over the token stream of a single (trimmed) input string."""

    def __init__(self, text: str):
        """Initializer."""
        self.text = text
        self._tokens = tokenize(text)
        self._token = next(self._tokens)
        self._lookahead: Optional[Token] = None

    def _advance(self) -> Token:
        token = self._token
        if token.kind is not TokenKind.EOF:
            if self._lookahead is not None:
                self._token, self._lookahead = self._lookahead, None
            else:
                self._token = next(self._tokens)
        return token

    def _peek(self) -> Token:
        if self._token.kind is TokenKind.EOF:
            return self._token
        if self._lookahead is None:
            self._lookahead = next(self._tokens)
        return self._lookahead

    def _accept(self, kind: TokenKind) -> bool:
        if self._token.kind is kind:
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind) -> Token:
        if self._token.kind is not kind:
            raise DIDUrlSyntaxError(self._token.position)
        return self._advance()

    def expect_end(self):
        """Require that the whole input has been consumed."""
        self._expect(TokenKind.EOF)

    def string(self) -> str:
        """Consume a STRING: a run of adjacent words and percent escapes."""
        token = self._token
        if token.kind not in STRING_KINDS:
            raise DIDUrlSyntaxError(token.position)
        lead = token.text[0]
        if token.kind is not TokenKind.HEX and not (
            lead.isalnum() or lead in STRING_LEADING_EXTRA_CHARS
        ):
            raise DIDUrlSyntaxError(token.position)
        parts = []
        while self._token.kind in STRING_KINDS:
            parts.append(self._advance().text)
        return "".join(parts)

    def didurl(self) -> ParsedUrl:
        """Parse a complete DID URL."""
        url = ParsedUrl()
        kind = self._token.kind
        if kind is TokenKind.DID and self._peek().kind is TokenKind.COLON:
            url.did = self.did()
        elif kind in STRING_KINDS:
            # a lone fragment may omit its leading '#'
            url.fragment = self.fragment()
            self.expect_end()
            return url
        if self._accept(TokenKind.SEMICOLON):
            url.params = self.params()
        if self._accept(TokenKind.SLASH):
            url.path = self.path()
        if self._accept(TokenKind.QUESTION):
            url.query = self.query()
        if self._accept(TokenKind.HASH):
            url.fragment = self.fragment()
        self.expect_end()
        return url

    def did(self) -> DIDParts:
        """Parse a DID: `did:<method>:<method-specific-id>`."""
        self._expect(TokenKind.DID)
        self._expect(TokenKind.COLON)
        method = self.string()
        self._expect(TokenKind.COLON)
        method_specific_id = self.string()
        if method != METHOD_NAME:
            raise UnsupportedMethodError(method)
        return DIDParts(method, method_specific_id)

    def params(self) -> dict[str, Optional[str]]:
        """Parse the `;`-separated DID parameters."""
        params = {}
        while True:
            name = self.param_name()
            params[name] = self.string() if self._accept(TokenKind.EQUALS) else None
            if not self._accept(TokenKind.SEMICOLON):
                return params

    def param_name(self) -> str:
        """Parse a parameter name, optionally qualified by a method name."""
        name = self.string()
        if self._accept(TokenKind.COLON):
            name = f"{name}{SEP_METHOD}{self.string()}"
        return name

    def path(self) -> str:
        """Parse the path segments following the leading `/`."""
        segments = [self.string()]
        while self._accept(TokenKind.SLASH):
            segments.append(self.string())
        return SEP_PATH.join(segments)

    def query(self) -> dict[str, Optional[str]]:
        """Parse the `&`-separated query parameters."""
        query = {}
        while True:
            name = self.string()
            query[name] = self.string() if self._accept(TokenKind.EQUALS) else None
            if not self._accept(TokenKind.AMPERSAND):
                return query

    def fragment(self) -> str:
        """Parse the fragment."""
        return self.string()


def _run(text: str, production: Callable[[Parser], T], what: str) -> T:
    if text is None:
        raise IllegalArgumentError(f"{what} is required")
    if not text:
        raise IllegalArgumentError(f"empty {what} string")
    parser = Parser(text)
    result = production(parser)
    parser.expect_end()
    return result


def parse_url(url: str) -> ParsedUrl:
    """Parse a DID URL string into its sections.

    Surrounding whitespace is ignored.

    Raises:
        IllegalArgumentError: if the input is `None`, empty or only whitespace
        DIDUrlSyntaxError: on a character or token not allowed by the grammar
        UnsupportedMethodError: if the DID method is not supported

    """
    if url is not None:
        trimmed = url.strip(WHITESPACE)
    else:
        trimmed = None
    try:
        return _run(trimmed, Parser.didurl, "DID URL")
    except DIDUrlError as err:
        LOGGER.debug("Rejected DID URL %r: %s", url, err)
        raise


def parse_did(did: str) -> DIDParts:
    """Parse a string consisting of exactly one DID."""
    if did is not None:
        did = did.strip(WHITESPACE)
    return _run(did, Parser.did, "DID")


def parse_string(value: str, what: str = "value") -> str:
    """Validate a single STRING, such as a fragment or query parameter."""
    return _run(value, Parser.string, what)


def parse_param_name(name: str) -> str:
    """Validate a (possibly method-qualified) parameter name."""
    return _run(name, Parser.param_name, "parameter name")


def parse_path(path: str) -> str:
    """Validate a path, with or without its leading `/`."""

    def production(parser: Parser) -> str:
        parser._accept(TokenKind.SLASH)
        return parser.path()

    return _run(path, production, "path")
