"""Core DID and DID URL handling for did:elastos."""

from . import did, did_url, errors, lexer, parser

__all__ = ["did", "did_url", "errors", "lexer", "parser"]
