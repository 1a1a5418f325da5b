"""DID URL parsing for did:elastos identifiers."""

from .core.did import DID
from .core.did_url import DIDUrl, parse
from .core.errors import (
    DIDUrlError,
    DIDUrlSyntaxError,
    IllegalArgumentError,
    InvalidHexError,
    MalformedDIDError,
    MalformedDIDUrlError,
    UnsupportedMethodError,
)
from .serialize import canonical_json, deserialize_url, serialize_url

__all__ = [
    "DID",
    "DIDUrl",
    "DIDUrlError",
    "DIDUrlSyntaxError",
    "IllegalArgumentError",
    "InvalidHexError",
    "MalformedDIDError",
    "MalformedDIDUrlError",
    "UnsupportedMethodError",
    "canonical_json",
    "deserialize_url",
    "parse",
    "serialize_url",
]
