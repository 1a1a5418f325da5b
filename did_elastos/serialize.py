"""JSON serialization of DIDs and DID URLs."""

import logging
from typing import Union

import jsoncanon

from .core.did import DID
from .core.did_url import DIDUrl
from .core.errors import DIDUrlError, MalformedDIDUrlError

LOGGER = logging.getLogger(__name__)


def serialize_url(
    url: DIDUrl, context: Union[DID, str] = None, *, normalized: bool = False
) -> str:
    """Format a DID URL for inclusion in a JSON document.

    Unless `normalized` is set, the URL is written relative to `context`, or
    to its own DID, producing compact references such as `#primary`.
    """
    full = url.to_string()
    if normalized:
        return full
    base = DID.from_value(context) or url.did
    # a bare DID has nothing left once its DID is omitted
    return url.to_string(base) or full


def deserialize_url(value: str, context: Union[DID, str] = None) -> DIDUrl:
    """Read a DID URL from a JSON document value.

    Raises:
        MalformedDIDUrlError: if the value is not a valid DID URL string

    """
    if not isinstance(value, str):
        raise MalformedDIDUrlError(f"Expected a DID URL string, got: {value!r}")
    try:
        return DIDUrl.decode(value, context)
    except DIDUrlError as err:
        LOGGER.debug("Invalid DID URL in document: %r", value)
        raise MalformedDIDUrlError(f"Invalid DID URL: {value}", err) from err


def _prepare(value, context: DID, normalized: bool):
    if isinstance(value, DIDUrl):
        return serialize_url(value, context, normalized=normalized)
    if isinstance(value, DID):
        return str(value)
    if isinstance(value, dict):
        return {k: _prepare(v, context, normalized) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_prepare(v, context, normalized) for v in value]
    return value


def canonical_json(
    data, context: Union[DID, str] = None, *, normalized: bool = False
) -> bytes:
    """Produce canonical JSON (RFC 8785) for data containing DIDs and DID URLs."""
    return jsoncanon.canonicalize(
        _prepare(data, DID.from_value(context), normalized)
    )
