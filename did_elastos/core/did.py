"""DID identifier handling."""

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Optional, Union

from ..const import DID_PREFIX, METHOD_NAME, SEP_METHOD
from .errors import (
    DIDUrlSyntaxError,
    IllegalArgumentError,
    MalformedDIDError,
    UnsupportedMethodError,
)
from .parser import parse_did, parse_string


@total_ordering
@dataclass(frozen=True, eq=False)
class DID:
    """A decentralized identifier: `did:<method>:<method-specific-id>`."""

    METHOD: ClassVar[str] = METHOD_NAME

    method: str
    method_specific_id: str

    def __post_init__(self):
        """Check the method and the method-specific identifier."""
        if not self.method:
            raise IllegalArgumentError("Invalid method")
        if not self.method_specific_id:
            raise IllegalArgumentError("Invalid method specific id")
        if self.method != METHOD_NAME:
            raise UnsupportedMethodError(self.method)
        parse_string(self.method_specific_id, "method specific id")

    @classmethod
    def decode(cls, did: str) -> "DID":
        """Decode a string as a DID.

        Raises:
            IllegalArgumentError: if the input is missing or empty
            MalformedDIDError: if the input is not exactly one DID
            UnsupportedMethodError: if the DID method is not supported

        """
        try:
            parts = parse_did(did)
        except DIDUrlSyntaxError as err:
            raise MalformedDIDError(f"Invalid DID: {did}", err) from err
        return cls(parts.method, parts.method_specific_id)

    @classmethod
    def from_value(cls, did: Union["DID", str, None]) -> Optional["DID"]:
        """Coerce a DID or DID string, mapping empty values to `None`."""
        if not did:
            return None
        if isinstance(did, DID):
            return did
        return cls.decode(did)

    def __str__(self) -> str:
        return SEP_METHOD.join((DID_PREFIX, self.method, self.method_specific_id))

    def __eq__(self, other) -> bool:
        if isinstance(other, DID):
            return (
                self.method == other.method
                and self.method_specific_id == other.method_specific_id
            )
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __lt__(self, other: "DID") -> bool:
        if not isinstance(other, DID):
            return NotImplemented
        return (self.method, self.method_specific_id) < (
            other.method,
            other.method_specific_id,
        )

    def __hash__(self) -> int:
        return hash(str(self))
