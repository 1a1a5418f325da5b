"""DID URL format handling."""

from collections.abc import Callable, Mapping
from functools import total_ordering
from types import MappingProxyType
from typing import Optional, Union

from ..const import (
    SEP_FRAGMENT,
    SEP_PARAMS,
    SEP_PATH,
    SEP_QUERY,
    SEP_QUERY_PARAM,
    SEP_VALUE,
)
from .did import DID
from .errors import DIDUrlError, IllegalArgumentError, MalformedDIDUrlError
from .parser import ParsedUrl, parse_param_name, parse_path, parse_string, parse_url


def _check_name(name: str):
    if not name:
        raise IllegalArgumentError("Invalid parameter name")


def _check_query_name(name: str) -> str:
    return parse_string(name, "query parameter name")


def _checked_entries(
    entries: Mapping[str, Optional[str]], check_name: Callable[[str], str]
) -> dict[str, Optional[str]]:
    checked = {}
    for name, value in (entries or {}).items():
        checked[check_name(name)] = None if value is None else parse_string(value)
    return checked


def _join_entries(entries: Mapping[str, Optional[str]], sep: str) -> Optional[str]:
    if not entries:
        return None
    return sep.join(
        name if value is None else f"{name}{SEP_VALUE}{value}"
        for name, value in entries.items()
    )


@total_ordering
class DIDUrl:
    """A DID URL: a DID followed by optional parameters, path, query and fragment.

    Instances are immutable. A DID URL parsed without a DID is relative: it
    reports the context DID it was created with, if any, as its `did`.
    """

    __slots__ = ("_did", "_context", "_params", "_path", "_query", "_fragment")

    def __init__(
        self,
        did: DID = None,
        params: Mapping[str, Optional[str]] = None,
        path: str = None,
        query: Mapping[str, Optional[str]] = None,
        fragment: str = None,
        *,
        context: DID = None,
    ):
        """Initializer.

        Raises:
            MalformedDIDUrlError: if no section is present, or a section
                holds text the parser would not accept

        """
        self._did = DID.from_value(did)
        self._context = DID.from_value(context)
        try:
            self._params = MappingProxyType(_checked_entries(params, parse_param_name))
            self._path = parse_path(path) if path else None
            self._query = MappingProxyType(_checked_entries(query, _check_query_name))
            self._fragment = parse_string(fragment, "fragment") if fragment else None
        except DIDUrlError as err:
            raise MalformedDIDUrlError(f"Invalid DID URL: {err}", err) from err
        if not (
            self._did or self._params or self._path or self._query or self._fragment
        ):
            raise MalformedDIDUrlError("empty DID URL")

    @classmethod
    def decode(cls, url: str, context: Union[DID, str] = None) -> "DIDUrl":
        """Decode a string as a DID URL.

        Args:
            url: the DID URL string, absolute or relative
            context: the DID a relative URL is resolved against

        Raises:
            DIDUrlError: on invalid inputs

        """
        return cls.from_parsed(parse_url(url), context=context)

    @classmethod
    def from_parsed(
        cls, parsed: ParsedUrl, context: Union[DID, str] = None
    ) -> "DIDUrl":
        """Build a DID URL from the sections produced by the parser."""
        return cls(
            did=DID(*parsed.did) if parsed.did else None,
            params=parsed.params,
            path=parsed.path,
            query=parsed.query,
            fragment=parsed.fragment,
            context=DID.from_value(context),
        )

    @classmethod
    def value_of(
        cls, url: Union["DIDUrl", DID, str], context: Union[DID, str] = None
    ) -> "DIDUrl":
        """Coerce a DID URL, DID, or DID URL string into a `DIDUrl`.

        Raises:
            MalformedDIDUrlError: if a string value cannot be parsed

        """
        if url is None:
            raise IllegalArgumentError("DID URL is required")
        if isinstance(url, DIDUrl):
            return url.with_context(context) if context else url
        if isinstance(url, DID):
            return DIDUrl(did=url)
        try:
            return cls.decode(url, context)
        except DIDUrlError as err:
            raise MalformedDIDUrlError(f"Invalid DID URL: {url}", err) from err

    @classmethod
    def builder(cls, base: Union["DIDUrl", DID, str] = None) -> "DIDUrl.Builder":
        """Start a new builder, optionally seeded from a DID or DID URL."""
        return cls.Builder(base)

    def with_context(self, context: Union[DID, str, None]) -> "DIDUrl":
        """Copy this DID URL, replacing its context DID."""
        return DIDUrl(
            self._did,
            self._params,
            self._path,
            self._query,
            self._fragment,
            context=DID.from_value(context),
        )

    @property
    def did(self) -> Optional[DID]:
        """Access the DID, falling back to the context DID for relative URLs."""
        return self._did if self._did is not None else self._context

    @property
    def context(self) -> Optional[DID]:
        """Access the context DID."""
        return self._context

    @property
    def is_relative(self) -> bool:
        """Check whether the DID was omitted from this URL."""
        return self._did is None

    @property
    def root(self) -> Optional["DIDUrl"]:
        """Access this DID URL without any parameters, path, query or fragment."""
        did = self.did
        return DIDUrl(did=did) if did else None

    @property
    def params(self) -> Mapping[str, Optional[str]]:
        return self._params

    @property
    def parameters_string(self) -> Optional[str]:
        """The parameters, joined by `;`, or `None` if there are none."""
        return _join_entries(self._params, SEP_PARAMS)

    def get_parameter(self, name: str) -> Optional[str]:
        _check_name(name)
        return self._params.get(name)

    def has_parameter(self, name: str) -> bool:
        _check_name(name)
        return name in self._params

    @property
    def path(self) -> Optional[str]:
        """The path, without its leading `/`."""
        return self._path

    @property
    def query(self) -> Mapping[str, Optional[str]]:
        return self._query

    @property
    def query_string(self) -> Optional[str]:
        """The query parameters, joined by `&`, or `None` if there are none."""
        return _join_entries(self._query, SEP_QUERY_PARAM)

    def get_query_parameter(self, name: str) -> Optional[str]:
        """Get a query parameter value.

        Returns `None` both for a missing parameter and for one declared
        without a value; use `has_query_parameter` to tell them apart.
        """
        _check_name(name)
        return self._query.get(name)

    def has_query_parameter(self, name: str) -> bool:
        _check_name(name)
        return name in self._query

    @property
    def fragment(self) -> Optional[str]:
        return self._fragment

    def to_string(self, context: Union[DID, str] = None) -> str:
        """Format this DID URL.

        If `context` matches the DID of this URL, the DID is omitted.
        """
        did = self.did
        parts = []
        if did is not None and (context is None or did != context):
            parts.append(str(did))
        if self._params:
            parts.append(SEP_PARAMS + self.parameters_string)
        if self._path:
            parts.append(SEP_PATH + self._path)
        if self._query:
            parts.append(SEP_QUERY + self.query_string)
        if self._fragment:
            parts.append(SEP_FRAGMENT + self._fragment)
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"DIDUrl({self.to_string()!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, DIDUrl):
            return self.to_string() == other.to_string()
        if isinstance(other, str):
            return self.to_string() == other
        return NotImplemented

    def __lt__(self, other: "DIDUrl") -> bool:
        if not isinstance(other, DIDUrl):
            return NotImplemented
        return self.to_string() < other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())

    class Builder:
        """Assemble a DID URL from individually validated parts.

        Each setter validates its input immediately, raising the same errors
        as the parser. Builders are not thread-safe.
        """

        def __init__(self, base: Union["DIDUrl", DID, str] = None):
            """Initializer."""
            self._did: Optional[DID] = None
            self._params: dict[str, Optional[str]] = {}
            self._path: Optional[str] = None
            self._query: dict[str, Optional[str]] = {}
            self._fragment: Optional[str] = None
            if isinstance(base, str):
                base = DIDUrl.value_of(base)
            if isinstance(base, DID):
                self._did = base
            elif isinstance(base, DIDUrl):
                self._did = base.did
                self._params = dict(base.params)
                self._path = base.path
                self._query = dict(base.query)
                self._fragment = base.fragment
            elif base is not None:
                raise IllegalArgumentError("Invalid DID or DID URL")

        def set_did(self, did: Union[DID, str]) -> "DIDUrl.Builder":
            if did is None:
                raise IllegalArgumentError("Invalid DID")
            self._did = did if isinstance(did, DID) else DID.decode(did)
            return self

        def clear_did(self) -> "DIDUrl.Builder":
            self._did = None
            return self

        def set_parameter(self, name: str, value: str = None) -> "DIDUrl.Builder":
            """Add a parameter, or replace the value of an existing one."""
            name = parse_param_name(name)
            self._params[name] = None if value is None else parse_string(value)
            return self

        def set_parameters(
            self, params: Mapping[str, Optional[str]]
        ) -> "DIDUrl.Builder":
            """Replace all parameters."""
            self._params = _checked_entries(params, parse_param_name)
            return self

        def remove_parameter(self, name: str) -> "DIDUrl.Builder":
            _check_name(name)
            self._params.pop(name, None)
            return self

        def clear_parameters(self) -> "DIDUrl.Builder":
            self._params = {}
            return self

        def set_path(self, path: str) -> "DIDUrl.Builder":
            """Set the path; the leading `/` is optional."""
            self._path = parse_path(path)
            return self

        def clear_path(self) -> "DIDUrl.Builder":
            self._path = None
            return self

        def set_query_parameter(
            self, name: str, value: str = None
        ) -> "DIDUrl.Builder":
            """Add a query parameter, or replace the value of an existing one."""
            name = _check_query_name(name)
            self._query[name] = None if value is None else parse_string(value)
            return self

        def set_query_parameters(
            self, query: Mapping[str, Optional[str]]
        ) -> "DIDUrl.Builder":
            """Replace all query parameters."""
            self._query = _checked_entries(query, _check_query_name)
            return self

        def remove_query_parameter(self, name: str) -> "DIDUrl.Builder":
            _check_name(name)
            self._query.pop(name, None)
            return self

        def clear_query_parameters(self) -> "DIDUrl.Builder":
            self._query = {}
            return self

        def set_fragment(self, fragment: str) -> "DIDUrl.Builder":
            self._fragment = parse_string(fragment, "fragment")
            return self

        def clear_fragment(self) -> "DIDUrl.Builder":
            self._fragment = None
            return self

        def build(self) -> "DIDUrl":
            """Produce a new DID URL from the current state of this builder."""
            if not (
                self._did or self._params or self._path or self._query or self._fragment
            ):
                raise IllegalArgumentError("empty DID URL")
            return DIDUrl(
                did=self._did,
                params=self._params,
                path=self._path,
                query=self._query,
                fragment=self._fragment,
            )


def parse(url: str, context: Union[DID, str] = None) -> DIDUrl:
    """Parse a DID URL string, resolving a relative URL against `context`."""
    return DIDUrl.decode(url, context)
