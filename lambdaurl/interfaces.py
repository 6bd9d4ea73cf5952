"""Generic request and response-sink abstractions.

Handlers are written against :class:`Request` and :class:`ResponseSink` only,
so they never see platform event types.
"""

import io
import re
import string
from typing import BinaryIO, Optional, Protocol, runtime_checkable
from urllib.parse import SplitResult, unquote, urlsplit

from lambdaurl.exceptions import RequestParseError
from lambdaurl.headers import Header

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# unreserved, sub-delims, and the separators allowed in an authority
_AUTHORITY_CHARS = frozenset(
    string.ascii_letters + string.digits + "-._~" + "!$&'()*+,;=" + "[]:@%"
)


def _has_control_char(value: str) -> bool:
    return any(ord(char) < 0x20 or ord(char) == 0x7F for char in value)


def parse_request_url(raw: str) -> SplitResult:
    """Parse a request path (or full URL) strictly.

    ``urlsplit`` accepts almost anything, so malformed percent-escapes,
    ASCII control characters, invalid authority characters, non-numeric
    ports and a colon in a scheme-less first path segment are rejected here
    explicitly.

    Args:
        raw: Path as delivered by the platform, e.g. ``"/items/42"``

    Returns:
        Parsed URL components

    Raises:
        RequestParseError: If ``raw`` is not a well-formed URL
    """
    if _has_control_char(raw):
        raise RequestParseError(f"Invalid control character in URL {raw!r}", path=raw)
    if raw.startswith(":"):
        raise RequestParseError(f"Missing protocol scheme in URL {raw!r}", path=raw)

    try:
        url = urlsplit(raw)
        # raises ValueError for a non-numeric or out of range port
        url.port
    except ValueError as e:
        raise RequestParseError(f"Invalid URL {raw!r}: {e}", path=raw) from e

    for component in (url.netloc, url.path, url.fragment):
        match = _INVALID_ESCAPE.search(component)
        if match:
            escape = component[match.start():match.start() + 3]
            raise RequestParseError(
                f"Invalid URL escape {escape!r} in {raw!r}", path=raw
            )

    invalid = [char for char in url.netloc if char not in _AUTHORITY_CHARS]
    if invalid:
        raise RequestParseError(
            f"Invalid character {invalid[0]!r} in host of URL {raw!r}", path=raw
        )

    if not url.scheme and not url.netloc and ":" in url.path.split("/", 1)[0]:
        raise RequestParseError(
            f"First path segment in URL {raw!r} cannot contain colon", path=raw
        )

    return url


class Request:
    """Generic HTTP request handed to handlers.

    Attributes:
        method: HTTP method, e.g. "GET"
        url: Parsed URL; ``url.path`` is the raw (still escaped) path
        headers: Multi-valued request headers
        body: Readable binary stream over the request body
    """

    def __init__(
        self,
        method: str,
        url: SplitResult,
        headers: Optional[Header] = None,
        body: Optional[BinaryIO] = None,
    ) -> None:
        self.method = method
        self.url = url
        self.headers = headers if headers is not None else Header()
        self.body = body if body is not None else io.BytesIO()

    @property
    def path(self) -> str:
        """Percent-decoded request path."""
        return unquote(self.url.path)

    @property
    def raw_path(self) -> str:
        return self.url.path

    def __repr__(self) -> str:
        return f"Request(method={self.method!r}, path={self.raw_path!r})"


@runtime_checkable
class ResponseSink(Protocol):
    """Capability a handler writes its response into."""

    def header(self) -> Header:
        """Return the mutable response header map (same instance every call)."""
        ...

    def write(self, data: bytes) -> int:
        """Append ``data`` to the response body and return the bytes accepted."""
        ...

    def set_status(self, status_code: int) -> None:
        """Record the response status code."""
        ...
