"""Header maps for the generic request/response abstraction.

Platform events carry headers as a single-valued ``{name: value}`` mapping,
while handlers work with a multi-valued :class:`Header`. The two lossy
projections between them are :func:`expand_single_valued` and
:func:`collapse_to_first`.
"""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from multidict import MultiDict

# RFC 7230 token characters besides letters and digits
_TOKEN_SYMBOLS = frozenset("!#$%&'*+-.^_`|~")


def _is_token_char(char: str) -> bool:
    return (char.isascii() and char.isalnum()) or char in _TOKEN_SYMBOLS


def canonical_header_key(key: str) -> str:
    """Return the canonical MIME form of a header name.

    The first letter and any letter following a hyphen are upper-cased, the
    rest lower-cased: ``"content-type"`` becomes ``"Content-Type"``. Names
    containing a space or other non-token character are returned unchanged.

    Args:
        key: Header name as supplied by the caller

    Returns:
        Canonical header name
    """
    if not key or not all(_is_token_char(c) for c in key):
        return key

    chars = []
    upper = True
    for char in key:
        chars.append(char.upper() if upper else char.lower())
        upper = char == "-"
    return "".join(chars)


class Header:
    """Ordered multi-valued header mapping.

    Names are canonicalized on every access, so lookups are effectively
    case-insensitive. Names keep the order in which they were first set.
    """

    def __init__(self) -> None:
        self._values: MultiDict = MultiDict()

    def set(self, key: str, value: str) -> None:
        """Replace all values of ``key`` with ``value``."""
        self._values[canonical_header_key(key)] = value

    def add(self, key: str, value: str) -> None:
        """Append ``value`` to the values of ``key``."""
        self._values.add(canonical_header_key(key), value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of ``key``, or ``default``."""
        return self._values.get(canonical_header_key(key), default)

    def values(self, key: str) -> List[str]:
        """Return all values of ``key`` in insertion order."""
        return self._values.getall(canonical_header_key(key), [])

    def delete(self, key: str) -> None:
        self._values.popall(canonical_header_key(key), None)

    def keys(self) -> List[str]:
        # MultiDict repeats a name once per value
        return list(dict.fromkeys(self._values.keys()))

    def items(self) -> List[Tuple[str, List[str]]]:
        return [(key, self._values.getall(key)) for key in self.keys()]

    def copy(self) -> "Header":
        clone = Header()
        clone._values = self._values.copy()
        return clone

    def __getitem__(self, key: str) -> List[str]:
        values = self.values(key)
        if not values:
            raise KeyError(key)
        return values

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_header_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"Header({dict(self.items())!r})"


def expand_single_valued(headers: Mapping[str, str]) -> Header:
    """Build a :class:`Header` from a single-valued mapping.

    Each value is wrapped as a one-element list. If two inbound names
    canonicalize to the same key, the later one wins.

    Args:
        headers: Mapping of header name to a single value

    Returns:
        New Header instance
    """
    expanded = Header()
    for key, value in headers.items():
        expanded.set(key, value)
    return expanded


def collapse_to_first(headers: Header) -> Dict[str, str]:
    """Collapse a :class:`Header` to a single-valued mapping.

    Only the first value of each name is kept; any further values are
    dropped.

    Args:
        headers: Multi-valued header mapping

    Returns:
        Dictionary of header name to its first value
    """
    return {key: values[0] for key, values in headers.items()}
