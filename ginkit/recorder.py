"""In-memory HTTP request and response objects used to drive handlers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

_TOKEN_EXTRAS = frozenset("!#$%&'*+-.^_`|~")


def _is_token_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in _TOKEN_EXTRAS)


def _canonical_key(key: str) -> str:
    """Return the canonical form of a header name, e.g. ``content-type`` -> ``Content-Type``."""
    if not key or not all(_is_token_char(ch) for ch in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


class Headers:
    """A case-insensitive, multi-valued collection of HTTP header fields."""

    def __init__(
        self,
        values: Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str | Iterable[str]]] | None = None,
    ) -> None:
        self._data: dict[str, list[str]] = {}
        if values is None:
            return
        pairs = values.items() if isinstance(values, Mapping) else values
        for key, value in pairs:
            self.set(key, value)

    def get(self, key: str, default: str = "") -> str:
        """Return the first value stored under ``key``, or ``default``."""
        values = self._data.get(_canonical_key(key))
        return values[0] if values else default

    def set(self, key: str, value: str | Iterable[str]) -> None:
        """Replace every value of ``key`` with ``value`` (a string or several strings)."""
        values = [value] if isinstance(value, str) else list(value)
        canonical = _canonical_key(key)
        if values:
            self._data[canonical] = values
        else:
            self._data.pop(canonical, None)

    def get_all(self, key: str) -> list[str]:
        """Return every value stored under ``key``."""
        return list(self._data.get(_canonical_key(key), ()))

    def __getitem__(self, key: str) -> str:
        values = self._data.get(_canonical_key(key))
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: str | Iterable[str]) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        canonical = _canonical_key(key)
        if canonical not in self._data:
            raise KeyError(key)
        self._data.pop(canonical)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _canonical_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Headers({self._data!r})"


@dataclass
class Request:
    """An incoming HTTP request.

    A query string given inside ``path`` is split off into ``raw_query``.
    """

    method: str = "GET"
    path: str = "/"
    raw_path: str = ""
    raw_query: str = ""
    headers: Headers = field(default_factory=Headers)
    remote_addr: str = ""
    host: str = ""
    body: bytes = b""

    def __post_init__(self) -> None:
        if "?" in self.path and not self.raw_query:
            self.path, _, self.raw_query = self.path.partition("?")


class ResponseRecorder:
    """Collects a response in memory: status code, headers and body."""

    def __init__(self) -> None:
        self.code = 200
        self.headers = Headers()
        self.body = bytearray()
        self.wrote_header = False

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    def write_header(self, code: int) -> None:
        """Record the status code; only the first call has an effect."""
        if not 100 <= code <= 999:
            raise ValueError(f"invalid WriteHeader code {code}")
        if self.wrote_header:
            return
        self.code = code
        self.wrote_header = True

    def write(self, data: bytes | bytearray | str) -> int:
        """Append ``data`` to the body and return the number of bytes written."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not self.wrote_header:
            self.write_header(200)
        self.body.extend(data)
        return len(data)