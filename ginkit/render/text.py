"""Renderers for plain text, raw bytes, streamed readers and redirects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar
from urllib.parse import urlsplit

from ginkit.render.base import Render, write_content_type

PLAIN_CONTENT_TYPE = "text/plain; charset=utf-8"
_HTML_CONTENT_TYPE = "text/html; charset=utf-8"
_CHUNK_SIZE = 32 * 1024

_HTML_ESCAPES = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&#34;",
    ord("'"): "&#39;",
}


def write_string(writer: Any, fmt: str, data: Sequence[Any] = ()) -> None:
    """Write the plain-text content type, then ``fmt`` formatted with ``data``.

    Without data the format string is written as it is.
    """
    write_content_type(writer, PLAIN_CONTENT_TYPE)
    text = fmt % tuple(data) if data else fmt
    writer.write(text.encode("utf-8"))


@dataclass
class String(Render):
    """A printf-style format string and its arguments."""

    format: str
    data: Sequence[Any] = ()
    content_type: ClassVar[str] = PLAIN_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        write_string(writer, self.format, self.data)


@dataclass
class Data(Render):
    """Raw bytes sent with a caller-chosen content type."""

    content_type: str = ""
    data: bytes = b""

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(bytes(self.data))


@dataclass
class Reader(Render):
    """A body streamed from a file-like object, with extra headers.

    A non-negative ``content_length`` is sent as the Content-Length header.
    Extra headers never replace headers that are already set.
    """

    reader: Any
    content_type: str = ""
    content_length: int = -1
    headers: Mapping[str, str] | None = field(default=None)

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        headers = dict(self.headers or {})
        if self.content_length >= 0:
            headers["Content-Length"] = str(self.content_length)
        target = writer.headers
        for key, value in headers.items():
            if target.get(key) == "":
                target.set(key, value)
        while True:
            chunk = self.reader.read(_CHUNK_SIZE)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            writer.write(chunk)


def _clean(p: str) -> str:
    if not p:
        return "."
    rooted = p.startswith("/")
    parts: list[str] = []
    for segment in p.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    result = "/".join(parts)
    if rooted:
        result = "/" + result
    return result or "."


def _resolve_location(location: str, request_path: str) -> str:
    parts = urlsplit(location)
    if parts.scheme or parts.netloc:
        return location
    old_path = request_path or "/"
    url = location
    if not url.startswith("/"):
        old_dir = old_path[: old_path.rfind("/") + 1]
        url = old_dir + url
    url, sep, query = url.partition("?")
    trailing = url.endswith("/")
    url = _clean(url)
    if trailing and not url.endswith("/"):
        url += "/"
    return url + sep + query


def _hex_escape_non_ascii(s: str) -> str:
    return "".join(
        f"%{b:x}" if b >= 0x80 else chr(b) for b in s.encode("utf-8")
    )


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


@dataclass
class Redirect(Render):
    """Redirects the request to ``location`` with a 3xx (or 201) status."""

    code: int
    request: Any
    location: str

    def render(self, writer: Any) -> None:
        if (self.code < 300 or self.code > 308) and self.code != 201:
            raise ValueError(f"Cannot redirect with status code {self.code}")
        method = self.request.method
        url = _resolve_location(self.location, self.request.path)
        headers = writer.headers
        had_content_type = bool(headers.get_all("Content-Type"))
        headers.set("Location", _hex_escape_non_ascii(url))
        if not had_content_type and method in ("GET", "HEAD"):
            headers.set("Content-Type", _HTML_CONTENT_TYPE)
        writer.write_header(self.code)
        if not had_content_type and method == "GET":
            body = f'<a href="{url.translate(_HTML_ESCAPES)}">{_status_text(self.code)}</a>.\n'
            writer.write((body + "\n").encode("utf-8"))

    def write_content_type(self, writer: Any) -> None:
        """A redirect sets no content type of its own."""