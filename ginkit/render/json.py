"""JSON renderers: plain, indented, secure, JSONP, ASCII-only and unescaped."""

from __future__ import annotations

import base64
import dataclasses
import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from ginkit.render.base import Render, write_content_type

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
JSONP_CONTENT_TYPE = "application/javascript; charset=utf-8"
JSON_ASCII_CONTENT_TYPE = "application/json"

_ALWAYS_ESCAPED = {0x2028: "\\u2028", 0x2029: "\\u2029"}
_HTML_ESCAPED = {ord("<"): "\\u003c", ord(">"): "\\u003e", ord("&"): "\\u0026"}
_WITH_HTML = {**_ALWAYS_ESCAPED, **_HTML_ESCAPED}


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"json: unsupported map key type: {type(key).__name__}")


def _to_jsonable(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError(f"json: unsupported value: {obj!r}")
        if obj.is_integer() and abs(obj) < 1e21:
            return int(obj)
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, Mapping):
        items = sorted(((_key(k), v) for k, v in obj.items()), key=lambda kv: kv[0])
        return {k: _to_jsonable(v) for k, v in items}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(item) for item in obj]
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _marshal(obj: Any, *, indent: str | None = None, escape_html: bool = True) -> str:
    value = _to_jsonable(obj)
    if indent is not None:
        text = json.dumps(value, ensure_ascii=False, indent=indent, separators=(",", ": "))
    else:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return text.translate(_WITH_HTML if escape_html else _ALWAYS_ESCAPED)


def write_json(writer: Any, obj: Any) -> None:
    """Write the JSON content type, then ``obj`` as compact JSON."""
    write_content_type(writer, JSON_CONTENT_TYPE)
    writer.write(_marshal(obj).encode("utf-8"))


_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "=": "\\u003D",
}


def js_escape(s: str) -> str:
    """Escape ``s`` so that it is safe inside a JavaScript string or identifier."""
    parts = []
    for ch in s:
        escaped = _JS_ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ch < " ":
            parts.append(f"\\u00{ord(ch):02X}")
        elif ord(ch) < 0x80 or ch.isprintable():
            parts.append(ch)
        else:
            parts.append(f"\\u{ord(ch):04X}")
    return "".join(parts)


@dataclass
class JSON(Render):
    """Compact JSON with HTML characters escaped."""

    data: Any
    content_type: ClassVar[str] = JSON_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        write_json(writer, self.data)


@dataclass
class IndentedJSON(Render):
    """JSON indented by four spaces."""

    data: Any
    content_type: ClassVar[str] = JSON_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write(_marshal(self.data, indent="    ").encode("utf-8"))


@dataclass
class SecureJSON(Render):
    """JSON whose top-level arrays are preceded by a prefix against hijacking."""

    prefix: str
    data: Any
    content_type: ClassVar[str] = JSON_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        body = _marshal(self.data)
        if body.startswith("[") and body.endswith("]"):
            writer.write(self.prefix.encode("utf-8"))
        writer.write(body.encode("utf-8"))


@dataclass
class JsonpJSON(Render):
    """JSON wrapped in a call to a JavaScript callback."""

    callback: str
    data: Any
    content_type: ClassVar[str] = JSONP_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        body = _marshal(self.data).encode("utf-8")
        if not self.callback:
            writer.write(body)
            return
        writer.write(js_escape(self.callback).encode("utf-8"))
        writer.write(b"(")
        writer.write(body)
        writer.write(b");")


@dataclass
class AsciiJSON(Render):
    """JSON with every non-ASCII character written as a ``\\u`` escape."""

    data: Any
    content_type: ClassVar[str] = JSON_ASCII_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        body = "".join(
            ch if ord(ch) < 128 else f"\\u{ord(ch):04x}" for ch in _marshal(self.data)
        )
        writer.write(body.encode("ascii"))


@dataclass
class PureJSON(Render):
    """JSON without HTML escaping, followed by a newline."""

    data: Any
    content_type: ClassVar[str] = JSON_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        writer.write((_marshal(self.data, escape_html=False) + "\n").encode("utf-8"))