"""Renderers for MessagePack, Protocol Buffers, TOML, XML and YAML bodies."""

from __future__ import annotations

import dataclasses
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import msgpack
import tomli_w
import yaml

from ginkit.render.base import Render, write_content_type

MSGPACK_CONTENT_TYPE = "application/msgpack; charset=utf-8"
PROTOBUF_CONTENT_TYPE = "application/x-protobuf"
TOML_CONTENT_TYPE = "application/toml; charset=utf-8"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"
YAML_CONTENT_TYPE = "application/yaml; charset=utf-8"


def write_msgpack(writer: Any, obj: Any) -> None:
    """Write the MessagePack content type, then ``obj`` encoded as MessagePack."""
    write_content_type(writer, MSGPACK_CONTENT_TYPE)
    writer.write(msgpack.packb(obj, use_bin_type=True))


@dataclass
class MsgPack(Render):
    """A value encoded as MessagePack."""

    data: Any
    content_type: ClassVar[str] = MSGPACK_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        write_msgpack(writer, self.data)


@dataclass
class ProtoBuf(Render):
    """A protocol buffer message, serialised with its ``SerializeToString``."""

    data: Any
    content_type: ClassVar[str] = PROTOBUF_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        serialize = getattr(self.data, "SerializeToString", None)
        if not callable(serialize):
            raise TypeError(
                f"protobuf: {type(self.data).__name__} is not a protocol buffer message"
            )
        writer.write(serialize())


def _sorted_tree(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return {k: _sorted_tree(value[k]) for k in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [_sorted_tree(item) for item in value]
    return value


@dataclass
class TOML(Render):
    """A table (a mapping or a dataclass) encoded as TOML with sorted keys."""

    data: Any
    content_type: ClassVar[str] = TOML_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        table = _sorted_tree(self.data)
        if not isinstance(table, Mapping):
            raise TypeError(f"toml: cannot encode {type(self.data).__name__} as a table")
        writer.write(tomli_w.dumps(table).encode("utf-8"))


_XML_ESCAPES = {
    ord('"'): "&#34;",
    ord("'"): "&#39;",
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord("\t"): "&#x9;",
    ord("\n"): "&#xA;",
    ord("\r"): "&#xD;",
}


def _xml_escape(text: str) -> str:
    return text.translate(_XML_ESCAPES)


def _write_element(element: ET.Element, out: list[str]) -> None:
    attrs = "".join(
        f' {key}="{_xml_escape(str(value))}"' for key, value in element.attrib.items()
    )
    out.append(f"<{element.tag}{attrs}>")
    if element.text:
        out.append(_xml_escape(element.text))
    for child in element:
        _write_element(child, out)
    out.append(f"</{element.tag}>")
    if element.tail:
        out.append(_xml_escape(element.tail))


def _scalar(value: Any) -> tuple[str, str] | None:
    if isinstance(value, bool):
        return "bool", "true" if value else "false"
    if isinstance(value, int):
        return "int", str(value)
    if isinstance(value, float):
        return "float64", repr(value)
    if isinstance(value, str):
        return "string", value
    if isinstance(value, (bytes, bytearray)):
        return "bytes", bytes(value).decode("utf-8", errors="replace")
    return None


def _encode_xml(value: Any, name: str | None, out: list[str]) -> None:
    if value is None:
        return
    hook = getattr(value, "xml_element", None)
    if callable(hook) and not isinstance(value, type):
        value = hook()
    if isinstance(value, ET.Element):
        _write_element(value, out)
        return
    if isinstance(value, Mapping):
        raise TypeError(f"xml: unsupported type: {type(value).__name__}")
    if isinstance(value, (list, tuple)):
        for item in value:
            _encode_xml(item, name, out)
        return
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        tag = name or type(value).__name__
        out.append(f"<{tag}>")
        for f in dataclasses.fields(value):
            _encode_xml(getattr(value, f.name), f.name, out)
        out.append(f"</{tag}>")
        return
    scalar = _scalar(value)
    if scalar is None:
        raise TypeError(f"xml: unsupported type: {type(value).__name__}")
    default_tag, text = scalar
    tag = name or default_tag
    out.append(f"<{tag}>{_xml_escape(text)}</{tag}>")


@dataclass
class XML(Render):
    """A value encoded as XML.

    Elements, objects with an ``xml_element()`` method returning one,
    dataclasses, scalars and sequences of these can be encoded; plain
    mappings cannot.
    """

    data: Any
    content_type: ClassVar[str] = XML_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        out: list[str] = []
        _encode_xml(self.data, None, out)
        writer.write("".join(out).encode("utf-8"))


class _IndentedDumper(yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


@dataclass
class YAML(Render):
    """A value encoded as block-style YAML with sorted keys and four-space indents."""

    data: Any
    content_type: ClassVar[str] = YAML_CONTENT_TYPE

    def render(self, writer: Any) -> None:
        self.write_content_type(writer)
        text = yaml.dump(
            self.data,
            Dumper=_IndentedDumper,
            sort_keys=True,
            allow_unicode=True,
            default_flow_style=False,
            indent=4,
        )
        writer.write(text.encode("utf-8"))