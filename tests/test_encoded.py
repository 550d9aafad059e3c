import xml.etree.ElementTree as ET
from dataclasses import dataclass

import msgpack
import pytest
import yaml

from ginkit.recorder import ResponseRecorder
from ginkit.render.encoded import TOML, XML, YAML, MsgPack, ProtoBuf, write_msgpack


def test_render_msgpack():
    w = ResponseRecorder()
    data = {"foo": "bar"}
    MsgPack(data).write_content_type(w)
    assert w.headers.get("Content-Type") == "application/msgpack; charset=utf-8"

    MsgPack(data).render(w)
    assert bytes(w.body) == b"\x81\xa3foo\xa3bar"
    assert msgpack.unpackb(bytes(w.body)) == data
    assert w.headers.get("Content-Type") == "application/msgpack; charset=utf-8"


def test_write_msgpack_round_trip():
    w = ResponseRecorder()
    data = {"a": [1, 2, 3], "b": {"c": True}, "d": None}
    write_msgpack(w, data)
    assert msgpack.unpackb(bytes(w.body)) == data


def test_msgpack_unsupported_type():
    with pytest.raises(TypeError):
        MsgPack(object()).render(ResponseRecorder())


class FakeMessage:
    def __init__(self, label=None, reps=()):
        self.label = label
        self.reps = list(reps)

    def SerializeToString(self):
        if self.label is None:
            raise ValueError("required field label not set")
        encoded = self.label.encode()
        return b"\x0a" + bytes([len(encoded)]) + encoded + b"".join(
            b"\x10" + bytes([r]) for r in self.reps
        )


def test_render_protobuf():
    w = ResponseRecorder()
    message = FakeMessage(label="test", reps=[1, 2])
    ProtoBuf(message).write_content_type(w)
    assert w.headers.get("Content-Type") == "application/x-protobuf"

    ProtoBuf(message).render(w)
    assert bytes(w.body) == message.SerializeToString()
    assert w.headers.get("Content-Type") == "application/x-protobuf"


def test_render_protobuf_fail():
    with pytest.raises(ValueError, match="required field"):
        ProtoBuf(FakeMessage()).render(ResponseRecorder())


def test_render_protobuf_not_a_message():
    with pytest.raises(TypeError):
        ProtoBuf({"label": "test"}).render(ResponseRecorder())


def test_render_toml():
    w = ResponseRecorder()
    data = {"foo": "bar", "html": "<b>"}
    TOML(data).write_content_type(w)
    assert w.headers.get("Content-Type") == "application/toml; charset=utf-8"

    TOML(data).render(w)
    assert w.text == 'foo = "bar"\nhtml = "<b>"\n'
    assert w.headers.get("Content-Type") == "application/toml; charset=utf-8"


def test_render_toml_sorts_keys():
    w = ResponseRecorder()
    TOML({"b": 1, "a": 2}).render(w)
    assert w.text == "a = 2\nb = 1\n"


def test_render_toml_fail():
    with pytest.raises(TypeError):
        TOML("255.255.255.255").render(ResponseRecorder())


class XmlMap(dict):
    def xml_element(self):
        root = ET.Element("map")
        for key, value in self.items():
            ET.SubElement(root, key).text = value
        return root


def test_render_xml():
    w = ResponseRecorder()
    data = XmlMap(foo="bar")
    XML(data).write_content_type(w)
    assert w.headers.get("Content-Type") == "application/xml; charset=utf-8"

    XML(data).render(w)
    assert w.text == "<map><foo>bar</foo></map>"
    assert w.headers.get("Content-Type") == "application/xml; charset=utf-8"


@dataclass
class Person:
    name: str
    age: int


def test_render_xml_dataclass_escapes_text():
    w = ResponseRecorder()
    XML(Person(name="Ann & <Bo>", age=3)).render(w)
    assert w.text == "<Person><name>Ann &amp; &lt;Bo&gt;</name><age>3</age></Person>"


def test_render_xml_scalars_and_sequence():
    w = ResponseRecorder()
    XML(["a", 5, True]).render(w)
    assert w.text == "<string>a</string><int>5</int><bool>true</bool>"


def test_render_xml_plain_mapping_fails():
    with pytest.raises(TypeError, match="xml: unsupported type: dict"):
        XML({"foo": "bar"}).render(ResponseRecorder())


def test_render_yaml():
    w = ResponseRecorder()
    data = {"b": {"c": 2}, "a": "Easy!"}
    YAML(data).write_content_type(w)
    assert w.headers.get("Content-Type") == "application/yaml; charset=utf-8"

    YAML(data).render(w)
    assert w.text == "a: Easy!\nb:\n    c: 2\n"
    assert w.headers.get("Content-Type") == "application/yaml; charset=utf-8"


def test_render_yaml_round_trip():
    w = ResponseRecorder()
    data = {"a": "Easy!", "b": {"c": 2, "d": [3, 4]}}
    YAML(data).render(w)
    assert yaml.safe_load(w.text) == data


def test_render_yaml_fail():
    with pytest.raises(yaml.YAMLError):
        YAML(object()).render(ResponseRecorder())


def test_preset_content_type_is_kept():
    w = ResponseRecorder()
    w.headers.set("Content-Type", "text/plain")
    YAML({"a": 1}).render(w)
    assert w.headers.get("Content-Type") == "text/plain"
    assert w.text == "a: 1\n"