import pytest

from ginkit.recorder import ResponseRecorder
from ginkit.response_writer import ResponseWriter


class FlushingRecorder(ResponseRecorder):
    def __init__(self):
        super().__init__()
        self.flushed = False

    def flush(self):
        self.flushed = True


class PushingRecorder(ResponseRecorder):
    def push(self, target, opts=None):
        return None


def test_unwrap():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    assert writer.unwrap() is recorder


def test_reset():
    recorder = ResponseRecorder()
    writer = ResponseWriter()
    writer.size = 5
    writer.status = 500
    writer.reset(recorder)
    assert writer.size == -1
    assert writer.status == 200
    assert writer.writer is recorder
    assert writer.written is False


def test_write_header():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    writer.write_header(300)
    assert writer.written is False
    assert writer.status == 300
    assert recorder.wrote_header is False
    writer.write_header(-1)
    assert writer.status == 300


def test_write_headers_now():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    writer.write_header(300)
    writer.write_header_now()
    assert writer.written is True
    assert writer.size == 0
    assert recorder.code == 300

    writer.size = 10
    writer.write_header_now()
    assert writer.size == 10


def test_write():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    n = writer.write(b"hola")
    assert n == 4
    assert writer.size == 4
    assert writer.status == 200
    assert recorder.code == 200
    assert recorder.text == "hola"

    n = writer.write(b" adios")
    assert n == 6
    assert writer.size == 10
    assert recorder.text == "hola adios"


def test_write_string():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    assert writer.write_string("hola") == 4
    assert writer.size == 4
    assert recorder.text == "hola"


def test_hijack_unsupported():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    with pytest.raises(TypeError):
        writer.hijack()
    assert writer.written is True


def test_flush_unsupported_still_sends_header():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    with pytest.raises(TypeError):
        writer.flush()
    assert recorder.wrote_header is True


def test_flush():
    recorder = FlushingRecorder()
    writer = ResponseWriter(recorder)
    writer.write_header(500)
    writer.flush()
    assert recorder.code == 500
    assert recorder.flushed is True


def test_status_code_cannot_change_after_written():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    writer.write_header(200)
    writer.write_header_now()
    assert writer.status == 200
    assert writer.written is True

    writer.write_header(401)
    assert writer.status == 200


def test_pusher_with_pusher():
    recorder = PushingRecorder()
    writer = ResponseWriter(recorder)
    assert writer.pusher() is recorder


def test_pusher_without_pusher():
    writer = ResponseWriter(ResponseRecorder())
    assert writer.pusher() is None


def test_headers_come_from_underlying_writer():
    recorder = ResponseRecorder()
    writer = ResponseWriter(recorder)
    writer.headers.set("Allow", "GET")
    assert recorder.headers.get("Allow") == "GET"