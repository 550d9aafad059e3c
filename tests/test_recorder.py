import pytest

from ginkit.recorder import Headers, Request, ResponseRecorder


def test_headers_are_case_insensitive():
    headers = Headers()
    headers.set("content-type", "image/png")
    assert headers.get("Content-Type") == "image/png"
    assert headers.get("CONTENT-TYPE") == "image/png"
    assert "Content-type" in headers


def test_headers_canonical_key_listed():
    headers = Headers({"x-request-id": "requestId"})
    assert list(headers) == ["X-Request-Id"]
    assert headers["X-REQUEST-ID"] == "requestId"


def test_headers_missing_key_default():
    headers = Headers()
    assert headers.get("Allow") == ""
    assert headers.get("Allow", "none") == "none"
    assert headers.get_all("Allow") == []
    with pytest.raises(KeyError):
        headers["Allow"]


def test_headers_multiple_values():
    headers = Headers()
    headers.set("Content-Type", ["text/plain", "text/html"])
    assert headers.get("Content-Type") == "text/plain"
    assert headers.get_all("content-type") == ["text/plain", "text/html"]


def test_headers_set_replaces_and_empty_removes():
    headers = Headers()
    headers["Allow"] = "GET"
    headers.set("Allow", "POST")
    assert headers.get_all("Allow") == ["POST"]
    headers.set("Allow", [])
    assert "Allow" not in headers
    assert len(headers) == 0


def test_headers_get_all_is_a_copy():
    headers = Headers({"Allow": "GET"})
    headers.get_all("Allow").append("PUT")
    assert headers.get_all("Allow") == ["GET"]


def test_headers_delete():
    headers = Headers({"Allow": "GET"})
    del headers["allow"]
    assert "Allow" not in headers


def test_headers_equality():
    assert Headers({"a-b": "x"}) == Headers({"A-B": "x"})


def test_request_splits_query():
    request = Request(method="GET", path="/example?a=100")
    assert request.path == "/example"
    assert request.raw_query == "a=100"


def test_recorder_defaults():
    recorder = ResponseRecorder()
    assert recorder.code == 200
    assert recorder.wrote_header is False
    assert recorder.text == ""


def test_recorder_write_accumulates():
    recorder = ResponseRecorder()
    assert recorder.write(b"hola") == 4
    assert recorder.write(" adios") == 6
    assert recorder.text == "hola adios"
    assert recorder.code == 200
    assert recorder.wrote_header is True


def test_recorder_first_status_wins():
    recorder = ResponseRecorder()
    recorder.write_header(500)
    recorder.write_header(404)
    assert recorder.code == 500


def test_recorder_invalid_status():
    recorder = ResponseRecorder()
    with pytest.raises(ValueError):
        recorder.write_header(-1)