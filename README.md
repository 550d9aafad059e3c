# ginkit

Building blocks for writing HTTP handlers in Python:

- `ginkit.path` – canonical URL path cleaning
- `ginkit.mode` – a process-wide run mode (debug, release, test)
- `ginkit.recorder` – in-memory `Request`, `Headers` and `ResponseRecorder`
- `ginkit.response_writer` – a `ResponseWriter` that tracks status and body size
- `ginkit.logger` – access-log line formatting with terminal colours
- `ginkit.proxies` – trusted proxy networks and client IP resolution
- `ginkit.routing` – route bookkeeping and redirect path helpers
- `ginkit.render` – response renderers: JSON variants, HTML templates,
  text, raw data, streams, redirects, MessagePack, Protocol Buffers,
  TOML, XML and YAML

## Installation

```
pip install ginkit
```

For development, install the test extra and run the suite:

```
pip install -e ".[test]"
pytest
```

## Cleaning paths

```python
from ginkit.path import clean_path

clean_path("/abc/def/../ghi/../jkl")   # "/abc/jkl"
clean_path("abc//./../def")            # "/def"
clean_path("/abc/.")                   # "/abc/"
clean_path("")                         # "/"
```

Repeated slashes collapse, `.` elements are dropped, `..` never climbs
above the root, and a trailing slash is kept.

## Run mode

```python
from ginkit.mode import Mode, set_mode, mode, mode_code

set_mode("release")
mode()          # Mode.RELEASE
mode_code()     # 1
set_mode("")    # back to Mode.DEBUG
set_mode("bogus")   # raises ValueError
```

The initial mode is read from the `GIN_MODE` environment variable.

## Requests and responses

`Headers` is a case-insensitive, multi-valued header collection.
`Request` holds a method, path, query, headers and body; a query
string inside `path` is split off into `raw_query`. `ResponseRecorder`
collects a status code, headers and body in memory.

`ResponseWriter` wraps any such writer, delays the status line until
the first write, and counts the body bytes sent (`size` is `-1` until
the header has gone out).

```python
from ginkit.recorder import ResponseRecorder
from ginkit.response_writer import ResponseWriter

recorder = ResponseRecorder()
writer = ResponseWriter(recorder)

writer.write_header(300)
writer.written      # False
writer.write(b"hola")
writer.status       # 300
writer.size         # 4
recorder.code       # 300
recorder.text       # "hola"
```

Once the header is written, further `write_header` calls do not change
the status. `flush()` and `hijack()` raise `TypeError` when the
underlying writer does not support them; `pusher()` returns the
underlying writer only if it has a `push` method.

## Rendering

Every renderer has `render(writer)` and `write_content_type(writer)`.
The Content-Type header is only set when none is present yet.

```python
from ginkit.recorder import ResponseRecorder
from ginkit.render.json import JSON, SecureJSON, JsonpJSON, AsciiJSON, PureJSON

w = ResponseRecorder()
JSON({"foo": "bar", "html": "<b>"}).render(w)
w.text                               # '{"foo":"bar","html":"\\u003cb\\u003e"}'
w.headers.get("Content-Type")        # "application/json; charset=utf-8"

w = ResponseRecorder()
SecureJSON("while(1);", [{"foo": "bar"}]).render(w)
w.text                               # 'while(1);[{"foo":"bar"}]'

w = ResponseRecorder()
JsonpJSON("x", {"foo": "bar"}).render(w)
w.text                               # 'x({"foo":"bar"});'
```

Map keys are sorted. `IndentedJSON` indents by four spaces,
`AsciiJSON` writes every non-ASCII character as a `\u` escape, and
`PureJSON` leaves HTML characters unescaped and ends with a newline.
Unsupported values raise `TypeError` or `ValueError`.

Text, raw data, streams and redirects (`ginkit.render.text`):

```python
from io import BytesIO
from ginkit.recorder import Request, ResponseRecorder
from ginkit.render.text import String, Data, Reader, Redirect

w = ResponseRecorder()
String("hola %s %d", ["manu", 2]).render(w)          # "hola manu 2"

w = ResponseRecorder()
Data("image/png", b"#!PNG some raw data").render(w)

w = ResponseRecorder()
Reader(BytesIO(b"payload"), content_type="image/png", content_length=7,
       headers={"x-request-id": "example-id"}).render(w)

w = ResponseRecorder()
Redirect(301, Request(path="/old"), "/new/location").render(w)
w.code                                # 301
w.headers.get("Location")             # "/new/location"
```

A redirect with a status outside 300–308 (other than 201) raises
`ValueError`.

Other formats live in `ginkit.render.encoded`: `MsgPack`, `ProtoBuf`
(any object with `SerializeToString()`), `TOML` (mappings or
dataclasses), `XML` (elements, objects with an `xml_element()` method,
dataclasses and scalars) and `YAML`.

Templated HTML lives in `ginkit.render.html`, using Jinja2 with
configurable delimiters:

```python
from ginkit.render.html import Delims, HTMLDebug

debug = HTMLDebug(files=["templates/hello.tmpl"], delims=Delims("{[{", "}]}"))
debug.instance("hello.tmpl", {"name": "world"}).render(w)
```

`HTMLDebug` reloads its files (or a `glob` pattern) on every
`instance()` call; `HTMLProduction` renders from a template set loaded
once. Functions in `func_map` are available as both globals and
filters.

## Request log lines

```python
from datetime import datetime, timedelta, timezone
from ginkit.logger import LogFormatterParams, default_log_formatter, format_latency

params = LogFormatterParams(
    timestamp=datetime(2018, 12, 7, 9, 11, 42, tzinfo=timezone.utc),
    status_code=200,
    latency=timedelta(seconds=5),
    client_ip="20.20.20.20",
    method="GET",
    path="/",
)
default_log_formatter(params)
# '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'

format_latency(timedelta(milliseconds=9876543210))   # "2743h29m3.21s"
```

Colours are written when `is_term` is true, or always after
`force_console_color()`, and never after `disable_console_color()`;
`reset_console_color()` returns to automatic mode.

## Trusted proxies

```python
from ginkit.proxies import TrustedProxies

proxies = TrustedProxies(["10.0.0.0/8", "192.168.1.33"])
proxies.client_ip_from_header("20.20.20.20, 10.0.0.1")   # "20.20.20.20"
proxies.is_trusted("10.1.2.3")                           # True
proxies.is_unsafe()                                      # False
TrustedProxies().is_unsafe()                             # True (trusts everything)
```

Walking an `X-Forwarded-For` value from the right, the first address
that is not a trusted proxy (or the leftmost one) is taken as the
client. Invalid entries raise `ValueError`; `TrustedProxies(None)`
trusts nothing.

## Routing helpers

`ginkit.routing` provides `HandlersChain` (a list whose `last()` is
the main handler), `RouteInfo`, the `Platform` header names, and the
path arithmetic used for redirects:

```python
from ginkit.routing import trailing_slash_redirect_path, redirect_status

trailing_slash_redirect_path("/foo/")                 # "/foo"
trailing_slash_redirect_path("/foo", "/api")          # "/api/foo/"
redirect_status("GET")                                # 301
redirect_status("POST")                               # 307
```

## What this package does not do

ginkit has no route tree, no request dispatcher or middleware engine,
no request context, no form or JSON binding and no HTTP server. It
supplies the pieces such a framework is built from; connecting them to
a server is left to the caller.