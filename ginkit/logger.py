"""Log line formatting and console colour handling for request logging."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


class ColorMode(Enum):
    """How the default formatter decides whether to colour its output."""

    AUTO = 0
    DISABLE = 1
    FORCE = 2


GREEN = "\033[97;42m"
WHITE = "\033[90;47m"
YELLOW = "\033[90;43m"
RED = "\033[97;41m"
BLUE = "\033[97;44m"
MAGENTA = "\033[97;45m"
CYAN = "\033[97;46m"
RESET = "\033[0m"

_METHOD_COLORS = {
    "GET": BLUE,
    "POST": CYAN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": GREEN,
    "HEAD": MAGENTA,
    "OPTIONS": WHITE,
}

_NANOS_PER_MICRO = 1_000
_NANOS_PER_MILLI = 1_000_000
_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MINUTE = 60 * _NANOS_PER_SECOND

_color_mode = ColorMode.AUTO


def disable_console_color() -> None:
    """Never colour log output."""
    global _color_mode
    _color_mode = ColorMode.DISABLE


def force_console_color() -> None:
    """Always colour log output, even when not writing to a terminal."""
    global _color_mode
    _color_mode = ColorMode.FORCE


def reset_console_color() -> None:
    """Colour log output only when writing to a terminal."""
    global _color_mode
    _color_mode = ColorMode.AUTO


def console_color_mode() -> ColorMode:
    """Return the current console colour mode."""
    return _color_mode


@dataclass
class LogFormatterParams:
    """Everything a log formatter is handed for one request."""

    request: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status_code: int = 0
    latency: timedelta | int = timedelta(0)
    client_ip: str = ""
    method: str = ""
    path: str = ""
    error_message: str = ""
    is_term: bool = False
    body_size: int = 0
    keys: dict[str, Any] = field(default_factory=dict)

    def status_code_color(self) -> str:
        """The ANSI colour for the status code."""
        code = self.status_code
        if 100 <= code < 200:
            return WHITE
        if 200 <= code < 300:
            return GREEN
        if 300 <= code < 400:
            return WHITE
        if 400 <= code < 500:
            return YELLOW
        return RED

    def method_color(self) -> str:
        """The ANSI colour for the HTTP method."""
        return _METHOD_COLORS.get(self.method, RESET)

    def reset_color(self) -> str:
        """The ANSI sequence that resets all attributes."""
        return RESET

    def is_output_color(self) -> bool:
        """Whether colours should be written to the log."""
        return _color_mode is ColorMode.FORCE or (
            _color_mode is ColorMode.AUTO and self.is_term
        )


def _to_nanoseconds(latency: timedelta | int) -> int:
    if isinstance(latency, timedelta):
        return (latency // timedelta(microseconds=1)) * _NANOS_PER_MICRO
    return int(latency)


def _with_fraction(value: int, unit: int) -> str:
    whole, rest = divmod(value, unit)
    text = str(whole)
    if rest:
        digits = len(str(unit)) - 1
        text += "." + f"{rest:0{digits}d}".rstrip("0")
    return text


def format_latency(latency: timedelta | int) -> str:
    """Format a duration (a timedelta, or an int of nanoseconds) like ``2h3m4.5s``."""
    ns = _to_nanoseconds(latency)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < _NANOS_PER_MICRO:
        return f"{sign}{u}ns"
    if u < _NANOS_PER_MILLI:
        return f"{sign}{_with_fraction(u, _NANOS_PER_MICRO)}µs"
    if u < _NANOS_PER_SECOND:
        return f"{sign}{_with_fraction(u, _NANOS_PER_MILLI)}ms"

    seconds, rest = divmod(u, _NANOS_PER_SECOND)
    text = str(seconds % 60)
    if rest:
        text += "." + f"{rest:09d}".rstrip("0")
    text += "s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


_QUOTE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(s: str) -> str:
    parts = []
    for ch in s:
        escaped = _QUOTE_ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ch.isprintable():
            parts.append(ch)
        else:
            cp = ord(ch)
            if cp < 0x80:
                parts.append(f"\\x{cp:02x}")
            elif cp < 0x10000:
                parts.append(f"\\u{cp:04x}")
            else:
                parts.append(f"\\U{cp:08x}")
    return '"' + "".join(parts) + '"'


def default_log_formatter(params: LogFormatterParams) -> str:
    """Format one request as the default access-log line."""
    status_color = method_color = reset_color = ""
    if params.is_output_color():
        status_color = params.status_code_color()
        method_color = params.method_color()
        reset_color = params.reset_color()

    ns = _to_nanoseconds(params.latency)
    if ns > _NANOS_PER_MINUTE:
        ns -= ns % _NANOS_PER_SECOND

    return (
        f"[GIN] {params.timestamp.strftime('%Y/%m/%d - %H:%M:%S')} "
        f"|{status_color} {params.status_code:3d} {reset_color}"
        f"| {format_latency(ns):>13} "
        f"| {params.client_ip:>15} "
        f"|{method_color} {params.method:<7} {reset_color} "
        f"{_quote(params.path)}\n{params.error_message}"
    )