"""A response writer wrapper that tracks status and body size."""

from __future__ import annotations

import logging
from typing import Any

from ginkit.mode import Mode, mode

NO_WRITTEN = -1
DEFAULT_STATUS = 200

_log = logging.getLogger("ginkit")


class ResponseWriter:
    """Wraps an underlying writer, delaying the status line until the first write.

    ``size`` is ``-1`` until the header has been sent, then counts body bytes.
    """

    def __init__(self, writer: Any = None) -> None:
        self.writer: Any = None
        self.size = NO_WRITTEN
        self.status = DEFAULT_STATUS
        self.reset(writer)

    def reset(self, writer: Any) -> None:
        """Point at a new underlying writer and forget any previous state."""
        self.writer = writer
        self.size = NO_WRITTEN
        self.status = DEFAULT_STATUS

    def unwrap(self) -> Any:
        """Return the underlying writer."""
        return self.writer

    @property
    def written(self) -> bool:
        """Whether the header has already been sent."""
        return self.size != NO_WRITTEN

    @property
    def headers(self) -> Any:
        """The underlying writer's headers."""
        return self.writer.headers

    def write_header(self, code: int) -> None:
        """Set the status to send; ignored for non-positive codes or once written."""
        if code > 0 and self.status != code:
            if self.written:
                if mode() == Mode.DEBUG:
                    _log.warning(
                        "[WARNING] Headers were already written. "
                        "Wanted to override status code %d with %d",
                        self.status,
                        code,
                    )
                return
            self.status = code

    def write_header_now(self) -> None:
        """Send the status line now if it has not been sent yet."""
        if not self.written:
            self.size = 0
            self.writer.write_header(self.status)

    def write(self, data: bytes | bytearray) -> int:
        """Write body bytes, sending the header first if needed."""
        self.write_header_now()
        n = self.writer.write(bytes(data))
        self.size += n
        return n

    def write_string(self, s: str) -> int:
        """Write a string as UTF-8, sending the header first if needed."""
        return self.write(s.encode("utf-8"))

    def flush(self) -> None:
        """Send the header and flush the underlying writer."""
        self.write_header_now()
        flush = getattr(self.writer, "flush", None)
        if not callable(flush):
            raise TypeError("underlying writer does not support flushing")
        flush()

    def hijack(self) -> Any:
        """Take over the connection from the underlying writer."""
        if self.size < 0:
            self.size = 0
        hijack = getattr(self.writer, "hijack", None)
        if not callable(hijack):
            raise TypeError("underlying writer does not support hijacking")
        return hijack()

    def pusher(self) -> Any:
        """Return the underlying writer if it supports server push, else None."""
        if callable(getattr(self.writer, "push", None)):
            return self.writer
        return None