"""Route bookkeeping and the path arithmetic behind routing redirects."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

_UNSAFE_PREFIX_CHARS = re.compile(r"[^a-zA-Z0-9/-]+")
_REPEATED_SLASHES = re.compile(r"/{2,}")

STATUS_MOVED_PERMANENTLY = 301
STATUS_TEMPORARY_REDIRECT = 307


class Platform(str, Enum):
    """Hosting platforms whose client-IP header can be trusted."""

    GOOGLE_APP_ENGINE = "X-Appengine-Remote-Addr"
    CLOUDFLARE = "CF-Connecting-IP"
    FLY_IO = "Fly-Client-IP"


class HandlersChain(list):
    """An ordered list of handlers; the last one is the main handler."""

    def last(self) -> Callable[..., Any] | None:
        """Return the last handler, or None when the chain is empty."""
        return self[-1] if self else None


def _function_name(func: Callable[..., Any]) -> str:
    module = getattr(func, "__module__", None)
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        return repr(func)
    return f"{module}.{name}" if module else name


@dataclass
class RouteInfo:
    """A registered route: its method, path and handler.

    When ``handler`` is left empty it is filled with the dotted name of
    ``handler_func``.
    """

    method: str
    path: str
    handler: str = ""
    handler_func: Callable[..., Any] | None = None

    def __post_init__(self) -> None:
        if not self.handler and self.handler_func is not None:
            self.handler = _function_name(self.handler_func)


def _clean_slash_path(p: str) -> str:
    """Lexically simplify a slash-separated path; an empty result is ``.``."""
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


def sanitize_forwarded_prefix(prefix: str) -> str | None:
    """Make an X-Forwarded-Prefix value safe to put in front of a path.

    The prefix is cleaned, stripped of every character other than letters,
    digits, ``/`` and ``-``, and repeated slashes are collapsed. Returns
    None when there is no prefix to apply.
    """
    cleaned = _clean_slash_path(prefix)
    if cleaned == ".":
        return None
    cleaned = _UNSAFE_PREFIX_CHARS.sub("", cleaned)
    return _REPEATED_SLASHES.sub("/", cleaned)


def trailing_slash_redirect_path(path: str, forwarded_prefix: str = "") -> str:
    """Return the path to redirect to when only the trailing-slash variant exists.

    A trailing slash is removed if present and added otherwise; a usable
    forwarded prefix is placed in front of the path first.
    """
    p = path
    prefix = sanitize_forwarded_prefix(forwarded_prefix)
    if prefix is not None:
        p = prefix + "/" + path
    if len(p) > 1 and p.endswith("/"):
        return p[:-1]
    return p + "/"


def redirect_status(method: str) -> int:
    """301 for GET requests, 307 for every other method."""
    return STATUS_MOVED_PERMANENTLY if method == "GET" else STATUS_TEMPORARY_REDIRECT