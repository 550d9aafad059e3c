"""Canonicalisation of URL paths."""

from __future__ import annotations


def clean_path(p: str) -> str:
    """Return the canonical URL path for ``p``.

    Repeated slashes are collapsed, ``.`` elements are dropped, ``..``
    elements remove the element before them (never climbing above the root),
    and the result always begins with ``/``. A trailing slash is kept, and a
    final ``.`` element also leaves one. An empty result becomes ``/``.
    """
    if not p:
        return "/"

    segments = p.split("/")
    trailing = (len(p) > 1 and p.endswith("/")) or segments[-1] == "."

    stack: list[str] = []
    for segment in segments:
        if segment in ("", "."):
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)

    if not stack:
        return "/"
    result = "/" + "/".join(stack)
    return result + "/" if trailing else result