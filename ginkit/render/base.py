"""The interface every response renderer implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar


def write_content_type(writer: Any, value: str | Iterable[str]) -> None:
    """Set the writer's Content-Type header unless one is already present."""
    headers = writer.headers
    if not headers.get_all("Content-Type"):
        headers.set("Content-Type", value)


class Render(ABC):
    """A response body renderer: writes its content type and then its body."""

    content_type: ClassVar[str] = ""

    @abstractmethod
    def render(self, writer: Any) -> None:
        """Write the content type and the body to ``writer``."""

    def write_content_type(self, writer: Any) -> None:
        """Write this renderer's content type to ``writer`` if none is set."""
        write_content_type(writer, self.content_type)