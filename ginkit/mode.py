"""Process-wide run mode: debug, release or test."""

from __future__ import annotations

import os
from enum import Enum

ENV_MODE = "GIN_MODE"


class Mode(str, Enum):
    """The run modes the framework knows."""

    DEBUG = "debug"
    RELEASE = "release"
    TEST = "test"

    @property
    def code(self) -> int:
        return _CODES[self]


_CODES = {Mode.DEBUG: 0, Mode.RELEASE: 1, Mode.TEST: 2}

_current = Mode.DEBUG


def set_mode(value: str | Mode) -> None:
    """Set the run mode; an empty value selects debug mode.

    Raises ValueError for a name that is not a known mode.
    """
    global _current
    if value == "":
        value = Mode.DEBUG
    try:
        _current = Mode(value)
    except ValueError:
        raise ValueError(
            f"gin mode unknown: {value} (available mode: debug release test)"
        ) from None


def mode() -> Mode:
    """Return the current run mode."""
    return _current


def mode_code() -> int:
    """Return the numeric code of the current mode: 0 debug, 1 release, 2 test."""
    return _current.code


set_mode(os.environ.get(ENV_MODE, ""))