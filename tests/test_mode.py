import pytest

from ginkit.mode import Mode, mode, mode_code, set_mode


@pytest.fixture(autouse=True)
def restore_mode():
    previous = mode()
    yield
    set_mode(previous)


def test_set_mode_debug():
    set_mode("debug")
    assert mode() == Mode.DEBUG
    assert mode() == "debug"
    assert mode_code() == 0


def test_set_mode_release():
    set_mode("release")
    assert mode() == Mode.RELEASE
    assert mode() == "release"
    assert mode_code() == 1


def test_set_mode_test():
    set_mode(Mode.TEST)
    assert mode() == "test"
    assert mode_code() == 2


def test_empty_value_selects_debug():
    set_mode("release")
    set_mode("")
    assert mode() == Mode.DEBUG
    assert mode_code() == 0


def test_unknown_mode_raises():
    set_mode("test")
    with pytest.raises(ValueError, match="gin mode unknown: unknown"):
        set_mode("unknown")
    assert mode() == Mode.TEST