from pathlib import Path

import pytest

from command_hooks.errors import HostError, LoadError


def test_load_error_message():
    err = LoadError("something went wrong")
    assert str(err) == "something went wrong"
    assert err.path is None


def test_load_error_with_path():
    p = Path("/some/command-hooks.jsonc")
    err = LoadError("not found", path=p)
    assert err.path == p


def test_load_error_is_exception():
    with pytest.raises(LoadError):
        raise LoadError("test")


def test_host_error_with_session():
    err = HostError("HTTP 500", session_id="ses_1")
    assert str(err) == "HTTP 500"
    assert err.session_id == "ses_1"


def test_host_error_without_session():
    assert HostError("toast failed").session_id is None
