"""
Tests for chatlink.errors.internal
"""

import pytest

from chatlink.errors import ChatLinkError, ConfigurationError, TransportError


def test_hierarchy():
    assert issubclass(TransportError, ChatLinkError)
    assert issubclass(ConfigurationError, ChatLinkError)


def test_data_is_copied():
    source = {"host": "a"}
    err = TransportError("boom", data=source)
    source["host"] = "b"
    assert err.data == {"host": "a"}
    assert str(err) == "boom"


def test_data_defaults_to_empty():
    assert ConfigurationError("missing").data == {}


def test_raise_and_catch_as_base():
    with pytest.raises(ChatLinkError):
        raise TransportError("no loop")
