from __future__ import annotations

import logging

from chatlink.irc.framing import LineBuffer


def test_splits_complete_lines():  # type: ignore[no-untyped-def]
    buf = LineBuffer()
    assert buf.feed("PING :a\r\n:x 001 y :z\r\n") == ["PING :a", ":x 001 y :z"]
    assert buf.pending == ""


def test_partial_line_carried_over():  # type: ignore[no-untyped-def]
    buf = LineBuffer()
    assert buf.feed(":n!u@h PRIVMSG #c :hel") == []
    assert buf.pending == ":n!u@h PRIVMSG #c :hel"
    assert buf.feed("lo\r\n") == [":n!u@h PRIVMSG #c :hello"]


def test_terminator_split_across_chunks():  # type: ignore[no-untyped-def]
    buf = LineBuffer()
    assert buf.feed("PING :a\r") == []
    assert buf.feed("\nPING :b\r\n") == ["PING :a", "PING :b"]


def test_bare_newline_and_empty_lines():  # type: ignore[no-untyped-def]
    buf = LineBuffer()
    assert buf.feed("a\n\r\n\nb\n") == ["a", "b"]


def test_clear_discards_pending():  # type: ignore[no-untyped-def]
    buf = LineBuffer()
    buf.feed("half")
    buf.clear()
    assert buf.feed(" line\r\n") == [" line"]


def test_overflow_drops_fragment(caplog):  # type: ignore[no-untyped-def]
    caplog.set_level(logging.WARNING)
    buf = LineBuffer(max_line_length=8)
    assert buf.feed("x" * 20) == []
    assert buf.pending == ""
    assert buf.discarding
    assert any("Dropped partial line" in r.message for r in caplog.records)


def test_overflow_discards_rest_of_long_line():  # type: ignore[no-untyped-def]
    buf = LineBuffer(max_line_length=10)
    assert buf.feed(":a!a@a PRIVMSG #c :xxxxxxxx") == []
    assert buf.feed("still the same line") == []
    assert buf.feed("TAIL OF LONG LINE\r\nPING :next\r\n") == ["PING :next"]
    assert not buf.discarding


def test_overflow_keeps_complete_lines_before_fragment():  # type: ignore[no-untyped-def]
    buf = LineBuffer(max_line_length=10)
    assert buf.feed("PING :a\r\n" + "y" * 30) == ["PING :a"]
    assert buf.feed("yy\r\nPING :b\r\n") == ["PING :b"]


def test_clear_stops_discarding():  # type: ignore[no-untyped-def]
    buf = LineBuffer(max_line_length=4)
    buf.feed("z" * 10)
    buf.clear()
    assert not buf.discarding
    assert buf.feed("PING :c\r\n") == ["PING :c"]
