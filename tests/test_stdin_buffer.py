"""Tests for StdinBuffer sequence splitting and bracketed paste handling."""

from __future__ import annotations

import pytest

from clockwatch.stdin_buffer import StdinBuffer


@pytest.fixture
def buffer():
    buf = StdinBuffer()
    buf.sequences = []
    buf.pastes = []
    buf.on_data(buf.sequences.append)
    buf.on_paste(buf.pastes.append)
    return buf


class TestSequenceSplitting:
    def test_plain_characters_are_emitted_one_by_one(self, buffer) -> None:
        buffer.process("ql ")
        assert buffer.sequences == ["q", "l", " "]
        assert not buffer.pending

    def test_escape_sequences_are_kept_whole(self, buffer) -> None:
        buffer.process("\x1b[A\x1b[113;1:3uq")
        assert buffer.sequences == ["\x1b[A", "\x1b[113;1:3u", "q"]

    def test_ss3_and_meta_sequences(self, buffer) -> None:
        buffer.process("\x1bOP\x1bq")
        assert buffer.sequences == ["\x1bOP", "\x1bq"]

    def test_sgr_mouse_sequence(self, buffer) -> None:
        buffer.process("\x1b[<0;10;5M")
        assert buffer.sequences == ["\x1b[<0;10;5M"]

    def test_osc_sequence(self, buffer) -> None:
        buffer.process("\x1b]11;rgb:0000/0000/0000\x07")
        assert buffer.sequences == ["\x1b]11;rgb:0000/0000/0000\x07"]


class TestPartialSequences:
    def test_split_sequence_is_joined(self, buffer) -> None:
        buffer.process("\x1b[")
        assert buffer.sequences == []
        assert buffer.pending
        assert buffer.get_buffer() == "\x1b["

        buffer.process("A")
        assert buffer.sequences == ["\x1b[A"]
        assert not buffer.pending

    def test_complete_prefix_emitted_before_partial_tail(self, buffer) -> None:
        buffer.process("l\x1b[11")
        assert buffer.sequences == ["l"]
        assert buffer.get_buffer() == "\x1b[11"

        buffer.process("3u")
        assert buffer.sequences == ["l", "\x1b[113u"]

    def test_flush_emits_lone_escape(self, buffer) -> None:
        buffer.process("\x1b")
        assert buffer.sequences == []
        buffer.flush()
        assert buffer.sequences == ["\x1b"]
        assert not buffer.pending

    def test_flush_with_nothing_held_is_noop(self, buffer) -> None:
        buffer.flush()
        assert buffer.sequences == []

    def test_clear_discards_held_input(self, buffer) -> None:
        buffer.process("\x1b[")
        buffer.clear()
        assert not buffer.pending
        buffer.flush()
        assert buffer.sequences == []

    def test_default_timeout(self) -> None:
        assert StdinBuffer().timeout == pytest.approx(0.01)
        assert StdinBuffer(timeout=0.05).timeout == pytest.approx(0.05)


class TestBracketedPaste:
    def test_paste_is_delivered_whole(self, buffer) -> None:
        buffer.process("\x1b[200~q l\x1b[201~")
        assert buffer.pastes == ["q l"]
        assert buffer.sequences == []

    def test_input_around_paste(self, buffer) -> None:
        buffer.process("a\x1b[200~xyz\x1b[201~l")
        assert buffer.sequences == ["a", "l"]
        assert buffer.pastes == ["xyz"]

    def test_paste_split_across_chunks(self, buffer) -> None:
        buffer.process("\x1b[200~hel")
        assert buffer.pastes == []
        assert buffer.pending

        buffer.process("lo\x1b[201~")
        assert buffer.pastes == ["hello"]
        assert not buffer.pending

    def test_escape_sequences_inside_paste_are_not_keys(self, buffer) -> None:
        buffer.process("\x1b[200~\x1b[A\x1b[201~")
        assert buffer.pastes == ["\x1b[A"]
        assert buffer.sequences == []
