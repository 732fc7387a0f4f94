"""Regression tests for raw-key decoding.

Covers ESC timing, legacy cursor sequences, kitty keyboard protocol event
types, and control-key token mapping.
"""

import os
import time
import unittest

from rota import input as input_mod
from rota.input import KEY_PRESS, KEY_RELEASE, KEY_REPEAT, KeyEvent


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int = 1) -> list[KeyEvent | None]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        (event,) = self._read_all(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(event, KeyEvent("ESC"))
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_none(self) -> None:
        (event,) = self._read_all(b"")
        self.assertIsNone(event)

    def test_printable_key_is_a_press(self) -> None:
        (event,) = self._read_all(b"q")
        self.assertEqual(event, KeyEvent("q", KEY_PRESS))
        self.assertTrue(event.is_press)

    def test_multibyte_character_decodes_whole(self) -> None:
        (event,) = self._read_all("é".encode("utf-8"))
        self.assertEqual(event.key, "é")

    def test_arrow_sequences_are_recognized(self) -> None:
        events = self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", count=4)
        self.assertEqual([event.key for event in events], ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows_are_recognized(self) -> None:
        events = self._read_all(b"\x1bOA\x1bOB", count=2)
        self.assertEqual([event.key for event in events], ["UP", "DOWN"])

    def test_enter_and_backspace_bytes(self) -> None:
        events = self._read_all(b"\r\n\x7f\x08", count=4)
        self.assertEqual([event.key for event in events], ["ENTER", "ENTER", "BACKSPACE", "BACKSPACE"])

    def test_ctrl_c_is_recognized(self) -> None:
        (event,) = self._read_all(b"\x03")
        self.assertEqual(event.key, "CTRL_C")

    def test_page_and_edge_keys(self) -> None:
        events = self._read_all(b"\x1b[5~\x1b[6~\x1b[H\x1b[F", count=4)
        self.assertEqual([event.key for event in events], ["PAGE_UP", "PAGE_DOWN", "HOME", "END"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        first, second = self._read_all(b"\x1bj", count=2)
        self.assertEqual(first.key, "ESC")
        self.assertEqual(second.key, "j")

    def test_kitty_release_and_repeat_event_types(self) -> None:
        events = self._read_all(b"\x1b[106;1:3u\x1b[1;1:2B\x1b[1;1:3A", count=3)
        self.assertEqual(
            events,
            [
                KeyEvent("j", KEY_RELEASE),
                KeyEvent("DOWN", KEY_REPEAT),
                KeyEvent("UP", KEY_RELEASE),
            ],
        )
        self.assertFalse(any(event.is_press for event in events))

    def test_kitty_functional_and_ctrl_keys(self) -> None:
        events = self._read_all(b"\x1b[13u\x1b[127u\x1b[99;5u\x1b[27u", count=4)
        self.assertEqual(
            [event.key for event in events],
            ["ENTER", "BACKSPACE", "CTRL_C", "ESC"],
        )
        self.assertTrue(all(event.is_press for event in events))

    def test_kitty_explicit_press_event_type(self) -> None:
        (event,) = self._read_all(b"\x1b[113;1:1u")
        self.assertEqual(event, KeyEvent("q", KEY_PRESS))

    def test_truncated_csi_sequence_falls_back_to_esc(self) -> None:
        (event,) = self._read_all(b"\x1b[1;")
        self.assertEqual(event.key, "ESC")


class PollKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_poll_reports_ready_and_idle_pipes(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertFalse(input_mod.poll_key(read_fd, 10))
            os.write(write_fd, b"k")
            self.assertTrue(input_mod.poll_key(read_fd, 10))
            self.assertEqual(input_mod.read_key(read_fd).key, "k")
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_poll_sees_pending_bytes_without_reading_fd(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            input_mod._PENDING_BYTES.append(b"r")
            self.assertTrue(input_mod.poll_key(read_fd, 0))
            self.assertEqual(input_mod.read_key(read_fd).key, "r")
        finally:
            os.close(read_fd)
            os.close(write_fd)


if __name__ == "__main__":
    unittest.main()
