from __future__ import annotations

import os
import tempfile
import unittest
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from unittest import mock

from rota.config import BrowserConfig
from rota.input import KEY_RELEASE, KeyEvent
from rota.navigation import NavigationState
from rota.runtime import LoopStatus, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from rota.runtime.terminal import TerminalController


class _FakeTerminal:
    def __init__(self) -> None:
        self.events: list[str] = []

    @contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("leave")


class _ScriptedInput:
    """Feeds key events to the loop; ``None`` stands for a poll timeout."""

    def __init__(self, script: list[KeyEvent | None]) -> None:
        self.script = list(script)
        self.poll_timeouts: list[int] = []
        self.reads = 0

    def poll_key(self, _fd: int, timeout_ms: int) -> bool:
        self.poll_timeouts.append(timeout_ms)
        if not self.script:
            raise AssertionError("loop polled after the script ended")
        if self.script[0] is None:
            self.script.pop(0)
            return False
        return True

    def read_key(self, _fd: int) -> KeyEvent | None:
        self.reads += 1
        return self.script.pop(0)


class RuntimeLoopBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "alpha").mkdir()
        (self.root / "alpha" / "nested.txt").write_text("n\n", encoding="utf-8")
        (self.root / "b.txt").write_text("b\n", encoding="utf-8")
        self.state = NavigationState(current_directory=self.root)
        self.state.refresh()
        self.frames: list[tuple] = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _callbacks(self, scripted: _ScriptedInput, **overrides) -> RuntimeLoopCallbacks:
        base = RuntimeLoopCallbacks(
            draw=lambda frame, columns, lines: self.frames.append((frame, columns, lines)),
            poll_key=scripted.poll_key,
            read_key=scripted.read_key,
            terminal_size=lambda: os.terminal_size((100, 30)),
        )
        if not overrides:
            return base
        return replace(base, **overrides)

    def _run(self, script: list[KeyEvent | None], terminal=None, **overrides) -> LoopStatus:
        scripted = _ScriptedInput(script)
        self.scripted = scripted
        return run_main_loop(
            state=self.state,
            terminal=terminal or _FakeTerminal(),  # type: ignore[arg-type]
            stdin_fd=0,
            timing=RuntimeLoopTiming(poll_timeout_ms=50),
            callbacks=self._callbacks(scripted, **overrides),
        )

    def test_default_timing_matches_config_default(self) -> None:
        self.assertEqual(RuntimeLoopTiming().poll_timeout_ms, BrowserConfig().poll_timeout_ms)
        self.assertEqual(RuntimeLoopTiming().poll_timeout_ms, 50)

    def test_quit_terminates_without_further_draws(self) -> None:
        status = self._run([KeyEvent("q")])

        self.assertIs(status, LoopStatus.TERMINATED)
        self.assertEqual(len(self.frames), 1)
        self.assertEqual(self.scripted.poll_timeouts, [50])

    def test_navigation_keys_mutate_state_and_redraw(self) -> None:
        status = self._run([KeyEvent("ENTER"), KeyEvent("BACKSPACE"), KeyEvent("j"), KeyEvent("q")])

        self.assertIs(status, LoopStatus.TERMINATED)
        self.assertEqual(self.state.current_directory, self.root)
        self.assertEqual(self.state.selected_index, 1)
        labels = [frame.directory_label for frame, _cols, _lines in self.frames]
        self.assertEqual(labels, [str(self.root), str(self.root / "alpha"), str(self.root), str(self.root)])
        self.assertEqual(self.frames[-1][0].selected, 1)

    def test_idle_polls_do_not_redraw_unchanged_frames(self) -> None:
        self._run([None, None, None, KeyEvent("q")])

        self.assertEqual(len(self.frames), 1)
        self.assertEqual(len(self.scripted.poll_timeouts), 4)
        self.assertEqual(self.scripted.reads, 1)

    def test_resize_forces_redraw(self) -> None:
        sizes = iter([os.terminal_size((100, 30)), os.terminal_size((60, 20))])
        self._run([None, KeyEvent("q")], terminal_size=lambda: next(sizes))

        self.assertEqual([(cols, lines) for _frame, cols, lines in self.frames], [(100, 30), (60, 20)])

    def test_release_events_are_not_dispatched(self) -> None:
        self._run([KeyEvent("j", KEY_RELEASE), KeyEvent("q", KEY_RELEASE), KeyEvent("q")])
        self.assertEqual(self.state.selected_index, 0)
        self.assertEqual(len(self.frames), 1)

    def test_keyboard_interrupt_during_read_quits(self) -> None:
        scripted = _ScriptedInput([KeyEvent("j")])

        def interrupted_read(_fd: int) -> KeyEvent | None:
            raise KeyboardInterrupt

        status = run_main_loop(
            state=self.state,
            terminal=_FakeTerminal(),  # type: ignore[arg-type]
            stdin_fd=0,
            timing=RuntimeLoopTiming(),
            callbacks=self._callbacks(scripted, read_key=interrupted_read),
        )

        self.assertIs(status, LoopStatus.TERMINATED)

    def test_unreadable_directory_keeps_loop_running(self) -> None:
        self.state.current_directory = self.root / "missing"
        self.state.refresh()

        status = self._run([KeyEvent("r"), KeyEvent("DOWN"), KeyEvent("ENTER"), KeyEvent("q")])

        self.assertIs(status, LoopStatus.TERMINATED)
        self.assertEqual(self.state.entries, [])
        self.assertTrue(self.frames[0][0].footer_text.startswith("ERROR: read_dir failed"))
        self.assertIsNone(self.frames[0][0].selected)

    def test_list_scroll_follows_selection(self) -> None:
        for idx in range(40):
            (self.root / f"f{idx:02d}.txt").write_text("x", encoding="utf-8")
        self.state.refresh()

        self._run([KeyEvent("END"), KeyEvent("q")])

        final_frame = self.frames[-1][0]
        visible_rows = 30 - 6 - 2
        self.assertEqual(final_frame.selected, len(self.state.entries) - 1)
        self.assertEqual(final_frame.list_start, len(self.state.entries) - visible_rows)

    def test_terminal_is_released_when_draw_fails(self) -> None:
        terminal = _FakeTerminal()

        def failing_draw(*_args) -> None:
            raise OSError("write failed")

        with self.assertRaises(OSError):
            self._run([KeyEvent("q")], terminal=terminal, draw=failing_draw)

        self.assertEqual(terminal.events, ["enter", "leave"])

    def test_real_controller_brackets_loop_with_mode_sequences(self) -> None:
        writes: list[bytes] = []

        with mock.patch("rota.runtime.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "rota.runtime.terminal.tty.setraw"
        ), mock.patch("rota.runtime.terminal.termios.tcsetattr") as setattr_mock, mock.patch(
            "rota.runtime.terminal.os.write",
            side_effect=lambda _fd, data: writes.append(data) or len(data),
        ):
            terminal = TerminalController(stdin_fd=0, stdout_fd=1)
            self._run([KeyEvent("q")], terminal=terminal)

        self.assertEqual(writes, [b"\x1b[?1049h\x1b[?25l\x1b[>3u", b"\x1b[<u\x1b[?25h\x1b[?1049l"])
        setattr_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
