"""Browser keyboard handling: maps key events onto navigation operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..navigation import NavigationState
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyEvent

QUIT_KEYS = ("q", "CTRL_C")
NEXT_KEYS = ("DOWN", "j")
PREVIOUS_KEYS = ("UP", "k")
OPEN_KEYS = ("ENTER", "RIGHT", "l")
BACK_KEYS = ("BACKSPACE", "LEFT", "h")
REFRESH_KEYS = ("r",)

HELP_TEXT = "Keys: j/k or ↑/↓ move | Enter open dir | Backspace up | r refresh | q quit"


def _default_page_rows() -> int:
    return 10


@dataclass(frozen=True)
class BrowserKeyContext:
    """State and view geometry needed to act on browser keys."""

    state: NavigationState
    page_rows: Callable[[], int] = _default_page_rows


def build_browser_key_registry(context: BrowserKeyContext) -> KeyComboRegistry:
    """Bind every browser key; handlers return ``True`` only to request quit."""
    state = context.state

    def quit_action() -> bool:
        return True

    def page_down_action() -> bool:
        state.move_selection(max(1, context.page_rows()))
        return False

    def page_up_action() -> bool:
        state.move_selection(-max(1, context.page_rows()))
        return False

    def first_entry_action() -> bool:
        state.move_selection(-len(state.entries))
        return False

    def last_entry_action() -> bool:
        state.move_selection(len(state.entries))
        return False

    def step(action: Callable[[], None]) -> Callable[[], bool]:
        def run() -> bool:
            action()
            return False

        return run

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(QUIT_KEYS, quit_action),
        KeyComboBinding(NEXT_KEYS, step(lambda: state.move_selection(1))),
        KeyComboBinding(PREVIOUS_KEYS, step(lambda: state.move_selection(-1))),
        KeyComboBinding(OPEN_KEYS, step(state.enter_selected_dir)),
        KeyComboBinding(BACK_KEYS, step(state.go_parent)),
        KeyComboBinding(REFRESH_KEYS, step(state.refresh)),
        KeyComboBinding(("PAGE_DOWN",), page_down_action),
        KeyComboBinding(("PAGE_UP",), page_up_action),
        KeyComboBinding(("HOME", "g"), first_entry_action),
        KeyComboBinding(("END", "G"), last_entry_action),
    )


class BrowserKeyHandler:
    """Reusable browser key handler with a registry built once per context."""

    def __init__(self, context: BrowserKeyContext) -> None:
        self.context = context
        self.registry = build_browser_key_registry(context)

    def handle(self, event: KeyEvent) -> bool:
        """Handle one key event and return ``True`` when the browser should quit.

        Repeat and release events are dropped so terminals that report them do
        not trigger an action twice.
        """
        if not event.is_press:
            return False
        return bool(self.registry.dispatch(event.key))

