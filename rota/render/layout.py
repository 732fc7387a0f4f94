"""Frame geometry: the 60/40 split and the header/list/footer bands."""

from __future__ import annotations

from dataclasses import dataclass

LEFT_PANE_PERCENT = 60
HEADER_ROWS = 3
FOOTER_ROWS = 3
BORDER_ROWS = 2


@dataclass(frozen=True)
class FrameLayout:
    """Cell sizes of every region for one terminal size."""

    width: int
    height: int
    left_width: int
    right_width: int
    header_rows: int
    list_rows: int
    footer_rows: int

    @property
    def visible_list_rows(self) -> int:
        """Entry rows that fit inside the list box borders."""
        return max(0, self.list_rows - BORDER_ROWS)


def compute_layout(width: int, height: int) -> FrameLayout:
    """Split the screen; small terminals shrink the list band first."""
    width = max(1, width)
    height = max(1, height)
    left_width = max(1, (width * LEFT_PANE_PERCENT) // 100)
    right_width = max(0, width - left_width)
    header_rows = min(HEADER_ROWS, height)
    footer_rows = min(FOOTER_ROWS, height - header_rows)
    list_rows = height - header_rows - footer_rows
    return FrameLayout(
        width=width,
        height=height,
        left_width=left_width,
        right_width=right_width,
        header_rows=header_rows,
        list_rows=list_rows,
        footer_rows=footer_rows,
    )


def list_scroll_start(selected: int, list_start: int, visible_rows: int, count: int) -> int:
    """Return the first visible list row so that ``selected`` stays on screen."""
    if visible_rows <= 0 or count <= 0:
        return 0
    if selected < list_start:
        list_start = selected
    elif selected >= list_start + visible_rows:
        list_start = selected - visible_rows + 1
    return max(0, min(list_start, max(0, count - visible_rows)))
