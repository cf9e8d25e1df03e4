"""
Curses front end: event loop, key handling and painting.

Layout (top to bottom):
    title / view tabs / log summary
    table: header, divider, visible rows, divider, totals
    help line
"""

import curses
import logging
import os
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from bandwidth_tui.models.data_models import DisplayRow, LogSummary, SortField, Totals, ViewMode
from bandwidth_tui.services.classifier import TYPE_COLORS, TYPE_GLYPHS
from bandwidth_tui.services.session import Session
from bandwidth_tui.services.viewport import visible_range
from bandwidth_tui.utils.helpers import format_bytes, format_count, truncate_with_ellipsis

logger = logging.getLogger(__name__)

TITLE = "Sanity Log Explorer"
TAB_TITLES = ((ViewMode.PATH, "By Asset"), (ViewMode.TYPE, "By Type"))
TABS_HINT = "←→ switch tabs"
HELP_TEXT = (
    "Keys: q quit | up/down or j/k move | left/right or h/l tabs | enter open | "
    "tab view | d id | e ext | r requests | s avg size | b bandwidth | repeat toggles asc/desc"
)

# Fixed column widths; the id column takes what is left
TYPE_WIDTH = 2
EXT_WIDTH = 8
REQUESTS_WIDTH = 10
AVG_WIDTH = 12
BANDWIDTH_WIDTH = 14
MIN_ID_WIDTH = 10
COLUMN_GAP = 1

TOP_BAR_HEIGHT = 1
HELP_HEIGHT = 1

KEY_ESC = 27
KEY_TAB = 9
ENTER_KEYS = (10, 13, curses.KEY_ENTER)

SORT_KEYS: Dict[int, SortField] = {
    ord("d"): SortField.PATH,
    ord("e"): SortField.EXT,
    ord("r"): SortField.REQUESTS,
    ord("s"): SortField.AVG_REQUEST_SIZE,
    ord("b"): SortField.BANDWIDTH,
}

# (label, shortcut letter, sort field, right aligned)
HEADER_COLUMNS: Tuple[Tuple[str, str, SortField, bool], ...] = (
    ("ID", "d", SortField.PATH, False),
    ("Ext", "e", SortField.EXT, False),
    ("Requests", "r", SortField.REQUESTS, True),
    ("Size (Avg)", "s", SortField.AVG_REQUEST_SIZE, True),
    ("Bandwidth", "b", SortField.BANDWIDTH, True),
)

CURSES_COLORS = {
    "green": curses.COLOR_GREEN,
    "blue": curses.COLOR_BLUE,
    "yellow": curses.COLOR_YELLOW,
    "gray": curses.COLOR_WHITE,
}


# ──────────────────────────────────────────────────────────────────────────────
# Keys
# ──────────────────────────────────────────────────────────────────────────────


def handle_key(session: Session, key: int) -> bool:
    """Apply one key press to the session. Returns True when the user quits."""
    if key in (ord("q"), KEY_ESC):
        return True
    if key in (curses.KEY_UP, ord("k")):
        session.move_up()
    elif key in (curses.KEY_DOWN, ord("j")):
        session.move_down()
    elif key in (curses.KEY_LEFT, ord("h")):
        session.previous_view()
    elif key in (curses.KEY_RIGHT, ord("l")):
        session.next_view()
    elif key == KEY_TAB:
        session.toggle_view()
    elif key in ENTER_KEYS:
        session.activate()
    elif key in SORT_KEYS:
        session.set_sort(SORT_KEYS[key])
    return False


# ──────────────────────────────────────────────────────────────────────────────
# Layout helpers (no curses calls)
# ──────────────────────────────────────────────────────────────────────────────


def id_column_width(screen_width: int) -> int:
    fixed = TYPE_WIDTH + EXT_WIDTH + REQUESTS_WIDTH + AVG_WIDTH + BANDWIDTH_WIDTH
    gaps = COLUMN_GAP * 5
    return max(screen_width - fixed - gaps, MIN_ID_WIDTH)


def column_widths(screen_width: int) -> List[int]:
    return [TYPE_WIDTH, id_column_width(screen_width), EXT_WIDTH, REQUESTS_WIDTH, AVG_WIDTH, BANDWIDTH_WIDTH]


def sort_indicator(field: SortField, session: Session) -> str:
    if session.sort_field is not field:
        return ""
    return " ↓" if session.descending else " ↑"


def row_cells(row: DisplayRow, id_width: int) -> List[str]:
    return [
        TYPE_GLYPHS[row.req_type],
        truncate_with_ellipsis(row.label, id_width),
        row.ext,
        format_count(row.request_count),
        format_bytes(row.avg_size),
        format_bytes(row.bandwidth_sum),
    ]


def totals_cells(totals: Totals, id_width: int) -> List[str]:
    return [
        "",
        truncate_with_ellipsis("TOTAL", id_width),
        "",
        format_count(totals.request_count),
        format_bytes(totals.avg_size),
        format_bytes(totals.bandwidth_sum),
    ]


def summary_text(summary: Optional[LogSummary]) -> str:
    if summary is None:
        return ""
    text = f"{summary.kept_lines} records, {summary.skipped_lines} skipped"
    if summary.first_timestamp and summary.last_timestamp:
        fmt = "%Y-%m-%d %H:%M"
        text += f" | {summary.first_timestamp.strftime(fmt)} → {summary.last_timestamp.strftime(fmt)} UTC"
    return text


def align(text: str, width: int, right: bool) -> str:
    text = text[:width]
    return text.rjust(width) if right else text.ljust(width)


# ──────────────────────────────────────────────────────────────────────────────
# Painting
# ──────────────────────────────────────────────────────────────────────────────


class TerminalView:
    """Paints a Session onto a curses screen and runs the input loop"""

    RIGHT_ALIGNED = (False, False, False, True, True, True)

    def __init__(
        self,
        stdscr: "curses.window",
        session: Session,
        summary: Optional[LogSummary] = None,
        poll_ms: int = 200,
    ):
        self.stdscr = stdscr
        self.session = session
        self.summary = summary
        self.poll_ms = poll_ms
        self.colors: Dict[str, int] = {}

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            for i, (name, fg) in enumerate(CURSES_COLORS.items(), start=1):
                curses.init_pair(i, fg, -1)
                self.colors[name] = curses.color_pair(i)
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal does not support hiding the cursor")

        stdscr.keypad(True)
        stdscr.timeout(poll_ms)

    def color(self, name: str) -> int:
        return self.colors.get(name, 0)

    def put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        height, width = self.stdscr.getmaxyx()
        if y < 0 or y >= height or x >= width:
            return
        try:
            self.stdscr.addnstr(y, x, text, width - x, attr)
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass

    # ── loop ─────────────────────────────────────────────────────────────────

    def run(self) -> None:
        while True:
            self.render()
            key = self.stdscr.getch()
            if key == -1 or key == curses.KEY_RESIZE:
                continue
            if handle_key(self.session, key):
                break

    # ── frame ────────────────────────────────────────────────────────────────

    def render(self) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        self.render_top_bar(width)
        self.render_table(TOP_BAR_HEIGHT, height - TOP_BAR_HEIGHT - HELP_HEIGHT, width)
        if height > TOP_BAR_HEIGHT:
            self.put(height - 1, 0, HELP_TEXT, curses.A_DIM)
        self.stdscr.refresh()

    def render_top_bar(self, width: int) -> None:
        self.put(0, 0, TITLE, curses.A_BOLD)
        x = len(TITLE) + 3
        for mode, title in TAB_TITLES:
            attr = curses.A_REVERSE if mode is self.session.view_mode else 0
            self.put(0, x, f" {title} ", attr)
            x += len(title) + 3
        summary = summary_text(self.summary)
        if summary:
            self.put(0, x + 1, summary, curses.A_DIM)
        self.put(0, max(width - len(TABS_HINT) - 1, 0), TABS_HINT, curses.A_DIM)

    def render_table(self, top: int, table_height: int, width: int) -> None:
        session = self.session
        widths = column_widths(width)
        start, end = visible_range(len(session.rows), session.selected, table_height)
        bottom = top + table_height
        if table_height <= 0:
            return

        y = top
        self.render_header(y, widths)
        y += 1
        if y < bottom:
            self.render_divider(y, widths)
            y += 1
        for index in range(start, end):
            row = session.rows[index]
            attr = curses.A_BOLD if row.is_group else 0
            if index == session.selected:
                attr |= curses.A_REVERSE
            self.render_cells(y, widths, row_cells(row, widths[1]), attr, self.color(TYPE_COLORS[row.req_type]))
            y += 1
        if y < bottom:
            self.render_divider(y, widths)
            y += 1
        if y < bottom:
            self.render_cells(y, widths, totals_cells(session.totals, widths[1]), curses.A_BOLD)

    def render_cells(
        self,
        y: int,
        widths: Sequence[int],
        cells: Sequence[str],
        attr: int,
        type_attr: int = 0,
    ) -> None:
        x = 0
        for i, (text, w) in enumerate(zip(cells, widths)):
            cell_attr = attr | type_attr if i == 0 else attr
            self.put(y, x, align(text, w, self.RIGHT_ALIGNED[i]), cell_attr)
            x += w + COLUMN_GAP

    def render_divider(self, y: int, widths: Sequence[int]) -> None:
        x = 0
        for w in widths:
            self.put(y, x, "─" * max(w, 1), curses.A_DIM)
            x += w + COLUMN_GAP

    def render_header(self, y: int, widths: Sequence[int]) -> None:
        self.put(y, 0, "T", curses.A_BOLD)
        x = widths[0] + COLUMN_GAP
        for (label, shortcut, field, right), w in zip(HEADER_COLUMNS, widths[1:]):
            text = label + sort_indicator(field, self.session)
            pad = max(w - len(text), 0) if right else 0
            underline_at = label.lower().find(shortcut)
            for i, ch in enumerate(text[:w]):
                attr = curses.A_BOLD
                if i == underline_at:
                    attr |= curses.A_UNDERLINE
                self.put(y, x + pad + i, ch, attr)
            x += w + COLUMN_GAP


def run_terminal(
    session: Session,
    summary: Optional[LogSummary] = None,
    poll_ms: int = 200,
    wrapper: Callable = curses.wrapper,
) -> None:
    """Take over the terminal until the user quits; curses state is always restored"""
    # Esc should quit without the default one second delay
    os.environ.setdefault("ESCDELAY", "25")

    def _main(stdscr: "curses.window") -> None:
        TerminalView(stdscr, session, summary, poll_ms).run()

    wrapper(_main)
