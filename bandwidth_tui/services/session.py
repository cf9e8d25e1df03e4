"""
Session - selection, sort and view state for one interactive run

The session owns the read-only PathStat list and the row list derived
from it. Every sort or view change rebuilds the rows from scratch and
clamps the selection.
"""

import logging
from typing import Callable, List, Optional, Sequence

from bandwidth_tui.models.data_models import DisplayRow, PathStat, SortField, Totals, ViewMode
from bandwidth_tui.services.aggregator import Aggregator
from bandwidth_tui.services.sorter import default_descending
from bandwidth_tui.services.views import build_display_rows

logger = logging.getLogger(__name__)

VIEW_ORDER = (ViewMode.PATH, ViewMode.TYPE)


class Session:
    """
    Navigation state machine.
    Responsibilities:
    - Track sort field/direction and view mode
    - Keep the selection inside the current row list
    - Hand the selected row's URL to an opener
    """

    def __init__(self, stats: Sequence[PathStat], opener: Optional[Callable[[str], bool]] = None):
        self.stats: List[PathStat] = list(stats)
        self.totals: Totals = Aggregator.compute_totals(self.stats)
        self.opener = opener
        self.sort_field = SortField.BANDWIDTH
        self.descending = True
        self.view_mode = ViewMode.PATH
        self.rows: List[DisplayRow] = []
        self.selected: Optional[int] = None

        self.rebuild()
        if self.rows:
            self.selected = 0

    def rebuild(self) -> None:
        self.rows = build_display_rows(self.stats, self.view_mode, self.sort_field, self.descending)

    def clamp_selection(self) -> None:
        n = len(self.rows)
        if n == 0:
            self.selected = None
        elif self.selected is None or self.selected >= n:
            self.selected = n - 1

    # ── sorting ──────────────────────────────────────────────────────────────

    def set_sort(self, field: SortField) -> None:
        if field is self.sort_field:
            self.descending = not self.descending
        else:
            self.sort_field = field
            self.descending = default_descending(field)
        self.rebuild()
        self.clamp_selection()

    # ── views ────────────────────────────────────────────────────────────────

    def toggle_view(self) -> None:
        self.view_mode = ViewMode.TYPE if self.view_mode is ViewMode.PATH else ViewMode.PATH
        self.rebuild()
        self.clamp_selection()

    def next_view(self) -> None:
        if self.view_mode is ViewMode.PATH:
            self.toggle_view()

    def previous_view(self) -> None:
        if self.view_mode is ViewMode.TYPE:
            self.toggle_view()

    # ── selection ────────────────────────────────────────────────────────────

    def move_down(self) -> None:
        if not self.rows:
            return
        if self.selected is not None and self.selected + 1 < len(self.rows):
            self.selected += 1
        else:
            self.selected = len(self.rows) - 1

    def move_up(self) -> None:
        if not self.rows:
            return
        if self.selected is not None and self.selected > 0:
            self.selected -= 1
        else:
            self.selected = 0

    def selected_row(self) -> Optional[DisplayRow]:
        if self.selected is None or self.selected >= len(self.rows):
            return None
        return self.rows[self.selected]

    def activate(self) -> Optional[str]:
        """Open the selected row's URL; returns the URL handed to the opener"""
        row = self.selected_row()
        if row is None or not row.open_url or self.opener is None:
            return None
        logger.debug("Opening %s", row.open_url)
        self.opener(row.open_url)
        return row.open_url
