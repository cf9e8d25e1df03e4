"""
Viewport windowing over the sorted row list.

The window is recomputed from the selection on every frame; no scroll
offset is stored anywhere.
"""

from typing import Optional, Tuple

# header row + divider above and below the rows + totals row
TABLE_CHROME_ROWS = 4


def content_capacity(available_height: int, chrome: int = TABLE_CHROME_ROWS) -> int:
    return available_height - chrome


def visible_range(
    row_count: int,
    selected: Optional[int],
    available_height: int,
    chrome: int = TABLE_CHROME_ROWS,
) -> Tuple[int, int]:
    """
    [start, end) slice of rows to paint so that the selection stays visible,
    scrolling no further than needed.
    """
    capacity = content_capacity(available_height, chrome)
    if row_count <= 0 or capacity <= 0:
        return 0, 0

    sel = min(max(selected or 0, 0), row_count - 1)
    start = sel + 1 - capacity if sel >= capacity else 0
    end = min(start + capacity, row_count)
    return start, end
