"""Paginated item table shared by every invoice template.

The engine owns row placement only; what a header band, a cell or a row
background looks like is supplied by the caller as painter callbacks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence
import logging

from invoicer.core.currency import fmt_currency, fmt_qty
from invoicer.pdf.layout import Rect, column_offsets, columns

logger = logging.getLogger(__name__)

# Default band heights (points)
ROW_HEIGHT = 28
HEADER_ROW_HEIGHT = 34
CONTINUATION_NOTE_HEIGHT = 12

HeaderBgPainter = Callable[[Rect], None]
# (column index, text, x, width, header top, header height)
HeaderCellPainter = Callable[[int, str, float, float, float, float], None]
# (global row index, row rect)
RowBgPainter = Callable[[int, Rect], None]
# (column index, text, x, width, row top, row height)
RowCellPainter = Callable[[int, str, float, float, float, float], None]
ContinuationPainter = Callable[[Rect], None]


@dataclass(frozen=True)
class TableLayoutResult:
    """Outcome of one page's table pass.

    last_y: y where the table stopped on this page.
    has_more: rows remain; the caller must not draw totals/notes/footer here.
    drawn: rows emitted on this page.
    next_index: global index of the first row not yet emitted.
    """

    last_y: float
    has_more: bool
    drawn: int = 0
    next_index: int = 0


def item_cells(item: Any, currency_code: str) -> List[str]:
    """Column texts for one line item: description, quantity, rate, total."""
    return [
        str(getattr(item, "description", "") or ""),
        fmt_qty(getattr(item, "quantity", 0)),
        fmt_currency(getattr(item, "rate", 0), currency_code),
        fmt_currency(getattr(item, "total", 0), currency_code),
    ]


def draw_table_paged(
    *,
    left: float,
    right: float,
    top: float,
    safe_bottom: float,
    headers: Sequence[str],
    col_specs: Sequence[float],
    items: Sequence[Any],
    currency_code: str,
    header_bg: HeaderBgPainter,
    header_cell: HeaderCellPainter,
    row_bg: RowBgPainter,
    row_cell: RowCellPainter,
    row_h: float = ROW_HEIGHT,
    header_h: float = HEADER_ROW_HEIGHT,
    start: int = 0,
    continuation: Optional[ContinuationPainter] = None,
) -> TableLayoutResult:
    """
    Draw the header band and as many whole rows of items[start:] as fit above safe_bottom.

    A row is emitted only if its full height fits; the first one that does not
    fit ends the pass with has_more=True. Row indices handed to row_bg are
    positions in the full `items` sequence, so alternating backgrounds keep the
    same parity on every page. Call again with start=result.next_index on a
    fresh page to continue.
    """
    width = right - left
    widths = columns(width, col_specs)
    xs = column_offsets(left, widths)

    def col_width(i: int) -> float:
        # Last column runs to `right` exactly, no float drift at the edge
        return (xs[i + 1] if i < len(xs) - 1 else right) - xs[i]

    header_bg(Rect(left, top, width, header_h))
    for i, h in enumerate(headers[: len(xs)]):
        header_cell(i, h, xs[i], col_width(i), top, header_h)

    y = top + header_h
    index = max(0, start)
    total_rows = len(items)
    while index < total_rows:
        if y + row_h > safe_bottom:
            break
        row_bg(index, Rect(left, y, width, row_h))
        texts = item_cells(items[index], currency_code)
        for c in range(len(xs)):
            row_cell(c, texts[c] if c < len(texts) else "", xs[c], col_width(c), y, row_h)
        y += row_h
        index += 1

    has_more = index < total_rows
    drawn = index - max(0, start)
    if has_more and continuation is not None:
        # Indicator sits in the bottom margin so it never overlaps a row
        continuation(Rect(left, safe_bottom + 2, width, CONTINUATION_NOTE_HEIGHT))

    logger.debug("Table pass: rows %d..%d of %d, last_y=%.1f, has_more=%s",
                 start, index, total_rows, y, has_more)
    return TableLayoutResult(last_y=y, has_more=has_more, drawn=drawn, next_index=index)
