"""Shared page geometry and layout helpers used by every template.

All coordinates are top-down page points: y grows towards the bottom edge,
as on the drawing surface (see invoicer.pdf.surface).
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, NamedTuple, Sequence

from reportlab.lib.pagesizes import A4

from invoicer.core.currency import to_decimal


# ===== Page geometry (shared by all composers) =====
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

INSET_TOP = 36
INSET_LEFT = 32
INSET_RIGHT = 32
INSET_BOTTOM = 40

DATE_FORMAT = "%Y-%m-%d"


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


class Insets(NamedTuple):
    top: float = INSET_TOP
    left: float = INSET_LEFT
    right: float = INSET_RIGHT
    bottom: float = INSET_BOTTOM


INSETS = Insets()


def page_rect(size: Sequence[float] = PAGE_SIZE) -> Rect:
    return Rect(0.0, 0.0, float(size[0]), float(size[1]))


def safe_bottom(page: Rect, insets: Insets = INSETS) -> float:
    """Lowest y any block may reach on the page."""
    return page.height - insets.bottom


def columns(total_width: float, specs: Sequence[float]) -> List[float]:
    """Split total_width proportionally to specs (weights need not sum to 1)."""
    total = float(sum(specs))
    if total <= 0:
        return [0.0 for _ in specs]
    return [total_width * (float(s) / total) for s in specs]


def column_offsets(left: float, widths: Iterable[float]) -> List[float]:
    """Absolute x start of each column."""
    xs: List[float] = []
    acc = left
    for w in widths:
        xs.append(acc)
        acc += w
    return xs


def subtotal(items: Iterable[Any]) -> Decimal:
    """Sum of the items' precomputed totals (never recomputed from qty * rate)."""
    total = Decimal("0")
    for item in items:
        total += to_decimal(getattr(item, "total", 0))
    return total


def place_block(below: float, desired_height: float, safe_bottom: float) -> float:
    """Top y for a block that wants to start at `below`.

    A block that would cross safe_bottom is clamped upward to end exactly on it;
    it is never moved to a new page, so it may overlap whatever sits above.
    """
    if below + desired_height <= safe_bottom:
        return below
    return safe_bottom - desired_height


def fmt_date(val: Any) -> str:
    if isinstance(val, (date, datetime)):
        return val.strftime(DATE_FORMAT)
    return str(val) if val is not None else ""


def fmt_long_date(val: Any) -> str:
    """'March 5, 2025' style, used by the more formal templates."""
    if isinstance(val, (date, datetime)):
        return f"{val.strftime('%B')} {val.day}, {val.year}"
    return str(val) if val is not None else ""
