from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import math

from invoicer.pdf.layout import (
    INSETS,
    column_offsets,
    columns,
    fmt_date,
    fmt_long_date,
    page_rect,
    place_block,
    safe_bottom,
    subtotal,
)


def test_columns_split_proportionally() -> None:
    widths = columns(500, [0.58, 0.12, 0.14, 0.16])
    assert math.isclose(sum(widths), 500)
    assert math.isclose(widths[0], 290)
    assert math.isclose(widths[1] / widths[2], 0.12 / 0.14)


def test_columns_weights_need_not_sum_to_one() -> None:
    assert columns(300, [1, 2]) == [100.0, 200.0]


def test_columns_zero_weights() -> None:
    assert columns(300, [0, 0]) == [0.0, 0.0]


def test_column_offsets() -> None:
    assert column_offsets(32, [100, 50, 25]) == [32, 132, 182]


def test_safe_bottom_on_a4() -> None:
    page = page_rect()
    assert math.isclose(safe_bottom(page), page.height - INSETS.bottom)


def test_place_block_keeps_position_when_it_fits() -> None:
    assert place_block(500, 100, 802) == 500
    assert place_block(702, 100, 802) == 702


def test_place_block_clamps_to_safe_bottom() -> None:
    assert place_block(750, 100, 802) == 702


def test_subtotal_sums_item_totals() -> None:
    items = [SimpleNamespace(total=Decimal("10.00")), SimpleNamespace(total=Decimal("25.50")),
             SimpleNamespace(total=Decimal("0"))]
    assert subtotal(items) == Decimal("35.50")
    assert subtotal([]) == Decimal("0")


def test_subtotal_does_not_recompute_from_quantity() -> None:
    # Stored total wins even when it disagrees with quantity * rate
    items = [SimpleNamespace(quantity=3, rate=Decimal("10"), total=Decimal("5.00"))]
    assert subtotal(items) == Decimal("5.00")


def test_date_formats() -> None:
    d = date(2025, 3, 5)
    assert fmt_date(d) == "2025-03-05"
    assert fmt_long_date(d) == "March 5, 2025"
    assert fmt_date(None) == ""
    assert fmt_long_date("05/03/2025") == "05/03/2025"
