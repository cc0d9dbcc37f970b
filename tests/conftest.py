from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, List, Tuple

import pytest

from invoicer.data.models import Company, Customer, Invoice, Item
from invoicer.pdf.layout import PAGE_SIZE, Rect


class RecordingSurface:
    """Stand-in for Surface that records every paint call instead of drawing."""

    def __init__(self, page_size=PAGE_SIZE):
        self.page_width, self.page_height = float(page_size[0]), float(page_size[1])
        self.calls: List[Tuple[str, Any]] = []

    @property
    def page(self) -> Rect:
        return Rect(0.0, 0.0, self.page_width, self.page_height)

    def fill_rect(self, rect, color):
        self.calls.append(("fill_rect", rect))

    def stroke_rect(self, rect, color, width=1):
        self.calls.append(("stroke_rect", rect))

    def stroke_line(self, x1, y1, x2, y2, color, width=1):
        self.calls.append(("stroke_line", (x1, y1, x2, y2)))

    def draw_text(self, text, rect, style, align="left"):
        self.calls.append(("draw_text", (text, rect)))
        return False

    def draw_image(self, image, rect, corner=10, stroke=None):
        self.calls.append(("draw_image", rect))
        return image is not None

    def show_page(self):
        self.calls.append(("show_page", None))

    def texts(self) -> List[str]:
        return [args[0] for name, args in self.calls if name == "draw_text"]

    def text_rects(self, text: str) -> List[Rect]:
        return [args[1] for name, args in self.calls if name == "draw_text" and args[0] == text]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


def _make_items(count: int, rate: str = "10.00") -> List[Item]:
    return [Item.priced(f"Service line {i + 1}", 1, rate, position=i) for i in range(count)]


@pytest.fixture
def make_items():
    return _make_items


@pytest.fixture
def company() -> Company:
    return Company(name="Northwind Studio", email="billing@northwind.example", line1="12 Harbour Road",
                   city="Portland", country="USA")


@pytest.fixture
def customer() -> Customer:
    return Customer(name="Acme Corporation", email="ap@acme.example", line1="500 Market St", city="San Francisco")


@pytest.fixture
def invoice() -> Invoice:
    return Invoice(
        number="INV-0042",
        issue_date=date(2025, 3, 5),
        due_date=date(2025, 4, 4),
        currency="USD",
        payment_notes="Net 30.",
        items=[
            Item.priced("Design", 2, Decimal("150.00"), position=0),
            Item.priced("Hosting", 1, Decimal("49.99"), position=1),
            Item.priced("Support", 3, Decimal("20.00"), position=2),
        ],
    )
