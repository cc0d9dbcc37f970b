from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from invoicer.data.models import Invoice
from invoicer.data.payment_methods import PayPal, encode
from invoicer.pdf.composer import Composer
from invoicer.pdf.layout import safe_bottom
from invoicer.pdf.pdf_draw import composer_for
from invoicer.styles.templates import TEMPLATE_STYLES
from invoicer.styles.themes import get_theme


def _invoice(items, **extra) -> Invoice:
    return Invoice(number="INV-7", issue_date=date(2025, 1, 2), currency="USD", items=items, **extra)


def _below_bottom(surface, page, allowed_texts=()):
    """Paint calls that reach under safe_bottom, ignoring the page background."""
    sb = safe_bottom(page)
    bad = []
    for name, args in surface.calls:
        if name == "fill_rect" and args == page:
            continue
        if name in ("fill_rect", "stroke_rect", "draw_image") and args.max_y > sb + 1e-6:
            bad.append((name, args))
        elif name == "stroke_line" and max(args[1], args[3]) > sb + 1e-6:
            bad.append((name, args))
        elif name == "draw_text" and args[0] not in allowed_texts and args[1].max_y > sb + 1e-6:
            bad.append((name, args))
    return bad


def test_single_page_draws_closing_blocks(surface, invoice, company, customer) -> None:
    composer = composer_for("modern_clean", "Ocean Blue")
    result = composer.draw_page(surface, surface.page, invoice, company, customer)
    texts = surface.texts()
    assert result.has_more is False
    assert "TOTAL" in texts
    # Subtotal row and TOTAL bar show the same amount
    assert texts.count("$409.99") == 2
    assert "NOTES" in texts and "Net 30." in texts
    assert "PAYMENT INSTRUCTIONS" not in texts
    assert "Thank you for your business!" in texts
    assert "Northwind Studio" in texts and "Acme Corporation" in texts
    assert not _below_bottom(surface, surface.page)


def test_draw_returns_nothing(surface, invoice, company, customer) -> None:
    assert composer_for().draw(surface, surface.page, invoice, company, customer) is None
    assert "TOTAL" in surface.texts()


def test_overflow_suppresses_closing_blocks(surface, company, customer, make_items) -> None:
    composer = composer_for("modern_clean")
    result = composer.draw_page(surface, surface.page, _invoice(make_items(60)), company, customer)
    texts = surface.texts()
    assert result.has_more is True
    assert 0 < result.drawn < 60
    assert "TOTAL" not in texts
    assert "Thank you for your business!" not in texts
    assert composer.style.continuation_text in texts
    assert not _below_bottom(surface, surface.page, allowed_texts=(composer.style.continuation_text,))


def test_continuation_pages_finish_the_table(surface, company, customer, make_items) -> None:
    composer = composer_for("corporate_formal", "Navy Blue")
    invoice = _invoice(make_items(120))
    result = composer.draw_page(surface, surface.page, invoice, company, customer)
    rows = result.drawn
    while result.has_more:
        result = composer.draw_continuation(surface, surface.page, invoice, company, customer,
                                            start=result.next_index)
        assert result.drawn > 0
        rows += result.drawn
    assert rows == 120
    texts = surface.texts()
    assert "Invoice #INV-7 (continued)" in texts
    assert texts.count("TOTAL") == 1
    assert "Service line 120" in texts


def test_payment_methods_render_in_instructions_box(surface, company, customer, make_items) -> None:
    invoice = _invoice(make_items(2), payment_methods=[encode(PayPal(email="pay@northwind.example"))])
    composer_for().draw(surface, surface.page, invoice, company, customer)
    texts = surface.texts()
    assert "PAYMENT INSTRUCTIONS" in texts
    assert "PayPal\npay@northwind.example" in texts


def test_totals_clamped_above_safe_bottom_when_table_fills_page(surface, company, customer, make_items) -> None:
    composer = composer_for("modern_clean")
    full_page = composer.draw_page(surface, surface.page, _invoice(make_items(200)), company, customer)
    surface.calls.clear()

    result = composer.draw_page(surface, surface.page, _invoice(make_items(full_page.drawn), payment_notes="Net 30."), company, customer)
    assert result.has_more is False
    sb = safe_bottom(surface.page)
    total_rect = surface.text_rects("TOTAL")[0]
    assert total_rect.max_y <= sb
    # Boxes have no room left and are skipped
    assert "NOTES" not in surface.texts()


def test_box_skipped_without_room(surface) -> None:
    composer = Composer(TEMPLATE_STYLES["modern_clean"], get_theme(None))
    top = composer._draw_box(surface, "NOTES", "Some text", 32, 563, 700, 720)
    assert top == 700
    assert surface.calls == []


def test_missing_due_date_and_empty_items(surface, company, customer) -> None:
    composer_for("tech_modern").draw(surface, surface.page, _invoice([]), company, customer)
    texts = surface.texts()
    assert not any(t.startswith("Due:") for t in texts)
    assert "Invoice # INV-7" in texts


def test_long_dates(surface, invoice, company, customer) -> None:
    base = composer_for("modern_clean")
    composer = Composer(replace(base.style, long_dates=True), base.theme)
    composer.draw(surface, surface.page, invoice, company, customer)
    assert "Issued: March 5, 2025" in surface.texts()


@pytest.mark.parametrize("design", sorted(TEMPLATE_STYLES))
def test_every_design_stays_inside_safe_area(surface, invoice, company, customer, design) -> None:
    composer = composer_for(design, "Deep Teal")
    result = composer.draw_page(surface, surface.page, invoice, company, customer)
    assert result.has_more is False
    assert "TOTAL" in surface.texts()
    assert not _below_bottom(surface, surface.page)


def test_continuation_fits(surface) -> None:
    base = TEMPLATE_STYLES["modern_clean"]
    assert Composer(base, get_theme(None)).continuation_fits(surface.page)
    assert not Composer(replace(base, row_h=900), get_theme(None)).continuation_fits(surface.page)
