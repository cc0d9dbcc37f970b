from __future__ import annotations

from dataclasses import replace
from io import BytesIO
from pathlib import Path
import logging
import math
import re

from pypdf import PdfReader

from invoicer.core.settings import Settings
from invoicer.pdf.pdf_draw import build_invoice_from_settings, build_invoice_pdf, render_invoice_pdf
from invoicer.styles.templates import TEMPLATE_STYLES


def _a4_size_points() -> tuple[float, float]:
    # ReportLab A4 in points
    return (595.2755905511812, 841.8897637795277)


def _assert_a4(page) -> None:
    box = page.mediabox
    width = float(box.right - box.left)
    height = float(box.top - box.bottom)
    a4w, a4h = _a4_size_points()
    # Allow a small tolerance for float conversions
    assert math.isclose(width, a4w, rel_tol=0, abs_tol=1.0)
    assert math.isclose(height, a4h, rel_tol=0, abs_tol=1.0)


def test_invoice_pdf_single_page(tmp_path: Path, invoice, company, customer) -> None:
    out_pdf = tmp_path / "out" / "invoice.pdf"
    pages = build_invoice_pdf(out_pdf, invoice, company, customer, design="modern_clean", theme="Ocean Blue")

    reader = PdfReader(str(out_pdf))
    assert pages == 1
    assert len(reader.pages) == 1
    _assert_a4(reader.pages[0])
    assert reader.metadata.title == "Invoice INV-0042"
    assert reader.metadata.author == "Northwind Studio"

    text = reader.pages[0].extract_text() or ""
    assert "INV-0042" in text
    # Allow potential newline between label and value in extracted text
    assert re.search(r"TOTAL\s*\$409\.99", text) is not None
    assert "Design" in text and "Hosting" in text and "Support" in text


def test_invoice_pdf_paginates(tmp_path: Path, invoice, company, customer, make_items) -> None:
    invoice.items = make_items(80)
    out_pdf = tmp_path / "long.pdf"
    pages = build_invoice_pdf(out_pdf, invoice, company, customer)

    reader = PdfReader(str(out_pdf))
    assert pages == len(reader.pages) > 1
    first = reader.pages[0].extract_text() or ""
    last = reader.pages[-1].extract_text() or ""
    assert "Continued on next page" in first
    assert "TOTAL" not in first
    assert "(continued)" in last
    assert "Service line 80" in last
    assert re.search(r"TOTAL\s*\$800\.00", last) is not None
    for page in reader.pages:
        _assert_a4(page)


def test_single_page_mode_drops_overflow(tmp_path: Path, invoice, company, customer, make_items, caplog) -> None:
    invoice.items = make_items(80)
    with caplog.at_level(logging.WARNING, logger="invoicer.pdf.pdf_draw"):
        pages = build_invoice_pdf(tmp_path / "short.pdf", invoice, company, customer, multi_page=False)
    assert pages == 1
    assert len(PdfReader(str(tmp_path / "short.pdf")).pages) == 1
    assert "single-page mode" in caplog.text


def test_render_to_bytes_with_unreadable_logo(invoice, company, customer) -> None:
    data = render_invoice_pdf(invoice, company, customer, design="executive_luxury", logo=b"not an image")
    assert data.startswith(b"%PDF")
    reader = PdfReader(BytesIO(data))
    assert len(reader.pages) == 1


def test_unfittable_row_stops_without_blank_page(tmp_path: Path, invoice, company, customer, monkeypatch, caplog) -> None:
    style = replace(TEMPLATE_STYLES["modern_clean"], key="oversized_rows", row_h=900)
    monkeypatch.setitem(TEMPLATE_STYLES, "oversized_rows", style)
    out_pdf = tmp_path / "oversized.pdf"
    with caplog.at_level(logging.WARNING, logger="invoicer.pdf.pdf_draw"):
        pages = build_invoice_pdf(out_pdf, invoice, company, customer, design="oversized_rows")
    assert pages == 1
    assert len(PdfReader(str(out_pdf)).pages) == 1
    assert "does not fit on an empty page" in caplog.text


def test_build_from_settings_uses_configured_design_and_name(tmp_path: Path, invoice, company, customer) -> None:
    settings = Settings(template_design="tech_modern", theme_name="Olive", output_dir=str(tmp_path / "pdfs"),
                        file_name_template="{number}-{customer}")
    out = build_invoice_from_settings(invoice, company, customer, settings)

    assert out == tmp_path / "pdfs" / "INV-0042-Acme Corporation.pdf"
    reader = PdfReader(str(out))
    assert len(reader.pages) == 1
    assert "// thank you" in (reader.pages[0].extract_text() or "")
