from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union
import logging

from reportlab.pdfgen.canvas import Canvas

from invoicer.core.settings import Settings, load_settings
from invoicer.pdf.composer import Composer
from invoicer.pdf.layout import PAGE_SIZE, fmt_date
from invoicer.pdf.surface import Surface
from invoicer.styles.templates import get_style
from invoicer.styles.themes import Theme, get_theme

logger = logging.getLogger(__name__)

DEFAULT_DESIGN = "modern_clean"


def composer_for(design: str = DEFAULT_DESIGN, theme: Union[Theme, str, None] = None) -> Composer:
    """Composer for a template design key and a Theme (or palette name)."""
    if not isinstance(theme, Theme):
        theme = get_theme(theme)
    return Composer(get_style(design), theme)


def _render(target: Union[str, BinaryIO], invoice: Any, company: Any, customer: Any, *,
            design: str, theme: Union[Theme, str, None], currency_code: Optional[str],
            logo: Any, multi_page: bool) -> int:
    composer = composer_for(design, theme)
    code = currency_code or getattr(invoice, "currency", None) or "USD"
    number = str(getattr(invoice, "number", "") or "")

    c = Canvas(target, pagesize=PAGE_SIZE)
    c.setTitle(f"Invoice {number}")
    c.setAuthor(str(getattr(company, "name", "") or "Invoicer"))
    surface = Surface(c, PAGE_SIZE)
    page = surface.page

    result = composer.draw_page(surface, page, invoice, company, customer, code, logo)
    pages = 1
    surface.show_page()
    if not multi_page:
        if result.has_more:
            total = len(list(getattr(invoice, "items", None) or []))
            logger.warning("Invoice %s: single-page mode left %d of %d rows undrawn",
                           number, total - result.next_index, total)
    else:
        while result.has_more:
            if not composer.continuation_fits(page):
                logger.warning("Invoice %s: row %d does not fit on an empty page; stopping after %d page(s)",
                               number, result.next_index, pages)
                break
            result = composer.draw_continuation(surface, page, invoice, company, customer, code,
                                                start=result.next_index)
            pages += 1
            surface.show_page()
    c.save()
    return pages


# ===== Public API =====
def build_invoice_pdf(
    out_path: Path | str,
    invoice: Any,
    company: Any,
    customer: Any,
    *,
    design: str = DEFAULT_DESIGN,
    theme: Union[Theme, str, None] = None,
    currency_code: Optional[str] = None,
    logo: Any = None,
    multi_page: bool = True,
) -> int:
    """Draw an invoice PDF (A4) and return the number of pages written.

    `invoice` needs number, issue_date and items (description, quantity, rate,
    total); due_date, currency, payment_notes and payment_methods are optional.
    With multi_page=False only the first page is drawn and overflowing rows
    are dropped.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    pages = _render(str(out), invoice, company, customer, design=design, theme=theme,
                    currency_code=currency_code, logo=logo, multi_page=multi_page)
    logger.info("Wrote invoice %s (%s, %d page(s)) to %s",
                getattr(invoice, "number", ""), design, pages, out)
    return pages


def render_invoice_pdf(
    invoice: Any,
    company: Any,
    customer: Any,
    *,
    design: str = DEFAULT_DESIGN,
    theme: Union[Theme, str, None] = None,
    currency_code: Optional[str] = None,
    logo: Any = None,
    multi_page: bool = True,
) -> bytes:
    """Same as build_invoice_pdf but returns the PDF bytes."""
    buf = BytesIO()
    _render(buf, invoice, company, customer, design=design, theme=theme,
            currency_code=currency_code, logo=logo, multi_page=multi_page)
    return buf.getvalue()


def build_invoice_from_settings(invoice: Any, company: Any, customer: Any,
                                settings: Optional[Settings] = None) -> Path:
    """Render with the configured design, palette, logo and page mode into settings.output_path."""
    settings = settings or load_settings()
    out = settings.output_path(
        str(getattr(invoice, "number", "") or ""),
        date_str=fmt_date(getattr(invoice, "issue_date", None)),
        customer=str(getattr(customer, "name", "") or ""),
    )
    build_invoice_pdf(
        out, invoice, company, customer,
        design=settings.template_design,
        theme=settings.theme_name,
        currency_code=getattr(invoice, "currency", None) or settings.currency,
        logo=settings.logo_path,
        multi_page=settings.multi_page,
    )
    return out
