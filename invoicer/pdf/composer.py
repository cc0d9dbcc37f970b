from __future__ import annotations

import math
from typing import Any, List, Optional
import logging

from invoicer.core.currency import fmt_currency
from invoicer.pdf.layout import (
    INSETS,
    Insets,
    Rect,
    fmt_date,
    fmt_long_date,
    place_block,
    safe_bottom,
    subtotal,
)
from invoicer.pdf.payment_info import extract_payment_info
from invoicer.pdf.surface import Surface, TextStyle, wrap_lines
from invoicer.pdf.table_layout import TableLayoutResult, draw_table_paged
from invoicer.styles.templates import FontSpec, HeaderDecoration, TemplateStyle, color_for
from invoicer.styles.themes import Theme

logger = logging.getLogger(__name__)

# ===== Block spacing (tweak here) =====
LOGO_GAP = 12
META_GAP = 16
TABLE_TOP_GAP = 12
TOTALS_TOP_GAP = 12
TOTALS_ROW_H = 18
TOTALS_RULE_GAP = 10
BOX_PAD = 8
BOX_GAP = 12
FOOTER_H = 12
RUNNING_HEADER_H = 34


def _company_lines(company: Any) -> List[str]:
    values = [
        getattr(company, "name", ""),
        getattr(company, "address_one_line", ""),
        getattr(company, "email", ""),
        getattr(company, "phone", ""),
        getattr(company, "website", ""),
    ]
    return [str(v).strip() for v in values if v and str(v).strip()]


def _customer_lines(customer: Any) -> List[str]:
    values = [
        getattr(customer, "name", ""),
        getattr(customer, "address_one_line", ""),
        getattr(customer, "email", ""),
    ]
    return [str(v).strip() for v in values if v and str(v).strip()][:3]


class Composer:
    """Lays out one invoice page for a TemplateStyle/Theme pair.

    Every design goes through the same block order: background, header band,
    BILL TO, item table, then totals, payment instructions, notes and footer.
    Only the style descriptor differs between designs.
    """

    def __init__(self, style: TemplateStyle, theme: Theme, insets: Insets = INSETS):
        self.style = style
        self.theme = theme
        self.insets = insets

    # ----- helpers -----
    def _ts(self, spec: FontSpec) -> TextStyle:
        return TextStyle(spec.font, spec.size, color_for(spec.color, self.theme), spec.char_space)

    def _color(self, role: Optional[str]):
        return color_for(role, self.theme)

    def _date(self, value: Any) -> str:
        return fmt_long_date(value) if self.style.long_dates else fmt_date(value)

    def _bounds(self, page: Rect):
        return self.insets.left, page.width - self.insets.right, safe_bottom(page, self.insets)

    # ----- public contract -----
    def draw(self, surface: Surface, page: Rect, invoice: Any, company: Any, customer: Any,
             currency_code: Optional[str] = None, logo: Any = None) -> None:
        """Draw the first page of the invoice; rows that do not fit are left undrawn."""
        self.draw_page(surface, page, invoice, company, customer, currency_code, logo)

    def draw_page(self, surface: Surface, page: Rect, invoice: Any, company: Any, customer: Any,
                  currency_code: Optional[str] = None, logo: Any = None, start: int = 0) -> TableLayoutResult:
        code = currency_code or getattr(invoice, "currency", None) or "USD"
        surface.fill_rect(page, self.theme.background)
        header_bottom = self._draw_header(surface, page, invoice, company, logo)
        bill_bottom = self._draw_bill_to(surface, page, customer, header_bottom + self.style.bill_gap)
        result = self._draw_table(surface, page, invoice, code, bill_bottom + TABLE_TOP_GAP, start)
        if result.has_more:
            return result
        self._draw_closing(surface, page, invoice, code, result.last_y)
        return result

    def draw_continuation(self, surface: Surface, page: Rect, invoice: Any, company: Any, customer: Any,
                          currency_code: Optional[str] = None, start: int = 0) -> TableLayoutResult:
        """Continuation page: running header, table rows from `start`, closing blocks on the last page."""
        code = currency_code or getattr(invoice, "currency", None) or "USD"
        surface.fill_rect(page, self.theme.background)
        left, right, _ = self._bounds(page)
        top = self.insets.top
        s = self.style

        name_spec = s.company_fonts[0]
        name_style = self._ts(FontSpec(name_spec.font, min(name_spec.size, 14), "primary", name_spec.char_space))
        surface.draw_text(str(getattr(company, "name", "") or ""), Rect(left, top, (right - left) * 0.6, name_style.leading), name_style)
        meta_style = self._ts(FontSpec(s.meta_font.font, s.meta_font.size, "subtle"))
        surface.draw_text(f"Invoice #{getattr(invoice, 'number', '')} (continued)",
                          Rect(right - s.meta_width, top + 2, s.meta_width, meta_style.leading), meta_style, align="right")
        surface.stroke_line(left, top + RUNNING_HEADER_H - 8, right, top + RUNNING_HEADER_H - 8, self.theme.line, 0.8)

        result = self._draw_table(surface, page, invoice, code, top + RUNNING_HEADER_H, start)
        if not result.has_more:
            self._draw_closing(surface, page, invoice, code, result.last_y)
        return result

    def continuation_fits(self, page: Rect) -> bool:
        """Whether an empty continuation page has room for at least one row."""
        _, _, bottom = self._bounds(page)
        top = self.insets.top + RUNNING_HEADER_H
        return top + self.style.header_h + self.style.row_h <= bottom

    # ----- header band -----
    def _draw_decoration(self, surface: Surface, page: Rect, band_bottom: float) -> None:
        s = self.style
        left, right, _ = self._bounds(page)
        color = self._color(s.decoration_color)
        deco = s.header_decoration
        if deco is HeaderDecoration.BAR:
            surface.fill_rect(Rect(0, 0, page.width, band_bottom), self.theme.primary)
        elif deco is HeaderDecoration.RULE:
            surface.stroke_line(left, band_bottom - 4, right, band_bottom - 4, color, 1.2)
        elif deco is HeaderDecoration.DOTS:
            for i in range(8):
                surface.fill_rect(Rect(left + i * 12, band_bottom - 10, 6, 6), color)
        elif deco is HeaderDecoration.STRIPES:
            surface.fill_rect(Rect(0, 0, page.width, 8), color)
            surface.fill_rect(Rect(0, 12, page.width, 3), color)
            surface.stroke_line(left, band_bottom - 4, right, band_bottom - 4, color, 0.8)
        elif deco is HeaderDecoration.GRID:
            step = 24
            x = left
            while x <= right:
                surface.stroke_line(x, self.insets.top - 12, x, band_bottom - 4, color, 0.3)
                x += step
            y = self.insets.top - 12
            while y <= band_bottom - 4:
                surface.stroke_line(left, y, right, y, color, 0.3)
                y += step
        elif deco is HeaderDecoration.WAVE:
            base = band_bottom - 8
            x0, y0 = left, base
            x = left
            while x < right:
                x = min(x + 6, right)
                y = base + 4 * math.sin((x - left) / 60 * 2 * math.pi)
                surface.stroke_line(x0, y0, x, y, color, 1.2)
                x0, y0 = x, y

    def _draw_header(self, surface: Surface, page: Rect, invoice: Any, company: Any, logo: Any) -> float:
        """Decoration, logo, company lines and metadata box; returns the band's bottom y."""
        s = self.style
        left, right, _ = self._bounds(page)
        top = self.insets.top
        band_bottom = top + s.header_height
        self._draw_decoration(surface, page, band_bottom)

        text_x = left
        if logo is not None:
            logo_rect = Rect(left, top, s.logo_size, s.logo_size)
            if surface.draw_image(logo, logo_rect, corner=s.logo_corner, stroke=self._color(s.logo_stroke)):
                text_x = logo_rect.max_x + LOGO_GAP

        meta_x = right - s.meta_width
        text_w = max(0.0, meta_x - META_GAP - text_x)
        stop = band_bottom - 6
        y = top
        for idx, line in enumerate(_company_lines(company)):
            ts = self._ts(s.company_fonts[min(idx, len(s.company_fonts) - 1)])
            if y + ts.leading > stop:
                break
            surface.draw_text(line, Rect(text_x, y, text_w, ts.leading), ts)
            y += ts.leading + s.company_line_gap

        self._draw_meta(surface, invoice, meta_x, top, stop)
        return band_bottom

    def _draw_meta(self, surface: Surface, invoice: Any, x: float, top: float, stop: float) -> None:
        s = self.style
        title = self._ts(s.title_font)
        surface.draw_text(s.title_text, Rect(x, top, s.meta_width, title.leading), title, align="right")

        rows = [f"Invoice # {getattr(invoice, 'number', '')}", f"Issued: {self._date(getattr(invoice, 'issue_date', None))}"]
        due = getattr(invoice, "due_date", None)
        if due is not None:
            rows.append(f"Due: {self._date(due)}")

        meta = self._ts(s.meta_font)
        y = top + title.leading + 4
        box = Rect(x - 8, y - 4, s.meta_width + 8, len(rows) * meta.leading + 8)
        fill, stroke = self._color(s.meta_fill), self._color(s.meta_stroke)
        if fill is not None:
            surface.fill_rect(box, fill)
        if stroke is not None:
            surface.stroke_rect(box, stroke, 0.8)
        for row in rows:
            if y + meta.leading > stop:
                break
            surface.draw_text(row, Rect(x, y, s.meta_width, meta.leading), meta, align="right")
            y += meta.leading

    # ----- BILL TO -----
    def _draw_bill_to(self, surface: Surface, page: Rect, customer: Any, top: float) -> float:
        s = self.style
        left, right, _ = self._bounds(page)
        title = self._ts(s.bill_title_font)
        surface.draw_text(s.bill_title, Rect(left, top, 200, title.leading), title)
        y = top + title.leading + 4
        body = self._ts(s.bill_font)
        for line in _customer_lines(customer):
            surface.draw_text(line, Rect(left, y, (right - left) * 0.6, body.leading), body)
            y += body.leading + 2
        return y

    # ----- item table -----
    def _draw_table(self, surface: Surface, page: Rect, invoice: Any, code: str, top: float, start: int) -> TableLayoutResult:
        s = self.style
        left, right, bottom = self._bounds(page)
        head_style = self._ts(s.table_header_font)
        row_style = self._ts(s.row_font)
        head_fill, head_rule = self._color(s.table_header_fill), self._color(s.table_header_rule)
        zebra, row_rule = self._color(s.zebra), self._color(s.row_rule)
        pad = s.cell_pad

        def align(i: int) -> str:
            return s.col_align[i] if i < len(s.col_align) else "left"

        def header_bg(rect: Rect) -> None:
            if head_fill is not None:
                surface.fill_rect(rect, head_fill)
            if head_rule is not None:
                surface.stroke_line(rect.x, rect.max_y, rect.max_x, rect.max_y, head_rule, 0.8)

        def header_cell(i: int, text: str, x: float, w: float, y: float, h: float) -> None:
            surface.draw_text(text, Rect(x + pad, y + (h - head_style.leading) / 2, w - 2 * pad, head_style.leading),
                              head_style, align=align(i))

        def row_bg(index: int, rect: Rect) -> None:
            if zebra is not None and index % 2 == 0:
                surface.fill_rect(rect, zebra)
            if row_rule is not None:
                surface.stroke_line(rect.x, rect.max_y, rect.max_x, rect.max_y, row_rule, 0.5)

        def row_cell(i: int, text: str, x: float, w: float, y: float, h: float) -> None:
            surface.draw_text(text, Rect(x + pad, y + (h - row_style.leading) / 2, w - 2 * pad, row_style.leading),
                              row_style, align=align(i))

        def continuation(rect: Rect) -> None:
            surface.draw_text(s.continuation_text, rect, self._ts(s.continuation_font), align="right")

        return draw_table_paged(
            left=left, right=right, top=top, safe_bottom=bottom,
            headers=s.headers, col_specs=s.col_specs,
            items=list(getattr(invoice, "items", None) or []),
            currency_code=code,
            header_bg=header_bg, header_cell=header_cell, row_bg=row_bg, row_cell=row_cell,
            row_h=s.row_h, header_h=s.header_h, start=start, continuation=continuation,
        )

    # ----- closing blocks (final page only) -----
    def _draw_closing(self, surface: Surface, page: Rect, invoice: Any, code: str, last_y: float) -> None:
        left, right, bottom = self._bounds(page)
        footer_top = bottom - FOOTER_H
        cursor = self._draw_totals(surface, page, invoice, code, last_y + TOTALS_TOP_GAP)

        payment = extract_payment_info(invoice)
        if payment:
            cursor = self._draw_box(surface, "PAYMENT INSTRUCTIONS", payment, left, right, cursor, footer_top - 4)
        notes = (getattr(invoice, "payment_notes", None) or "").strip()
        if notes:
            cursor = self._draw_box(surface, "NOTES", notes, left, right, cursor, footer_top - 4)

        surface.draw_text(self.style.footer_text, Rect(left, footer_top, right - left, FOOTER_H), self._ts(self.style.footer_font))

    def _draw_totals(self, surface: Surface, page: Rect, invoice: Any, code: str, below: float) -> float:
        """Subtotal row and TOTAL bar; returns the y under the block."""
        s = self.style
        _, right, bottom = self._bounds(page)
        block_h = TOTALS_ROW_H + TOTALS_RULE_GAP + s.total_bar_height
        y = place_block(below, block_h, bottom)
        x = right - s.totals_width
        half = s.totals_width / 2
        amount = fmt_currency(subtotal(getattr(invoice, "items", None) or []), code)

        label, value = self._ts(s.totals_label_font), self._ts(s.totals_value_font)
        surface.draw_text("Subtotal", Rect(x + 10, y, half - 10, TOTALS_ROW_H), label)
        surface.draw_text(amount, Rect(x + half, y, half - 10, TOTALS_ROW_H), value, align="right")
        y += TOTALS_ROW_H
        surface.stroke_line(x, y + TOTALS_RULE_GAP / 2 - 1, right, y + TOTALS_RULE_GAP / 2 - 1, self.theme.line, 1)
        y += TOTALS_RULE_GAP

        bar = Rect(x, y, s.totals_width, s.total_bar_height)
        fill = self._color(s.total_bar_fill)
        if fill is not None:
            surface.fill_rect(bar, fill)
        big = self._ts(s.total_bar_font)
        text_y = bar.y + (bar.height - big.leading) / 2
        surface.draw_text("TOTAL", Rect(bar.x + 10, text_y, half - 10, big.leading), big)
        # No tax/discount model: TOTAL is the subtotal
        surface.draw_text(amount, Rect(bar.x + half, text_y, half - 10, big.leading), big, align="right")
        return bar.max_y + BOX_GAP + 4

    def _draw_box(self, surface: Surface, title: str, body: str, left: float, right: float,
                  top: float, limit: float) -> float:
        """Titled text box clipped to the space above `limit`; skipped when no body line fits."""
        s = self.style
        title_style, body_style = self._ts(s.box_title_font), self._ts(s.box_font)
        width = right - left
        lines = wrap_lines(body, width - 2 * BOX_PAD, body_style)
        chrome = 2 * BOX_PAD + title_style.leading + 4
        height = min(chrome + len(lines) * body_style.leading, limit - top)
        if height < chrome + body_style.leading:
            logger.debug("No room for %s box (%.1f pt available)", title, limit - top)
            return top

        rect = Rect(left, top, width, height)
        fill, stroke = self._color(s.box_fill), self._color(s.box_stroke)
        if fill is not None:
            surface.fill_rect(rect, fill)
        if stroke is not None:
            surface.stroke_rect(rect, stroke, 0.8)
        surface.draw_text(title, Rect(left + BOX_PAD, top + BOX_PAD, width - 2 * BOX_PAD, title_style.leading), title_style)
        body_top = top + BOX_PAD + title_style.leading + 4
        surface.draw_text(body, Rect(left + BOX_PAD, body_top, width - 2 * BOX_PAD, rect.max_y - BOX_PAD - body_top), body_style)
        return rect.max_y + BOX_GAP
