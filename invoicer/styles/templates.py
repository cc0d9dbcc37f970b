"""Declarative template styles.

Every invoice design is one TemplateStyle value consumed by the generic
composer (invoicer.pdf.composer). Colors are named by role ("primary",
"subtle", ...) and resolved against the active Theme at draw time, so any
design works with any palette.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from reportlab.lib import colors

from invoicer.styles.themes import Theme, with_alpha


class HeaderDecoration(str, Enum):
    NONE = "none"
    RULE = "rule"
    BAR = "bar"
    DOTS = "dots"
    STRIPES = "stripes"
    GRID = "grid"
    WAVE = "wave"


def color_for(role: Optional[str], theme: Theme) -> Optional[colors.Color]:
    if role is None:
        return None
    if role == "primary":
        return theme.primary
    if role == "secondary":
        return theme.secondary
    if role == "accent":
        return theme.accent
    if role == "line":
        return theme.line
    if role == "subtle":
        return theme.subtle_text
    if role == "tint":
        return with_alpha(theme.primary, 0.08)
    if role == "soft":
        return with_alpha(theme.primary, 0.18)
    if role == "shade":
        return colors.Color(0, 0, 0, alpha=0.03)
    if role == "white":
        return colors.white
    if role == "gray":
        return colors.Color(0.5, 0.5, 0.5)
    return colors.black


@dataclass(frozen=True)
class FontSpec:
    font: str = "Helvetica"
    size: float = 10
    color: str = "black"
    char_space: float = 0.0


@dataclass(frozen=True)
class TemplateStyle:
    key: str
    name: str
    category: str = "Business"

    # Header band
    header_decoration: HeaderDecoration = HeaderDecoration.RULE
    header_height: float = 96
    decoration_color: str = "primary"
    logo_size: float = 56
    logo_corner: float = 10
    logo_stroke: Optional[str] = None
    # Font per company line index; the last entry is reused for further lines
    company_fonts: Tuple[FontSpec, ...] = (
        FontSpec("Helvetica-Bold", 20, "primary"),
        FontSpec("Helvetica", 10, "subtle"),
    )
    company_line_gap: float = 3

    # Invoice metadata box (right aligned)
    title_text: str = "INVOICE"
    title_font: FontSpec = FontSpec("Helvetica-Bold", 22, "primary", 1.0)
    meta_font: FontSpec = FontSpec("Helvetica", 10, "black")
    meta_width: float = 180
    meta_fill: Optional[str] = None
    meta_stroke: Optional[str] = None
    long_dates: bool = False

    # BILL TO
    bill_title: str = "BILL TO"
    bill_title_font: FontSpec = FontSpec("Helvetica-Bold", 10, "primary", 0.4)
    bill_font: FontSpec = FontSpec("Helvetica", 11, "black")
    bill_gap: float = 16

    # Item table
    headers: Tuple[str, ...] = ("DESCRIPTION", "QTY", "RATE", "AMOUNT")
    col_specs: Tuple[float, ...] = (0.58, 0.12, 0.14, 0.16)
    col_align: Tuple[str, ...] = ("left", "right", "right", "right")
    header_h: float = 30
    row_h: float = 26
    table_header_fill: Optional[str] = "primary"
    table_header_font: FontSpec = FontSpec("Helvetica-Bold", 10, "white", 0.3)
    table_header_rule: Optional[str] = None
    row_font: FontSpec = FontSpec("Helvetica", 10, "black")
    zebra: Optional[str] = "shade"
    row_rule: Optional[str] = "line"
    cell_pad: float = 8

    # Totals
    totals_width: float = 220
    totals_label_font: FontSpec = FontSpec("Helvetica", 10, "subtle")
    totals_value_font: FontSpec = FontSpec("Helvetica-Bold", 10, "black")
    total_bar_fill: Optional[str] = "primary"
    total_bar_font: FontSpec = FontSpec("Helvetica-Bold", 14, "white")
    total_bar_height: float = 34

    # Payment / notes boxes
    box_fill: Optional[str] = "tint"
    box_stroke: Optional[str] = None
    box_title_font: FontSpec = FontSpec("Helvetica-Bold", 10, "primary", 0.4)
    box_font: FontSpec = FontSpec("Helvetica", 9.5, "black")

    footer_text: str = "Thank you for your business!"
    footer_font: FontSpec = FontSpec("Helvetica", 9, "gray")
    continuation_text: str = "Continued on next page…"
    continuation_font: FontSpec = FontSpec("Helvetica-Oblique", 9, "subtle")


MODERN_CLEAN = TemplateStyle(key="modern_clean", name="Modern Clean")

_STYLES: Tuple[TemplateStyle, ...] = (
    MODERN_CLEAN,
    replace(
        MODERN_CLEAN, key="professional_minimal", name="Professional Minimal",
        header_decoration=HeaderDecoration.DOTS, decoration_color="accent",
        company_fonts=(FontSpec("Helvetica", 24, "black", 0.6), FontSpec("Helvetica", 10, "gray")),
        title_font=FontSpec("Helvetica", 12, "gray", 2.0),
        bill_title_font=FontSpec("Helvetica", 10, "gray", 0.4), bill_font=FontSpec("Helvetica", 12, "black"),
        headers=("ITEM", "QTY", "RATE", "TOTAL"), col_specs=(0.6, 0.12, 0.14, 0.14),
        header_h=22, row_h=24, table_header_fill=None, table_header_rule="accent",
        table_header_font=FontSpec("Helvetica", 10, "gray", 0.4), zebra=None, row_rule=None,
        totals_width=180, total_bar_fill=None, total_bar_font=FontSpec("Helvetica-Bold", 14, "accent"),
        total_bar_height=22, box_fill=None, footer_text="Thank you",
        footer_font=FontSpec("Helvetica", 8, "gray"),
    ),
    replace(
        MODERN_CLEAN, key="corporate_formal", name="Corporate Formal",
        header_decoration=HeaderDecoration.BAR, header_height=104,
        company_fonts=(FontSpec("Helvetica-Bold", 20, "white"), FontSpec("Helvetica", 10, "white")),
        title_font=FontSpec("Helvetica-Bold", 22, "white", 1.2), meta_font=FontSpec("Helvetica", 10, "white"),
        long_dates=True, table_header_fill="secondary", meta_stroke=None,
        footer_text="Payment is due within 30 days. Thank you for your business.",
    ),
    replace(
        MODERN_CLEAN, key="executive_luxury", name="Executive Luxury", category="Professional",
        header_decoration=HeaderDecoration.RULE, decoration_color="accent",
        company_fonts=(FontSpec("Times-Bold", 24, "primary", 0.8), FontSpec("Times-Italic", 11, "subtle")),
        title_font=FontSpec("Times-Bold", 24, "primary", 2.0), meta_font=FontSpec("Times-Roman", 11, "black"),
        bill_title_font=FontSpec("Times-Bold", 11, "primary", 1.0), bill_font=FontSpec("Times-Roman", 12, "black"),
        long_dates=True, table_header_font=FontSpec("Times-Bold", 11, "white", 0.6),
        row_font=FontSpec("Times-Roman", 11, "black"), zebra=None, row_h=28,
        total_bar_font=FontSpec("Times-Bold", 15, "white"), logo_stroke="accent",
        footer_font=FontSpec("Times-Italic", 9, "gray"),
    ),
    replace(
        MODERN_CLEAN, key="business_classic", name="Business Classic",
        header_decoration=HeaderDecoration.RULE,
        headers=("DESCRIPTION", "QTY", "UNIT PRICE", "AMOUNT"), col_specs=(0.5, 0.12, 0.18, 0.2),
        table_header_fill="tint", table_header_font=FontSpec("Helvetica-Bold", 10, "primary"),
        table_header_rule="primary", meta_stroke="line", box_fill=None, box_stroke="line",
    ),
    replace(
        MODERN_CLEAN, key="enterprise_bold", name="Enterprise Bold",
        header_decoration=HeaderDecoration.BAR, header_height=112,
        company_fonts=(FontSpec("Helvetica-Bold", 26, "white"), FontSpec("Helvetica-Bold", 10, "white")),
        title_font=FontSpec("Helvetica-Bold", 28, "white", 1.5), meta_font=FontSpec("Helvetica-Bold", 10, "white"),
        header_h=34, row_h=28, table_header_font=FontSpec("Helvetica-Bold", 11, "white", 0.5),
        total_bar_height=40, total_bar_font=FontSpec("Helvetica-Bold", 16, "white"),
    ),
    replace(
        MODERN_CLEAN, key="consulting_elegant", name="Consulting Elegant", category="Professional",
        header_decoration=HeaderDecoration.WAVE, decoration_color="secondary",
        company_fonts=(FontSpec("Times-Roman", 22, "primary", 0.5), FontSpec("Times-Italic", 10, "subtle")),
        title_font=FontSpec("Times-Roman", 20, "primary", 2.5), long_dates=True,
        table_header_fill=None, table_header_rule="secondary",
        table_header_font=FontSpec("Times-Bold", 10, "primary", 0.6), row_font=FontSpec("Times-Roman", 11, "black"),
        zebra=None, total_bar_fill="secondary",
    ),
    replace(
        MODERN_CLEAN, key="financial_structured", name="Financial Structured",
        header_decoration=HeaderDecoration.GRID, decoration_color="line",
        headers=("DESCRIPTION", "QTY", "RATE", "AMOUNT"), col_specs=(0.52, 0.12, 0.18, 0.18),
        meta_stroke="primary", meta_fill="tint", table_header_fill="primary", row_rule="line",
        box_fill=None, box_stroke="primary",
        footer_text="All amounts are stated in the invoice currency.",
    ),
    replace(
        MODERN_CLEAN, key="legal_traditional", name="Legal Traditional", category="Professional",
        header_decoration=HeaderDecoration.RULE, decoration_color="black",
        company_fonts=(FontSpec("Times-Bold", 20, "black"), FontSpec("Times-Roman", 10, "black")),
        title_font=FontSpec("Times-Bold", 18, "black", 3.0), meta_font=FontSpec("Times-Roman", 10, "black"),
        bill_title_font=FontSpec("Times-Bold", 10, "black", 1.0), bill_font=FontSpec("Times-Roman", 11, "black"),
        headers=("SERVICES RENDERED", "HOURS", "RATE", "AMOUNT"), long_dates=True,
        table_header_fill=None, table_header_rule="black", table_header_font=FontSpec("Times-Bold", 10, "black"),
        row_font=FontSpec("Times-Roman", 10.5, "black"), zebra=None,
        totals_label_font=FontSpec("Times-Roman", 10, "black"), totals_value_font=FontSpec("Times-Bold", 10, "black"),
        total_bar_fill=None, total_bar_font=FontSpec("Times-Bold", 14, "black"),
        box_fill=None, box_stroke="black", box_title_font=FontSpec("Times-Bold", 10, "black"),
        box_font=FontSpec("Times-Roman", 10, "black"),
        footer_text="Remit payment to the address above.", footer_font=FontSpec("Times-Italic", 9, "black"),
    ),
    replace(
        MODERN_CLEAN, key="healthcare_modern", name="Healthcare Modern",
        header_decoration=HeaderDecoration.STRIPES, decoration_color="soft",
        headers=("SERVICE", "QTY", "FEE", "AMOUNT"), table_header_fill="secondary",
        footer_text="Thank you for trusting us with your care.",
    ),
    replace(
        MODERN_CLEAN, key="real_estate_warm", name="Real Estate Warm",
        header_decoration=HeaderDecoration.WAVE, decoration_color="accent",
        company_fonts=(FontSpec("Helvetica-Bold", 22, "secondary"), FontSpec("Helvetica", 10, "subtle")),
        headers=("PROPERTY / SERVICE", "QTY", "RATE", "AMOUNT"), logo_corner=28,
        total_bar_fill="secondary", box_fill="soft",
    ),
    replace(
        MODERN_CLEAN, key="insurance_trust", name="Insurance Trust",
        header_decoration=HeaderDecoration.BAR, header_height=100,
        company_fonts=(FontSpec("Helvetica-Bold", 20, "white"), FontSpec("Helvetica", 9.5, "white")),
        title_font=FontSpec("Helvetica-Bold", 20, "white", 1.0), meta_font=FontSpec("Helvetica", 10, "white"),
        headers=("COVERAGE", "UNITS", "PREMIUM", "AMOUNT"), table_header_fill="tint",
        table_header_font=FontSpec("Helvetica-Bold", 10, "primary"), table_header_rule="primary",
    ),
    replace(
        MODERN_CLEAN, key="banking_secure", name="Banking Secure",
        header_decoration=HeaderDecoration.GRID, decoration_color="soft",
        meta_stroke="primary", meta_fill=None, headers=("TRANSACTION", "QTY", "RATE", "AMOUNT"),
        col_specs=(0.54, 0.1, 0.18, 0.18), box_fill=None, box_stroke="primary",
        footer_text="This document was generated electronically and is valid without signature.",
    ),
    replace(
        MODERN_CLEAN, key="accounting_detailed", name="Accounting Detailed",
        header_decoration=HeaderDecoration.GRID, decoration_color="line",
        headers=("DESCRIPTION", "QTY", "UNIT COST", "LINE TOTAL"), col_specs=(0.5, 0.1, 0.2, 0.2),
        header_h=26, row_h=22, row_font=FontSpec("Courier", 9.5, "black"),
        table_header_font=FontSpec("Helvetica-Bold", 9, "white", 0.3), meta_stroke="line",
        totals_value_font=FontSpec("Courier-Bold", 10, "black"),
        total_bar_font=FontSpec("Courier-Bold", 13, "white"),
    ),
    replace(
        MODERN_CLEAN, key="consulting_professional", name="Consulting Professional",
        header_decoration=HeaderDecoration.RULE, decoration_color="secondary",
        headers=("ENGAGEMENT", "HOURS", "RATE", "FEES"), long_dates=True,
        table_header_fill="secondary", zebra="tint",
    ),
    replace(
        MODERN_CLEAN, key="creative_vibrant", name="Creative Vibrant", category="Creative",
        header_decoration=HeaderDecoration.DOTS, decoration_color="secondary", header_height=104,
        company_fonts=(FontSpec("Helvetica-BoldOblique", 24, "primary"), FontSpec("Helvetica", 10, "secondary")),
        title_font=FontSpec("Helvetica-BoldOblique", 26, "secondary", 1.0), logo_corner=28,
        table_header_fill="secondary", zebra="tint", row_rule=None, total_bar_fill="secondary",
        box_fill="soft", footer_text="Thanks for creating with us!",
    ),
    replace(
        MODERN_CLEAN, key="artistic_bold", name="Artistic Bold", category="Artistic",
        header_decoration=HeaderDecoration.STRIPES, decoration_color="accent", header_height=110,
        company_fonts=(FontSpec("Helvetica-Bold", 28, "primary", 1.0), FontSpec("Helvetica-Oblique", 10, "subtle")),
        title_font=FontSpec("Helvetica-Bold", 30, "accent", 2.0),
        headers=("WORK", "QTY", "RATE", "TOTAL"), header_h=32, row_h=28, zebra=None, row_rule="accent",
        total_bar_height=40, total_bar_font=FontSpec("Helvetica-Bold", 17, "white"),
    ),
    replace(
        MODERN_CLEAN, key="design_studio", name="Design Studio", category="Creative",
        header_decoration=HeaderDecoration.GRID, decoration_color="soft",
        company_fonts=(FontSpec("Helvetica", 22, "black", 1.5), FontSpec("Helvetica", 9, "gray", 0.5)),
        title_font=FontSpec("Helvetica", 18, "black", 4.0), headers=("PROJECT", "QTY", "RATE", "AMOUNT"),
        table_header_fill="black", zebra=None, total_bar_fill="black", box_fill="shade",
    ),
    replace(
        MODERN_CLEAN, key="fashion_elegant", name="Fashion Elegant", category="Creative",
        header_decoration=HeaderDecoration.WAVE, decoration_color="soft",
        company_fonts=(FontSpec("Times-Italic", 26, "primary", 1.0), FontSpec("Helvetica", 9, "subtle", 0.8)),
        title_font=FontSpec("Times-Roman", 20, "primary", 4.0), long_dates=True, logo_corner=28,
        table_header_fill=None, table_header_rule="primary",
        table_header_font=FontSpec("Helvetica", 9, "primary", 1.5), zebra=None,
        total_bar_fill=None, total_bar_font=FontSpec("Times-Bold", 16, "primary"),
        box_fill=None, box_stroke="soft", footer_text="With gratitude.",
    ),
    replace(
        MODERN_CLEAN, key="photography_clean", name="Photography Clean", category="Creative",
        header_decoration=HeaderDecoration.NONE, logo_size=64, logo_corner=4, logo_stroke="line",
        company_fonts=(FontSpec("Helvetica-Bold", 18, "black"), FontSpec("Helvetica", 10, "gray")),
        title_font=FontSpec("Helvetica", 16, "gray", 3.0), headers=("SESSION / PRODUCT", "QTY", "RATE", "AMOUNT"),
        table_header_fill=None, table_header_rule="line", table_header_font=FontSpec("Helvetica-Bold", 9, "gray", 0.6),
        zebra=None, total_bar_fill="black",
    ),
    replace(
        MODERN_CLEAN, key="tech_modern", name="Tech Modern", category="Technology",
        header_decoration=HeaderDecoration.GRID, decoration_color="soft",
        company_fonts=(FontSpec("Courier-Bold", 20, "primary"), FontSpec("Courier", 9.5, "subtle")),
        title_font=FontSpec("Courier-Bold", 20, "primary", 1.0), meta_font=FontSpec("Courier", 10, "black"),
        headers=("ITEM", "QTY", "RATE", "AMOUNT"), row_font=FontSpec("Courier", 9.5, "black"),
        table_header_font=FontSpec("Courier-Bold", 10, "white"), zebra="tint",
        total_bar_font=FontSpec("Courier-Bold", 14, "white"), footer_text="// thank you",
        footer_font=FontSpec("Courier", 9, "gray"),
    ),
    replace(
        MODERN_CLEAN, key="geometric_abstract", name="Geometric Abstract", category="Artistic",
        header_decoration=HeaderDecoration.DOTS, decoration_color="primary", header_height=104,
        logo_corner=0, table_header_fill="accent", table_header_font=FontSpec("Helvetica-Bold", 10, "black", 0.3),
        total_bar_fill="accent", total_bar_font=FontSpec("Helvetica-Bold", 14, "black"),
    ),
    replace(
        MODERN_CLEAN, key="vintage_retro", name="Vintage Retro", category="Artistic",
        header_decoration=HeaderDecoration.STRIPES, decoration_color="secondary",
        company_fonts=(FontSpec("Courier-Bold", 22, "secondary", 1.5), FontSpec("Courier", 10, "subtle")),
        title_font=FontSpec("Times-Bold", 22, "secondary", 3.0), meta_font=FontSpec("Courier", 10, "black"),
        long_dates=True, table_header_fill="secondary", table_header_font=FontSpec("Courier-Bold", 10, "white"),
        row_font=FontSpec("Courier", 10, "black"), meta_stroke="secondary", box_stroke="secondary",
        footer_text="~ Thank you kindly ~", footer_font=FontSpec("Times-Italic", 10, "secondary"),
    ),
)

TEMPLATE_STYLES: Dict[str, TemplateStyle] = {s.key: s for s in _STYLES}


def get_style(key: str) -> TemplateStyle:
    """Template style by design key; unknown keys raise KeyError."""
    try:
        return TEMPLATE_STYLES[key]
    except KeyError:
        raise KeyError(f"Unknown template design: {key!r}") from None
