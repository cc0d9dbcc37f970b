from __future__ import annotations

from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation
from typing import Iterable, Optional


# Symbols the built-in PDF fonts can draw; other codes render as "CODE 1.00"
CURRENCY_SYMBOLS = {
	"USD": "$",
	"CAD": "CA$",
	"AUD": "A$",
	"EUR": "€",
	"GBP": "£",
	"JPY": "¥",
}

# ISO 4217 currencies without minor units
ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "VND", "CLP", "ISK"}


def to_decimal(x: object) -> Decimal:
	"""Best-effort conversion to Decimal via str to avoid binary float artifacts."""
	try:
		return Decimal(str(x))
	except (InvalidOperation, ValueError, TypeError):
		return Decimal("0")


def round_money_dec(x: float | Decimal, places: int = 2) -> Decimal:
	"""Round with banker's rounding (round-half-to-even) and return Decimal."""
	quantum = Decimal(1).scaleb(-places) if places > 0 else Decimal(1)
	return to_decimal(x).quantize(quantum, rounding=ROUND_HALF_EVEN)


def sum_money(values: Iterable[float | Decimal]) -> Decimal:
	"""Accumulate monetary values using Decimal and banker's rounding at the end."""
	total = Decimal("0")
	for v in values:
		total += to_decimal(v)
	return round_money_dec(total)


def fmt_money(x: float | Decimal, places: int = 2, width: Optional[int] = None) -> str:
	"""
	Format a monetary value with thousands separators and fixed decimals.

	If width is provided, return a right-aligned string.
	"""
	q = round_money_dec(x, places)
	s = f"{q:,.{places}f}"
	return s.rjust(width) if isinstance(width, int) and width > 0 else s


def fmt_currency(amount: float | Decimal, code: Optional[str]) -> str:
	"""Format an amount for a currency code: "$1,234.50", "CHF 1,234.50"."""
	code = (code or "").strip().upper()
	places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
	q = round_money_dec(amount, places)
	sign = "-" if q < 0 else ""
	body = fmt_money(abs(q), places)
	symbol = CURRENCY_SYMBOLS.get(code)
	if symbol:
		return f"{sign}{symbol}{body}"
	if code:
		return f"{sign}{code} {body}"
	return f"{sign}{body}"


def fmt_qty(qty: object) -> str:
	"""Format a quantity without trailing zeros ("2", "1.5")."""
	d = to_decimal(qty)
	if d == d.to_integral_value():
		return str(int(d))
	return format(d.normalize(), "f")
