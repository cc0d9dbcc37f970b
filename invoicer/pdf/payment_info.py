"""Best-effort lookup of payment instructions on an invoice-like record.

Records reach the renderer in several shapes (SQLModel rows, dataclasses,
plain dicts from imports), with the payment data stored under different
names. This module scans a record for the first payment-shaped field and
turns it into display text. Invoices that carry typed `payment_methods`
are found the same way.
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from invoicer.data.payment_methods import decode, is_payment_method

logger = logging.getLogger(__name__)

ALIASES = frozenset({
    "paymentinfo",
    "paymentinstructions",
    "paymentterms",
    "paymentmethod",
    "paymentmethods",
    "payments",
    "payinfo",
    "instructions",
})


def normalize_name(name: str) -> str:
    return str(name).replace("_", "").lower()


def _fields(record: Any) -> List[Tuple[str, Any]]:
    """(name, value) pairs of a record in declaration order."""
    if isinstance(record, Mapping):
        return [(str(k), v) for k, v in record.items()]
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [(f.name, getattr(record, f.name, None)) for f in dataclasses.fields(record)]
    if isinstance(record, BaseModel):
        return [(name, getattr(record, name, None)) for name in type(record).model_fields]
    try:
        attrs = vars(record)
    except TypeError:
        return []
    return [(k, v) for k, v in attrs.items() if not k.startswith("_")]


def _is_record(value: Any) -> bool:
    return (
        isinstance(value, (Mapping, BaseModel))
        or (dataclasses.is_dataclass(value) and not isinstance(value, type))
    )


def render_method(method: Any) -> str:
    return "\n".join(method.lines())


def _render_entry(value: Any) -> Optional[str]:
    if is_payment_method(value):
        return render_method(value)
    if isinstance(value, Mapping):
        decoded = decode(value)
        if decoded is not None:
            return render_method(decoded)
        return _render_flat_mapping(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _render_flat_mapping(value: Mapping) -> Optional[str]:
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
        return None
    lines = [f"{k}: {value[k]}" for k in sorted(value)]
    return "\n".join(lines) or None


def render_payment_value(value: Any) -> Optional[str]:
    """Display text for one payment-shaped value, or None when it has nothing to show."""
    if value is None:
        return None
    if isinstance(value, (str, Mapping)) or is_payment_method(value):
        return _render_entry(value)
    if isinstance(value, Iterable):
        try:
            entries = list(value)
        except TypeError:
            return None
        parts = [text for text in (_render_entry(e) for e in entries) if text]
        return "\n\n".join(parts) or None
    return None


def _match(fields: Iterable[Tuple[str, Any]]) -> Optional[str]:
    for name, value in fields:
        if normalize_name(name) in ALIASES:
            text = render_payment_value(value)
            if text:
                return text
    return None


def extract_payment_info(record: Any) -> Optional[str]:
    """
    Payment instructions text for `record`, or None.

    Field names are compared case- and underscore-insensitively against ALIASES;
    the first matching field (declaration order) with displayable content wins.
    When nothing matches directly, nested record fields are searched one level deep.
    """
    try:
        fields = _fields(record)
        found = _match(fields)
        if found:
            return found
        for _name, value in fields:
            if _is_record(value):
                found = _match(_fields(value))
                if found:
                    return found
    except Exception:
        logger.debug("Payment info lookup failed", exc_info=True)
        return None
    return None
