from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select

from invoicer.data.db import get_session, session_scope
from invoicer.data.models import Company, Customer, Invoice, InvoiceStatus, Item
from invoicer.data.payment_methods import encode, is_payment_method

logger = logging.getLogger(__name__)

_ADDRESS_KEYS = ("line1", "line2", "city", "state", "zip", "country")


def save_company(data: Dict[str, Any]) -> Company:
	"""Create or update the single sender company profile."""
	with session_scope() as s:
		company = s.exec(select(Company).order_by(Company.id)).first() or Company()
		for key in ("name", "email", "phone", "website", *_ADDRESS_KEYS):
			if key in data:
				setattr(company, key, data[key])
		s.add(company)
		s.flush()
		s.refresh(company)
		return company


def get_company() -> Optional[Company]:
	with get_session() as s:
		return s.exec(select(Company).order_by(Company.id)).first()


def get_or_create_customer(name: str, email: str = "", **fields: Any) -> Customer:
	"""Fetch an existing customer by name/email (case-insensitive), or create one."""
	normalized_name = (name or "").strip()
	if not normalized_name:
		raise ValueError("Customer name is required")

	with session_scope() as s:
		stmt = select(Customer).where(func.lower(Customer.name) == normalized_name.lower())
		if email:
			stmt = stmt.where(func.lower(Customer.email) == email.strip().lower())
		existing = s.exec(stmt).first()
		if existing:
			return existing

		customer = Customer(name=normalized_name, email=(email or "").strip())
		for key in ("phone", "organization", *_ADDRESS_KEYS):
			if key in fields:
				setattr(customer, key, fields[key])
		s.add(customer)
		# Ensure PK is populated before leaving the session
		s.flush()
		s.refresh(customer)
		return customer


def _encode_methods(methods: Iterable[Any]) -> List[Dict[str, Any]]:
	out: List[Dict[str, Any]] = []
	for m in methods or []:
		if is_payment_method(m):
			out.append(encode(m))
		elif isinstance(m, dict):
			out.append(dict(m))
		else:
			raise ValueError(f"Unsupported payment method: {m!r}")
	return out


def create_invoice(invoice_dto: Dict[str, Any]) -> Invoice:
	"""
	Create an invoice and its items.

	invoice_dto structure:
	  {
		'number': str,  # required (must be unique)
		'issue_date': datetime.date,  # required
		'due_date': datetime.date | None,
		'customer_id': int | None,
		'currency': str,  # default 'USD'
		'payment_notes': str | None,
		'payment_methods': [PaymentMethod | encoded dict, ...],
		'items': [
		   {'description': str, 'quantity': int, 'rate': Decimal | float | str}, ...
		]  # required, can be empty
	  }
	Item totals are computed as quantity * rate.
	"""
	number = str(invoice_dto.get("number") or "").strip()
	issue_date = invoice_dto.get("issue_date")
	if not (number and isinstance(issue_date, date)):
		raise ValueError("Missing required fields: number, issue_date")

	items_dto: List[Dict[str, Any]] = list(invoice_dto.get("items", []) or [])
	methods = _encode_methods(invoice_dto.get("payment_methods", []) or [])

	with session_scope() as s:
		dup = s.exec(select(Invoice).where(Invoice.number == number)).first()
		if dup:
			raise ValueError(f"Invoice number already exists: {number}")

		inv = Invoice(
			number=number,
			issue_date=issue_date,
			due_date=invoice_dto.get("due_date"),
			status=InvoiceStatus(invoice_dto.get("status", InvoiceStatus.draft)),
			currency=str(invoice_dto.get("currency") or "USD").upper(),
			payment_notes=invoice_dto.get("payment_notes"),
			payment_methods=methods,
			customer_id=invoice_dto.get("customer_id"),
		)
		s.add(inv)
		s.flush()

		for pos, item in enumerate(items_dto):
			it = Item.priced(
				description=str(item.get("description", "")),
				quantity=int(item.get("quantity", 0) or 0),
				rate=item.get("rate", 0) or 0,
				position=pos,
			)
			it.invoice_id = inv.id
			s.add(it)
		s.flush()
		s.refresh(inv)
		invoice_id = inv.id

	logger.info("Saved invoice %s (%d items)", number, len(items_dto))
	return get_invoice(invoice_id)  # type: ignore[return-value]


def _load(stmt) -> Optional[Invoice]:
	stmt = stmt.options(selectinload(Invoice.items), selectinload(Invoice.customer))
	with get_session() as s:
		return s.exec(stmt).first()


def get_invoice(invoice_id: int) -> Optional[Invoice]:
	return _load(select(Invoice).where(Invoice.id == invoice_id))


def get_invoice_by_number(number: str) -> Optional[Invoice]:
	"""Fetch a single invoice by its unique number, with items and customer loaded."""
	return _load(select(Invoice).where(Invoice.number == number))


def list_invoices(limit: Optional[int] = None) -> List[Invoice]:
	"""Return invoices ordered by issue date DESC, id DESC."""
	with get_session() as s:
		stmt = select(Invoice).order_by(Invoice.issue_date.desc(), Invoice.id.desc())
		if isinstance(limit, int) and limit > 0:
			stmt = stmt.limit(limit)
		return list(s.exec(stmt).all())
