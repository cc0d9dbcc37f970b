from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, event
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from invoicer.core.currency import round_money_dec, to_decimal


class AddressFields(SQLModel):
	line1: str = ""
	line2: str = ""
	city: str = ""
	state: str = ""
	zip: str = ""
	country: str = ""

	@property
	def address_one_line(self) -> str:
		parts = [self.line1, self.line2, self.city, self.state, self.zip, self.country]
		return ", ".join(p.strip() for p in parts if p and p.strip())


class Company(AddressFields, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	name: str = ""
	email: str = ""
	phone: Optional[str] = None
	website: Optional[str] = None


class Customer(AddressFields, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	name: str = ""
	email: str = ""
	phone: Optional[str] = None
	organization: Optional[str] = None

	invoices: List["Invoice"] = Relationship(sa_relationship=relationship("Invoice", back_populates="customer"))


class InvoiceStatus(str, Enum):
	draft = "draft"
	sent = "sent"
	paid = "paid"
	overdue = "overdue"


class Invoice(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	number: str = Field(index=True, sa_column_kwargs={"unique": True})
	status: InvoiceStatus = InvoiceStatus.draft
	issue_date: date
	due_date: Optional[date] = None
	currency: str = "USD"
	payment_notes: Optional[str] = None
	# Encoded payment methods, see invoicer.data.payment_methods.encode
	payment_methods: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
	customer_id: Optional[int] = Field(default=None, foreign_key="customer.id", index=True)

	customer: Optional["Customer"] = Relationship(sa_relationship=relationship("Customer", back_populates="invoices"))
	items: List["Item"] = Relationship(
		sa_relationship=relationship("Item", back_populates="invoice", order_by="Item.position")
	)


class Item(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	invoice_id: Optional[int] = Field(default=None, foreign_key="invoice.id", index=True)
	position: int = 0
	description: str = ""
	quantity: int = 0
	rate: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
	# Stored total = quantity * rate (computed upstream of rendering)
	total: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)

	invoice: Optional["Invoice"] = Relationship(sa_relationship=relationship("Invoice", back_populates="items"))

	@classmethod
	def priced(cls, description: str, quantity: int, rate: object, position: int = 0) -> "Item":
		r = round_money_dec(to_decimal(rate))
		return cls(
			description=description,
			quantity=quantity,
			rate=r,
			total=round_money_dec(Decimal(quantity) * r),
			position=position,
		)


@event.listens_for(Item, "before_insert")
@event.listens_for(Item, "before_update")
def _compute_item_total(mapper, connection, target: Item) -> None:  # type: ignore[no-untyped-def]
	target.total = round_money_dec(Decimal(int(target.quantity or 0)) * to_decimal(target.rate))
