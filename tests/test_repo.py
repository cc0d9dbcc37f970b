from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from invoicer.data import repo
from invoicer.data.db import create_db_and_tables, set_database_url
from invoicer.data.payment_methods import PayPal
from invoicer.pdf.payment_info import extract_payment_info


@pytest.fixture(autouse=True)
def memory_db():
    set_database_url("sqlite://")
    create_db_and_tables()
    yield
    set_database_url(None)


def _dto(number: str = "INV-1", **extra):
    dto = {
        "number": number,
        "issue_date": date(2025, 2, 1),
        "items": [
            {"description": "Design", "quantity": 2, "rate": "150"},
            {"description": "Hosting", "quantity": 1, "rate": 49.99},
        ],
    }
    dto.update(extra)
    return dto


def test_company_upsert() -> None:
    first = repo.save_company({"name": "Northwind", "email": "a@n.example"})
    second = repo.save_company({"city": "Portland"})
    assert first.id == second.id
    company = repo.get_company()
    assert company.name == "Northwind"
    assert company.city == "Portland"


def test_customer_lookup_is_case_insensitive() -> None:
    a = repo.get_or_create_customer("Acme Corp", "AP@acme.example", city="Austin")
    b = repo.get_or_create_customer("acme corp", "ap@acme.example")
    assert a.id == b.id
    assert b.city == "Austin"
    with pytest.raises(ValueError):
        repo.get_or_create_customer("  ")


def test_create_invoice_prices_items_and_loads_relations() -> None:
    customer = repo.get_or_create_customer("Acme Corp")
    created = repo.create_invoice(_dto(customer_id=customer.id, currency="eur",
                                       payment_methods=[PayPal(email="p@n.example")]))
    assert created.currency == "EUR"

    inv = repo.get_invoice_by_number("INV-1")
    assert [i.description for i in inv.items] == ["Design", "Hosting"]
    assert [i.total for i in inv.items] == [Decimal("300.00"), Decimal("49.99")]
    assert inv.customer.name == "Acme Corp"
    assert inv.payment_methods == [{"kind": "paypal", "payload": {"email": "p@n.example"}}]
    assert extract_payment_info(inv) == "PayPal\np@n.example"


def test_create_invoice_validation() -> None:
    with pytest.raises(ValueError):
        repo.create_invoice({"number": "", "issue_date": date(2025, 1, 1), "items": []})
    with pytest.raises(ValueError):
        repo.create_invoice({"number": "X", "issue_date": "2025-01-01", "items": []})
    with pytest.raises(ValueError):
        repo.create_invoice(_dto(payment_methods=[object()]))


def test_duplicate_number_rejected_and_rolled_back() -> None:
    repo.create_invoice(_dto())
    with pytest.raises(ValueError):
        repo.create_invoice(_dto())
    assert len(repo.list_invoices()) == 1


def test_list_invoices_newest_first() -> None:
    repo.create_invoice(_dto("A", issue_date=date(2025, 1, 1)))
    repo.create_invoice(_dto("B", issue_date=date(2025, 3, 1)))
    repo.create_invoice(_dto("C", issue_date=date(2025, 2, 1)))
    assert [i.number for i in repo.list_invoices()] == ["B", "C", "A"]
    assert [i.number for i in repo.list_invoices(limit=1)] == ["B"]
