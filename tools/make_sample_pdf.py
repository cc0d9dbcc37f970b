from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
import logging
import sys

# Ensure we can import the invoicer package when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoicer.core.settings import load_settings
from invoicer.data.models import Company, Customer, Invoice, Item
from invoicer.data.payment_methods import BankIBAN, PayPal, encode
from invoicer.pdf.pdf_draw import build_invoice_from_settings, build_invoice_pdf
from invoicer.styles.templates import TEMPLATE_STYLES


def _items() -> list[Item]:
    rows = [
        ("Discovery workshop", 1, "950.00"),
        ("UX research interviews", 6, "180.00"),
        ("Wireframes (per screen)", 14, "65.00"),
        ("Visual design system", 1, "2400.00"),
        ("Frontend development (hours)", 42, "95.00"),
        ("API integration (hours)", 18, "110.00"),
        ("QA and accessibility review", 1, "780.00"),
        ("Project management", 1, "600.00"),
    ]
    # Four phases of the same work so the table overflows onto a continuation page
    items: list[Item] = []
    for phase in range(1, 5):
        for desc, qty, rate in rows:
            items.append(Item.priced(f"{desc} (phase {phase})", qty, rate, position=len(items)))
    return items


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = load_settings()

    company = Company(name="Northwind Studio", email="billing@northwind.example", phone="+1 555 0100",
                      website="northwind.example", line1="12 Harbour Road", city="Portland", state="OR",
                      zip="97201", country="USA")
    customer = Customer(name="Acme Corporation", email="ap@acme.example", line1="500 Market St",
                        city="San Francisco", state="CA", zip="94105")
    today = date.today()
    invoice = Invoice(
        number="SAMPLE-0001",
        issue_date=today,
        due_date=today + timedelta(days=30),
        currency=settings.currency,
        payment_notes="Thank you for your business. Payment is due within 30 days.",
        payment_methods=[
            encode(BankIBAN(iban="DE89 3704 0044 0532 0130 00", swift="COBADEFFXXX", beneficiary="Northwind Studio")),
            encode(PayPal(email="pay@northwind.example")),
        ],
        items=_items(),
    )

    out_dir = ROOT / "samples"
    out_dir.mkdir(parents=True, exist_ok=True)
    for design in TEMPLATE_STYLES:
        out = out_dir / f"sample-{design}.pdf"
        pages = build_invoice_pdf(out, invoice, company, customer, design=design,
                                  theme=settings.theme_name, logo=settings.logo_path,
                                  multi_page=settings.multi_page)
        print(f"{design}: {pages} page(s) -> {out}")

    # Configured design and file naming
    out = build_invoice_from_settings(invoice, company, customer, settings)
    print(f"{settings.template_design} (configured) -> {out}")


if __name__ == "__main__":
    main()
