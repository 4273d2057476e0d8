from __future__ import annotations

import io
from typing import Sequence

import pytest

from invoice_studio.data.models import DocumentType, InvoiceDocument, LineItem, Party, TaxLine
from invoice_studio.form.state import compute_totals


def make_doc(
    items: Sequence[LineItem] = (LineItem("Fundamental EE Core", 1, 673.0, 673.0),),
    shipping: float = 0.0,
    rates: Sequence[float] = (5.0, 7.0),
    doc_type: DocumentType = DocumentType.INVOICE,
    billing: Party = Party("Acme Corp", "1 Main St", "555-0100", "ap@acme.test"),
    shipping_party: Party = Party("Acme Corp", "1 Main St"),
    **overrides,
) -> InvoiceDocument:
    totals = compute_totals(items, shipping, rates)
    fields = dict(
        document_type=doc_type,
        document_number="2026101907",
        issue_date="OCT 19, 2026",
        due_date="NOV 18, 2026",
        billing_party=billing,
        shipping_party=shipping_party,
        line_items=tuple(items),
        subtotal=totals.subtotal,
        shipping_cost=shipping,
        taxes=tuple(TaxLine(f"TAX {r:g}%", r, a) for r, a in zip(rates, totals.tax_amounts)),
        grand_total=totals.grand_total,
        currency_symbol="US$",
    )
    fields.update(overrides)
    return InvoiceDocument(**fields)


def many_items(n: int) -> list[LineItem]:
    return [LineItem(f"Part {i:02d}", 1, 10.0, 10.0) for i in range(n)]


@pytest.fixture
def png_bytes() -> bytes:
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (64, 32), (0, 86, 179)).save(buf, format="PNG")
    return buf.getvalue()
