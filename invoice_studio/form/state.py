"""In-memory editor state for one invoice/quote.

Every mutation recomputes the derived totals, so `to_document()` always hands
the layout engine an internally consistent `InvoiceDocument`.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from invoice_studio.core.currency import sum_money, to_decimal
from invoice_studio.core.numbering import default_dates, new_document_number, number_for_type
from invoice_studio.core.settings import Settings
from invoice_studio.data.models import DocumentType, InvoiceDocument, LineItem, Party, TaxLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Totals:
    subtotal: float
    tax_amounts: List[float] = field(default_factory=list)
    grand_total: float = 0.0


def compute_totals(items: Iterable[LineItem], shipping_cost: float, tax_rates: Iterable[float]) -> Totals:
    """Derive subtotal, per-tax amounts and grand total from the line items.

    Rates are percentages (5 means 5 %). Unparseable numbers count as zero.
    """
    subtotal = sum_money(it.line_total for it in items)
    taxes = [subtotal * to_decimal(rate) / Decimal(100) for rate in tax_rates]
    grand = subtotal + sum(taxes, Decimal("0")) + to_decimal(shipping_cost)
    return Totals(
        subtotal=float(subtotal),
        tax_amounts=[float(t) for t in taxes],
        grand_total=float(grand),
    )


def _num(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


@dataclass
class EditableItem:
    description: str = ""
    quantity: float = 1.0
    unit_price: float = 0.0
    line_total: float = 0.0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def recalc(self) -> None:
        self.line_total = _num(self.quantity) * _num(self.unit_price)

    def freeze(self) -> LineItem:
        return LineItem(self.description, _num(self.quantity), _num(self.unit_price), self.line_total)


@dataclass
class EditableTax:
    label: str
    rate: float
    amount: float = 0.0


class InvoiceForm:
    """Editable invoice/quote with totals recomputed after each change."""

    def __init__(self, settings: Optional[Settings] = None, today: Optional[date] = None) -> None:
        self.settings = settings or Settings()
        issue, due = default_dates(today, self.settings.due_days)
        self.document_type = DocumentType.INVOICE
        self.document_number = new_document_number(today)
        self.issue_date = issue
        self.due_date = due
        self.billing = Party()
        self.shipping = Party()
        self.shipping_same_as_billing = True
        self.items: List[EditableItem] = [EditableItem("Fundamental EE Core", 1, 673.0, 673.0)]
        self.shipping_cost = 0.0
        self.taxes = [
            EditableTax(self.settings.gst_label, self.settings.gst_rate),
            EditableTax(self.settings.pst_label, self.settings.pst_rate),
        ]
        self.currency = self.settings.currency
        self.subtotal = 0.0
        self.grand_total = 0.0
        self.recompute()

    # ----- derived state -----
    def recompute(self) -> Totals:
        totals = compute_totals(
            (it.freeze() for it in self.items),
            self.shipping_cost,
            [_num(t.rate) for t in self.taxes],
        )
        self.subtotal = totals.subtotal
        for tax, amount in zip(self.taxes, totals.tax_amounts):
            tax.amount = amount
        self.grand_total = totals.grand_total
        return totals

    # ----- header -----
    def set_document_type(self, doc_type: DocumentType) -> None:
        self.document_type = DocumentType(doc_type)
        self.document_number = number_for_type(self.document_number, self.document_type)

    # ----- recipients -----
    def set_billing(self, **fields: str) -> None:
        self.billing = replace(self.billing, **fields)
        if self.shipping_same_as_billing:
            self.shipping = self.billing

    def set_shipping(self, **fields: str) -> None:
        if self.shipping_same_as_billing:
            logger.debug("Shipping edit ignored while mirroring billing")
            return
        self.shipping = replace(self.shipping, **fields)

    def set_shipping_same_as_billing(self, enabled: bool) -> None:
        self.shipping_same_as_billing = bool(enabled)
        if self.shipping_same_as_billing:
            self.shipping = self.billing

    # ----- items -----
    def add_item(self, description: str = "", quantity: float = 1.0, unit_price: float = 0.0) -> EditableItem:
        item = EditableItem(description, quantity, unit_price)
        item.recalc()
        self.items.append(item)
        self.recompute()
        return item

    def remove_item(self, item_id: str) -> bool:
        """Remove an item; the last remaining item cannot be removed."""
        if len(self.items) <= 1:
            return False
        before = len(self.items)
        self.items = [it for it in self.items if it.id != item_id]
        self.recompute()
        return len(self.items) != before

    def update_item(self, item_id: str, **fields: object) -> EditableItem:
        for item in self.items:
            if item.id == item_id:
                for name in ("description", "quantity", "unit_price"):
                    if name in fields:
                        value = fields[name]
                        if name != "description":
                            value = 0.0 if value in ("", None) else _num(value)
                        setattr(item, name, value)
                item.recalc()
                self.recompute()
                return item
        raise KeyError(item_id)

    # ----- money -----
    def set_shipping_cost(self, value: object) -> None:
        self.shipping_cost = 0.0 if value in ("", None) else _num(value)
        self.recompute()

    def set_tax(self, index: int, label: Optional[str] = None, rate: object = None) -> None:
        tax = self.taxes[index]
        if label is not None:
            tax.label = label
        if rate is not None:
            tax.rate = _num(rate)
        self.recompute()

    def set_currency(self, symbol: str) -> None:
        if symbol not in self.settings.currencies:
            raise ValueError(f"Unsupported currency {symbol!r}; choose one of {self.settings.currencies}")
        self.currency = symbol

    def to_document(self) -> InvoiceDocument:
        return InvoiceDocument(
            document_type=self.document_type,
            document_number=self.document_number,
            issue_date=self.issue_date,
            due_date=self.due_date,
            billing_party=self.billing,
            shipping_party=self.shipping,
            line_items=tuple(it.freeze() for it in self.items),
            subtotal=self.subtotal,
            shipping_cost=self.shipping_cost,
            taxes=tuple(TaxLine(t.label, t.rate, t.amount) for t in self.taxes),
            grand_total=self.grand_total,
            currency_symbol=self.currency,
        )
