from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Tuple


class DocumentType(str, Enum):
	INVOICE = "INVOICE"
	QUOTE = "QUOTE"

	@property
	def number_label(self) -> str:
		return "INV#" if self is DocumentType.INVOICE else "QUO#"


@dataclass(frozen=True)
class Party:
	company_name: str = ""
	address: str = ""
	phone: str = ""
	email: str = ""

	def lines(self) -> List[str]:
		"""Non-empty display lines: company, address, 'Phone ...', email."""
		phone = f"Phone {self.phone}" if self.phone else ""
		return [ln for ln in (self.company_name, self.address, phone, self.email) if ln]


@dataclass(frozen=True)
class LineItem:
	description: str
	quantity: float = 1.0
	unit_price: float = 0.0
	# Trusted as supplied; the layout engine never recomputes it
	line_total: float = 0.0


@dataclass(frozen=True)
class TaxLine:
	label: str
	rate: float
	amount: float


@dataclass(frozen=True)
class InvoiceDocument:
	document_type: DocumentType
	document_number: str
	issue_date: str
	due_date: str
	billing_party: Party = field(default_factory=Party)
	shipping_party: Party = field(default_factory=Party)
	line_items: Tuple[LineItem, ...] = ()
	subtotal: float = 0.0
	shipping_cost: float = 0.0
	taxes: Tuple[TaxLine, ...] = ()
	grand_total: float = 0.0
	currency_symbol: str = "US$"

	@property
	def file_name(self) -> str:
		return f"{self.document_type.value}_{self.document_number}.pdf"

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "InvoiceDocument":
		"""Build a document from the JSON shape produced by to_dict()."""
		return cls(
			document_type=DocumentType(str(data.get("document_type", "INVOICE")).upper()),
			document_number=str(data.get("document_number", "")),
			issue_date=str(data.get("issue_date", "")),
			due_date=str(data.get("due_date", "")),
			billing_party=Party(**(data.get("billing_party") or {})),
			shipping_party=Party(**(data.get("shipping_party") or {})),
			line_items=tuple(LineItem(**it) for it in data.get("line_items", []) or []),
			subtotal=float(data.get("subtotal", 0) or 0),
			shipping_cost=float(data.get("shipping_cost", 0) or 0),
			taxes=tuple(TaxLine(**t) for t in data.get("taxes", []) or []),
			grand_total=float(data.get("grand_total", 0) or 0),
			currency_symbol=str(data.get("currency_symbol", "US$")),
		)

	def to_dict(self) -> Dict[str, Any]:
		d = asdict(self)
		d["document_type"] = self.document_type.value
		d["line_items"] = [asdict(it) for it in self.line_items]
		d["taxes"] = [asdict(t) for t in self.taxes]
		return d
