from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Optional

from invoice_studio.data.models import DocumentType

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

QUOTE_SUFFIX = "Q"


def format_display_date(d: date) -> str:
	"""Format like 'JAN 5, 2026' (no zero padding on the day)."""
	return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def default_dates(today: Optional[date] = None, due_days: int = 30) -> tuple[str, str]:
	"""Return (issue_date, due_date) display strings for a new document."""
	today = today or date.today()
	return format_display_date(today), format_display_date(today + timedelta(days=due_days))


def new_document_number(today: Optional[date] = None, rng: Optional[random.Random] = None) -> str:
	"""
	Return a fresh number like '2026101907': issue date as YYYYMMDD plus two random digits.

	Numbers are not persisted anywhere, so uniqueness is best-effort only.
	"""
	today = today or date.today()
	rng = rng or random.Random()
	return f"{today:%Y%m%d}{rng.randrange(100):02d}"


def number_for_type(number: str, doc_type: DocumentType) -> str:
	"""Add or drop the trailing 'Q' that marks quote numbers."""
	if doc_type is DocumentType.QUOTE and not number.endswith(QUOTE_SUFFIX):
		return number + QUOTE_SUFFIX
	if doc_type is DocumentType.INVOICE and number.endswith(QUOTE_SUFFIX):
		return number[: -len(QUOTE_SUFFIX)]
	return number
