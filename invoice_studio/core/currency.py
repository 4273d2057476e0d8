from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable


def to_decimal(x: object) -> Decimal:
	"""Best-effort conversion to Decimal via str to avoid binary float artifacts."""
	try:
		return Decimal(str(x))
	except (InvalidOperation, ValueError, TypeError):
		return Decimal("0")


def round_money_dec(x: float | Decimal) -> Decimal:
	"""Round to 2 decimals, half away from zero.

	Floats are rounded from their exact binary value, so 1.005 (really
	1.00499...) gives 1.00 and an exact tie like 0.125 gives 0.13.
	"""
	d = Decimal(x) if isinstance(x, (float, int)) else to_decimal(x)
	return d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def fmt_amount(x: float | Decimal) -> str:
	"""Two fixed decimals, no thousands separators.

	Non-finite values are passed through as text rather than rejected.
	"""
	try:
		if isinstance(x, float) and not math.isfinite(x):
			return f"{x:.2f}"
		return f"{round_money_dec(x):.2f}"
	except (InvalidOperation, ValueError, TypeError):
		return str(x)


def fmt_money(x: float | Decimal, symbol: str = "") -> str:
	"""Format a money value as '{symbol}{value:.2f}'."""
	return f"{symbol}{fmt_amount(x)}"


def sum_money(values: Iterable[float | Decimal]) -> Decimal:
	"""Accumulate monetary values using Decimal (no intermediate rounding)."""
	total = Decimal("0")
	for v in values:
		total += to_decimal(v)
	return total

