# invoice_studio/pdf/table_layout.py
from __future__ import annotations

from typing import List, Sequence, Tuple

from invoice_studio.core.currency import fmt_money
from invoice_studio.data.models import InvoiceDocument, LineItem
from invoice_studio.pdf.blocks import CONTENT_WIDTH, MARGIN
from invoice_studio.pdf.commands import RGB, WHITE, Rect, Text
from invoice_studio.pdf.cursor import PageCursor
from invoice_studio.pdf.metrics import FONT, FONT_BOLD, pt_to_mm, truncate

# Fixed numeric columns (mm); Description absorbs the remainder
COL_W_QTY = 30.0
COL_W_PRICE = 30.0
COL_W_TOTAL = 30.0

HEADERS = ("DESCRIPTION", "TOTAL QTY", "UNIT PRICE", "TOTAL")

FONT_SIZE = 9.5
CELL_PADDING = 2.5
LINE_HEIGHT_FACTOR = 1.15
# Cap height as a fraction of font size, used to centre the baseline
CAP_RATIO = 0.70

# Single-line rows, sized from the font
ROW_HEIGHT = pt_to_mm(FONT_SIZE) * LINE_HEIGHT_FACTOR + 2 * CELL_PADDING

GRID_COLOR: RGB = (220, 220, 220)
W_GRID = 0.1

# Rows restart at the top margin on continuation pages
CONTINUATION_TOP = 0.0


def col_widths(content_width: float = CONTENT_WIDTH) -> List[float]:
    fixed = COL_W_QTY + COL_W_PRICE + COL_W_TOTAL
    return [content_width - fixed, COL_W_QTY, COL_W_PRICE, COL_W_TOTAL]


def _columns() -> List[Tuple[float, float]]:
    cols = []
    x = MARGIN
    for w in col_widths():
        cols.append((x, w))
        x += w
    return cols


def _fmt_qty(qty: float) -> str:
    """Format quantity with up to 3 decimals, no trailing zeros."""
    try:
        s = f"{float(qty):.3f}".rstrip("0").rstrip(".")
        return s if s else "0"
    except (TypeError, ValueError):
        return str(qty)


def row_cells(item: LineItem, currency: str) -> List[str]:
    return [
        item.description,
        _fmt_qty(item.quantity),
        fmt_money(item.unit_price, currency),
        fmt_money(item.line_total, currency),
    ]


def _draw_row(cur: PageCursor, cells: Sequence[str], font: str, tag: str, fill: RGB | None = None) -> None:
    baseline = cur.y + (ROW_HEIGHT + pt_to_mm(FONT_SIZE) * CAP_RATIO) / 2
    for (x, w), cell in zip(_columns(), cells):
        cur.emit(Rect(x, cur.y, w, ROW_HEIGHT, fill=fill, stroke=GRID_COLOR, line_width=W_GRID, tag=f"{tag}-cell"))
        text = truncate(cell, font, FONT_SIZE, w - 2 * CELL_PADDING)
        cur.emit(Text(x + w / 2, baseline, text, font, FONT_SIZE, align="center", tag=tag))
    cur.advance(ROW_HEIGHT)


def draw_header_row(cur: PageCursor) -> None:
    _draw_row(cur, HEADERS, FONT_BOLD, "table-header", fill=WHITE)


def draw_item_table(cur: PageCursor, doc: InvoiceDocument) -> float:
    """
    Lay out the item grid: one bold header row per page, then fixed-height data rows.

    A row that would cross the bottom margin moves to a new page (the cursor
    stamps the footer on the page being left) and the header is redrawn first.
    Returns the y just below the last row.
    """
    items = list(doc.line_items)
    # Keep the header together with at least one data row
    cur.ensure_space(ROW_HEIGHT * (2 if items else 1))
    draw_header_row(cur)

    for item in items:
        if cur.ensure_space(ROW_HEIGHT, top_offset=CONTINUATION_TOP):
            draw_header_row(cur)
        _draw_row(cur, row_cells(item, doc.currency_symbol), FONT, "table-row")
    return cur.y
