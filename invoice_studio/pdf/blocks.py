from __future__ import annotations

from typing import List, Tuple

from invoice_studio.core.currency import fmt_money
from invoice_studio.core.settings import Settings
from invoice_studio.data.models import InvoiceDocument
from invoice_studio.pdf.commands import BLACK, RGB, WHITE, Circle, Image, Line, Rect, Text
from invoice_studio.pdf.cursor import PageCursor
from invoice_studio.pdf.logo import Logo, LogoBytes
from invoice_studio.pdf.metrics import FONT, FONT_BOLD, FONT_BOLD_ITALIC, FONT_ITALIC, measure, wrap


# ===== Layout constants (millimetres, top-left origin) =====
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
RIGHT_X = PAGE_WIDTH - MARGIN

# Logo band is reserved whether or not an image was drawn
LOGO_SIZE = 16.0
LOGO_BAND = 20.0

COMPANY_NAME_SIZE = 10
COMPANY_TEXT_SIZE = 9
COMPANY_NAME_PITCH = 5.0
COMPANY_LINE_PITCH = 4.0

BANNER_TOP = MARGIN + 10
BANNER_SIZE = 32
BANNER_META_GAP = 15.0
META_SIZE = 9
META_PITCH = 4.5

AMOUNT_BOX_W = 60.0
AMOUNT_BOX_H = 10.0
AMOUNT_BOX_GAP = 4.0
AMOUNT_SIZE = 11
HEADER_BOTTOM_GAP = 6.0

RECIPIENT_TITLE_SIZE = 10.5
RECIPIENT_TEXT_SIZE = 9.5
RECIPIENT_TITLE_GAP = 6.0
RECIPIENT_PITCH = 4.8
RECIPIENT_GAP = 8.0
RECIPIENT_INSET = 10.0

SUMMARY_ROW_H = 7.0
SUMMARY_W = 59.0
SUMMARY_LABEL_INSET = 4.0
SUMMARY_VALUE_INSET = 2.0
SUMMARY_BASELINE = 4.8
SUMMARY_SIZE = 9
SUMMARY_CONTINUATION_TOP = 5.0

PAYMENT_GAP = 10.0
PAYMENT_MIN_FROM_BOTTOM = 45.0
PAYMENT_SIZE = 9
PAYMENT_PITCH = 5.0
THANK_YOU_OFFSET = 24.0
THANK_YOU_SIZE = 12
PAYMENT_HEIGHT = THANK_YOU_OFFSET

FOOTER_FROM_BOTTOM = 12.0
FOOTER_PITCH = 3.0
FOOTER_SIZE = 7

# Colors
BRAND_BLUE: RGB = (0, 86, 179)
PALE_GRAY: RGB = (200, 200, 200)
BOX_GRAY: RGB = (180, 180, 180)
SUMMARY_RULE: RGB = (210, 210, 210)
MUTED: RGB = (80, 80, 80)
FOOTER_GRAY: RGB = (150, 150, 150)
TAX_TINT: RGB = (248, 250, 253)
TOTAL_TINT: RGB = (232, 238, 247)


# ===== Header =====
def draw_logo(cur: PageCursor, logo: Logo) -> float:
    """Logo image, or the round placeholder glyph; always reserves LOGO_BAND."""
    x, top = MARGIN, cur.y
    if isinstance(logo, LogoBytes):
        scale = min(LOGO_SIZE / logo.width, LOGO_SIZE / logo.height)
        w, h = logo.width * scale, logo.height * scale
        cur.emit(Image(x, top, w, h, logo.data))
    else:
        cx, cy = x + LOGO_SIZE / 2, top + LOGO_SIZE / 2
        cur.emit(Circle(cx, cy, LOGO_SIZE / 2, fill=BRAND_BLUE))
        for dy in (-2.0, 0.0, 2.0):
            cur.emit(Line(cx - 3, cy + dy, cx + 3, cy + dy, width=0.5, color=WHITE))
        cur.emit(Circle(cx - 1.5, cy, 1.0, stroke=WHITE))
        cur.emit(Circle(cx + 1.5, cy - 2, 1.0, stroke=WHITE))
    return cur.advance(LOGO_BAND)


def draw_company(cur: PageCursor, settings: Settings) -> float:
    """Left stack: bold company name, then address, city, email and business number."""
    x = MARGIN
    cur.emit(Text(x, cur.y, settings.company_name, FONT_BOLD, COMPANY_NAME_SIZE, tag="company"))
    cur.advance(COMPANY_NAME_PITCH)
    rows: List[Tuple[str, RGB]] = [
        (settings.company_address, BLACK),
        (settings.company_city, BLACK),
        (settings.company_email, BRAND_BLUE),
        (f"Business Number: {settings.business_number}", BLACK),
    ]
    for i, (text, color) in enumerate(rows):
        if i:
            cur.advance(COMPANY_LINE_PITCH)
        cur.emit(Text(x, cur.y, text, FONT, COMPANY_TEXT_SIZE, color, tag="company"))
    return cur.y


def draw_banner(cur: PageCursor, doc: InvoiceDocument) -> float:
    """Right column: pale document-type word, then number and dates. Does not move the cursor."""
    y = BANNER_TOP
    cur.emit(Text(RIGHT_X, y, doc.document_type.value, FONT, BANNER_SIZE, PALE_GRAY, "right", tag="banner"))
    y += BANNER_META_GAP
    meta = [
        f"{doc.document_type.number_label} {doc.document_number}",
        f"DATE: {doc.issue_date}",
        f"DATE DUE: {doc.due_date}",
    ]
    for i, text in enumerate(meta):
        if i:
            y += META_PITCH
        cur.emit(Text(RIGHT_X, y, text, FONT_BOLD, META_SIZE, align="right", tag="meta"))
    return y


def draw_amount_due(cur: PageCursor, doc: InvoiceDocument, top: float) -> float:
    x = RIGHT_X - AMOUNT_BOX_W
    cur.emit(Rect(x, top, AMOUNT_BOX_W, AMOUNT_BOX_H, stroke=BOX_GRAY, line_width=0.4, tag="amount-due"))
    label = f"Amount Due: {fmt_money(doc.grand_total, doc.currency_symbol)}"
    cur.emit(Text(x + AMOUNT_BOX_W / 2, top + 6.5, label, FONT_BOLD, AMOUNT_SIZE, align="center", tag="amount-due"))
    return top + AMOUNT_BOX_H


def draw_header(cur: PageCursor, doc: InvoiceDocument, settings: Settings, logo: Logo) -> float:
    """Logo, company, banner and amount-due box; leaves the cursor below all of them."""
    draw_logo(cur, logo)
    company_bottom = draw_company(cur, settings)
    banner_bottom = draw_banner(cur, doc)
    box_bottom = draw_amount_due(cur, doc, max(company_bottom, banner_bottom) + AMOUNT_BOX_GAP)
    cur.y = box_bottom + HEADER_BOTTOM_GAP
    return cur.y


# ===== Recipients =====
def recipient_lines(text: str) -> List[str]:
    return wrap(text, FONT, RECIPIENT_TEXT_SIZE, CONTENT_WIDTH / 2 - RECIPIENT_INSET)


def draw_recipients(cur: PageCursor, doc: InvoiceDocument) -> float:
    """Billing and shipping columns; both share one vertical advance."""
    col_w = CONTENT_WIDTH / 2
    columns = [
        (MARGIN, "BILLING RECIPIENT", doc.billing_party, "billing"),
        (MARGIN + col_w, "SHIPPING RECIPIENT", doc.shipping_party, "shipping"),
    ]
    for x, title, _party, name in columns:
        cur.emit(Text(x, cur.y, title, FONT_BOLD, RECIPIENT_TITLE_SIZE, tag=f"recipient-{name}"))
    cur.advance(RECIPIENT_TITLE_GAP)

    counts = []
    for x, _title, party, name in columns:
        lines = recipient_lines("\n".join(party.lines()))
        counts.append(len(lines))
        for i, ln in enumerate(lines):
            cur.emit(Text(x, cur.y + i * RECIPIENT_PITCH, ln, FONT, RECIPIENT_TEXT_SIZE, tag=f"recipient-{name}"))
    return cur.advance(max(counts) * RECIPIENT_PITCH + RECIPIENT_GAP)


# ===== Summary =====
def summary_rows(doc: InvoiceDocument) -> List[Tuple[str, str, str]]:
    """(label, value, kind) rows; kind is 'plain', 'tax' or 'total'."""
    sym = doc.currency_symbol
    shipping = "N/A" if doc.shipping_cost == 0 else fmt_money(doc.shipping_cost, sym)
    rows = [
        ("SUBTOTAL", fmt_money(doc.subtotal, sym), "plain"),
        ("SHIPPING", shipping, "plain"),
    ]
    rows.extend((tax.label, fmt_money(tax.amount, sym), "tax") for tax in doc.taxes)
    rows.append(("TOTAL DUE", fmt_money(doc.grand_total, sym), "total"))
    return rows


def summary_height(doc: InvoiceDocument) -> float:
    return len(summary_rows(doc)) * SUMMARY_ROW_H


def draw_summary(cur: PageCursor, doc: InvoiceDocument) -> float:
    """Right-anchored totals grid, moved whole to a new page if it (and the payment block) won't fit.

    A grid taller than a fresh page can hold is the one exception: its rows
    then continue on following pages one at a time.
    """
    rows = summary_rows(doc)
    block = summary_height(doc) + PAYMENT_GAP + PAYMENT_HEIGHT
    fresh_page = cur.bottom - cur.margin - SUMMARY_CONTINUATION_TOP
    cur.ensure_space(min(block, fresh_page), top_offset=SUMMARY_CONTINUATION_TOP)

    left = RIGHT_X - SUMMARY_W
    label_x = left + SUMMARY_LABEL_INSET
    for label, value, kind in rows:
        cur.ensure_space(SUMMARY_ROW_H, top_offset=SUMMARY_CONTINUATION_TOP)
        fill = {"tax": TAX_TINT, "total": TOTAL_TINT}.get(kind)
        cur.emit(Rect(left, cur.y, SUMMARY_W, SUMMARY_ROW_H, fill=fill, stroke=SUMMARY_RULE, tag="summary"))
        font = FONT_ITALIC if kind == "tax" else FONT_BOLD
        color = MUTED if kind == "tax" else BLACK
        base = cur.y + SUMMARY_BASELINE
        cur.emit(Text(label_x, base, label, font, SUMMARY_SIZE, color, tag="summary-label"))
        cur.emit(Text(RIGHT_X - SUMMARY_VALUE_INSET, base, value, font, SUMMARY_SIZE, align="right", tag="summary-value"))
        cur.advance(SUMMARY_ROW_H)
    return cur.y


# ===== Footers =====
def _label_value(cur: PageCursor, y: float, label: str, value: str, font: str, color: RGB) -> None:
    cur.emit(Text(MARGIN, y, label, FONT, PAYMENT_SIZE, tag="payment"))
    if value:
        x = MARGIN + measure(label, FONT, PAYMENT_SIZE)
        cur.emit(Text(x, y, value, font, PAYMENT_SIZE, color, tag="payment"))


def draw_payment_footer(cur: PageCursor, settings: Settings) -> float:
    """Payment instructions and thank-you; floats after content but never above PAYMENT_MIN_FROM_BOTTOM."""
    cur.ensure_space(PAYMENT_GAP + PAYMENT_HEIGHT)
    y = max(cur.y + PAYMENT_GAP, cur.page_height - PAYMENT_MIN_FROM_BOTTOM)
    _label_value(cur, y, "Make all checks payable to ", settings.company_name, FONT_BOLD, BLACK)
    if settings.etransfer_email:
        _label_value(cur, y + PAYMENT_PITCH, "Interac e-Transfer: ", settings.etransfer_email, FONT, BRAND_BLUE)
    if settings.pos_note:
        cur.emit(Text(MARGIN, y + 2 * PAYMENT_PITCH, settings.pos_note, FONT, PAYMENT_SIZE, tag="payment"))
    cur.emit(Text(cur.page_width / 2, y + THANK_YOU_OFFSET, settings.thank_you, FONT_BOLD_ITALIC, THANK_YOU_SIZE,
                  align="center", tag="thank-you"))
    cur.y = y + PAYMENT_HEIGHT
    return cur.y


def draw_copyright(cur: PageCursor, settings: Settings) -> None:
    """Footer stamp: legal line and site line, right-aligned near the page bottom."""
    y = cur.page_height - FOOTER_FROM_BOTTOM
    cur.emit(Text(RIGHT_X, y, settings.copyright_line, FONT, FOOTER_SIZE, FOOTER_GRAY, "right", tag="footer"))
    cur.emit(Text(RIGHT_X, y + FOOTER_PITCH, settings.site_line, FONT, FOOTER_SIZE, BRAND_BLUE, "right", tag="footer-site"))
