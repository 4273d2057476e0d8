from __future__ import annotations

import asyncio
import math

import httpx
import pytest

from conftest import make_doc, many_items
from invoice_studio.core.settings import Settings
from invoice_studio.data.models import DocumentType, LineItem, Party, TaxLine
from invoice_studio.form.state import InvoiceForm
from invoice_studio.pdf.blocks import (
    RECIPIENT_GAP,
    RECIPIENT_PITCH,
    RECIPIENT_TITLE_GAP,
    draw_recipients,
)
from invoice_studio.pdf.commands import Circle, Image
from invoice_studio.pdf.cursor import PageCursor
from invoice_studio.pdf.logo import FetchByUrl, InlineBytes, LogoUnavailable, resolve_logo
from invoice_studio.pdf.pdf_draw import layout_document


def _values(page):
    return [t.text for t in page.texts("summary-value")]


def _footer_count(page) -> int:
    return len(page.texts("footer"))


def test_single_item_scenario() -> None:
    doc = InvoiceForm().to_document()

    pages = layout_document(doc, LogoUnavailable())

    assert len(pages) == 1
    page = pages.pages[0]
    assert _values(page) == ["US$673.00", "N/A", "US$33.65", "US$47.11", "US$753.76"]
    assert [t.text for t in page.texts("summary-label")][-1] == "TOTAL DUE"
    assert _footer_count(page) == 1
    assert page.texts("amount-due")[0].text == "Amount Due: US$753.76"


def test_forty_items_span_pages_with_header_and_footer_each() -> None:
    doc = make_doc(items=many_items(40))

    pages = layout_document(doc)

    assert len(pages) >= 2
    rows = []
    for page in pages:
        descriptions = [t.text for t in page.texts("table-row") if t.text.startswith("Part ")]
        headers = [t for t in page.texts("table-header") if t.text == "DESCRIPTION"]
        if descriptions:
            assert len(headers) == 1
            # header sits above every data row on the page
            first_row_y = min(t.y for t in page.texts("table-row"))
            assert headers[0].y < first_row_y
        rows.extend(descriptions)
        assert _footer_count(page) == 1
    assert rows == [f"Part {i:02d}" for i in range(40)]


def test_rows_never_cross_bottom_margin() -> None:
    pages = layout_document(make_doc(items=many_items(75)))

    for page in pages:
        for cell in page.tagged("table-row-cell") + page.tagged("table-header-cell"):
            assert cell.y + cell.h <= pages.height - 20 + 1e-9


def test_empty_items_render_header_only() -> None:
    doc = make_doc(items=())

    pages = layout_document(doc)

    assert len(pages) == 1
    page = pages.pages[0]
    assert [t.text for t in page.texts("table-header")] == ["DESCRIPTION", "TOTAL QTY", "UNIT PRICE", "TOTAL"]
    assert page.texts("table-row") == []
    assert _values(page)[0] == "US$0.00"


@pytest.mark.parametrize("shipping, expected", [(0.0, "N/A"), (12.5, "US$12.50"), (1234.5, "US$1234.50")])
def test_shipping_cell(shipping: float, expected: str) -> None:
    page = layout_document(make_doc(shipping=shipping)).pages[0]

    assert _values(page)[1] == expected


def test_grand_total_rendered_verbatim() -> None:
    doc = make_doc(grand_total=1.5, subtotal=99.0)

    page = layout_document(doc).pages[0]

    assert _values(page)[0] == "US$99.00"
    assert _values(page)[-1] == "US$1.50"
    assert page.texts("amount-due")[0].text == "Amount Due: US$1.50"


def test_recipient_columns_share_advance() -> None:
    full = Party("Acme Corp", "1 Main St", "555-0100", "ap@acme.test")
    short = Party("Solo")

    def advance(billing: Party, shipping: Party) -> float:
        cur = PageCursor(210, 297, 20)
        cur.y = 80.0
        return draw_recipients(cur, make_doc(billing=billing, shipping_party=shipping)) - 80.0

    expected = RECIPIENT_TITLE_GAP + 4 * RECIPIENT_PITCH + RECIPIENT_GAP
    assert math.isclose(advance(full, short), expected)
    assert math.isclose(advance(short, full), expected)


def test_recipient_columns_start_on_same_line() -> None:
    page = layout_document(make_doc()).pages[0]

    billing = page.texts("recipient-billing")
    shipping = page.texts("recipient-shipping")
    assert billing[0].y == shipping[0].y
    assert billing[1].y == shipping[1].y
    assert [t.text for t in billing[1:]] == ["Acme Corp", "1 Main St", "Phone 555-0100", "ap@acme.test"]


def test_long_address_wraps_inside_column() -> None:
    billing = Party("Acme Corp", "Unit 12, " + "Very Long Industrial Park Road " * 4)
    page = layout_document(make_doc(billing=billing)).pages[0]

    lines = page.texts("recipient-billing")[1:]
    assert len(lines) > 3


def test_company_block_position_independent_of_logo(png_bytes: bytes) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    async def resolve_failing():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fail)) as client:
            return await resolve_logo(FetchByUrl("https://logo.test/logo.png"), client)

    failed = asyncio.run(resolve_failing())
    loaded = asyncio.run(resolve_logo(InlineBytes(png_bytes)))
    assert isinstance(failed, LogoUnavailable)

    page_failed = layout_document(make_doc(), failed).pages[0]
    page_loaded = layout_document(make_doc(), loaded).pages[0]

    assert [t.y for t in page_failed.texts("company")] == [t.y for t in page_loaded.texts("company")]
    assert any(isinstance(c, Circle) for c in page_failed.commands)
    assert any(isinstance(c, Image) for c in page_loaded.commands)
    assert not any(isinstance(c, Image) for c in page_failed.commands)


def test_quote_uses_quote_prefix() -> None:
    doc = make_doc(doc_type=DocumentType.QUOTE, document_number="2026101907Q")

    page = layout_document(doc).pages[0]

    assert page.texts("banner")[0].text == "QUOTE"
    assert page.texts("meta")[0].text == "QUO# 2026101907Q"
    assert doc.file_name == "QUOTE_2026101907Q.pdf"


def test_long_description_truncated_to_column() -> None:
    doc = make_doc(items=[LineItem("Extended warranty " * 20, 1, 5.0, 5.0)])

    page = layout_document(doc).pages[0]

    desc = page.texts("table-row")[0]
    assert desc.text.endswith("…")
    assert len(desc.text) < len("Extended warranty " * 20)


def test_summary_moves_to_new_page_when_it_does_not_fit() -> None:
    pages = layout_document(make_doc(items=many_items(40)))

    last = pages.pages[-1]
    summary = last.tagged("summary")
    assert len(summary) == 5
    assert all(_footer_count(p) == 1 for p in pages)
    # the whole grid stays together on one page
    assert sum(len(p.tagged("summary")) for p in pages) == 5


def test_payment_footer_never_above_minimum() -> None:
    settings = Settings()
    page = layout_document(make_doc(), settings=settings).pages[0]

    payment = page.texts("payment")
    assert min(t.y for t in payment) == pytest.approx(297 - 45)
    assert payment[1].text == settings.company_name
    assert page.texts("thank-you")[0].text == "THANK YOU FOR YOUR BUSINESS!"


def test_long_tax_list_flows_across_pages_within_margins() -> None:
    taxes = tuple(TaxLine(f"LEVY {i:02d}", 1.0, 0.5) for i in range(40))
    doc = make_doc(taxes=taxes)

    pages = layout_document(doc)
    bottom = pages.height - 20

    assert len(pages) >= 2
    labels = []
    for page in pages:
        for rect in page.tagged("summary"):
            assert rect.y + rect.h <= bottom + 1e-9
        for text in page.texts("payment") + page.texts("thank-you"):
            assert text.y <= bottom
        labels.extend(t.text for t in page.texts("summary-label"))
        assert _footer_count(page) == 1
    assert labels == ["SUBTOTAL", "SHIPPING"] + [f"LEVY {i:02d}" for i in range(40)] + ["TOTAL DUE"]
    assert len(pages.pages[-1].texts("thank-you")) == 1
