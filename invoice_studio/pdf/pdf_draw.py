from __future__ import annotations

import asyncio
import io
import logging
import re
from pathlib import Path
from typing import Optional

import httpx

from invoice_studio.core.settings import Settings
from invoice_studio.data.models import InvoiceDocument
from invoice_studio.pdf import backend
from invoice_studio.pdf.blocks import (
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    draw_copyright,
    draw_header,
    draw_payment_footer,
    draw_recipients,
    draw_summary,
)
from invoice_studio.pdf.commands import RGB, Circle, Image, Line, Rect, RenderedPageSet, Text
from invoice_studio.pdf.cursor import PageCursor
from invoice_studio.pdf.logo import Logo, LogoSource, LogoUnavailable, resolve_logo
from invoice_studio.pdf.table_layout import draw_item_table

logger = logging.getLogger(__name__)


# ===== Layout =====
def layout_document(doc: InvoiceDocument, logo: Optional[Logo] = None, settings: Optional[Settings] = None) -> RenderedPageSet:
    """Lay out a complete document into pages of draw commands.

    Order is fixed: header (logo, company, banner, amount due), recipients,
    item table, summary grid, payment instructions, then the footer stamp on
    the last page. Every page carries exactly one footer stamp.
    """
    backend.require_backend()
    settings = settings or Settings()
    logo = logo if logo is not None else LogoUnavailable("no logo")

    cur = PageCursor(PAGE_WIDTH, PAGE_HEIGHT, MARGIN, footer=lambda c: draw_copyright(c, settings))
    draw_header(cur, doc, settings, logo)
    draw_recipients(cur, doc)
    draw_item_table(cur, doc)
    draw_summary(cur, doc)
    draw_payment_footer(cur, settings)
    return cur.finish()


# ===== PDF output =====
def _color(rgb: RGB):
    r, g, b = rgb
    return backend.colors.Color(r / 255.0, g / 255.0, b / 255.0)


def _draw_command(c, cmd, page_h: float) -> None:
    mm = backend.mm
    if isinstance(cmd, Text):
        c.setFillColor(_color(cmd.color))
        c.setFont(cmd.font, cmd.size)
        x, y = cmd.x * mm, page_h - cmd.y * mm
        if cmd.align == "right":
            c.drawRightString(x, y, cmd.text)
        elif cmd.align == "center":
            c.drawCentredString(x, y, cmd.text)
        else:
            c.drawString(x, y, cmd.text)
    elif isinstance(cmd, Line):
        c.setStrokeColor(_color(cmd.color))
        c.setLineWidth(cmd.width * mm)
        c.line(cmd.x1 * mm, page_h - cmd.y1 * mm, cmd.x2 * mm, page_h - cmd.y2 * mm)
    elif isinstance(cmd, Rect):
        if cmd.fill is not None:
            c.setFillColor(_color(cmd.fill))
        if cmd.stroke is not None:
            c.setStrokeColor(_color(cmd.stroke))
            c.setLineWidth(cmd.line_width * mm)
        c.rect(cmd.x * mm, page_h - (cmd.y + cmd.h) * mm, cmd.w * mm, cmd.h * mm,
               stroke=int(cmd.stroked), fill=int(cmd.filled))
    elif isinstance(cmd, Circle):
        if cmd.fill is not None:
            c.setFillColor(_color(cmd.fill))
        if cmd.stroke is not None:
            c.setStrokeColor(_color(cmd.stroke))
            c.setLineWidth(cmd.line_width * mm)
        c.circle(cmd.cx * mm, page_h - cmd.cy * mm, cmd.r * mm,
                 stroke=int(cmd.stroke is not None), fill=int(cmd.fill is not None))
    elif isinstance(cmd, Image):
        c.drawImage(
            backend.ImageReader(io.BytesIO(cmd.data)),
            cmd.x * mm,
            page_h - (cmd.y + cmd.h) * mm,
            width=cmd.w * mm,
            height=cmd.h * mm,
            preserveAspectRatio=True,
            mask="auto",
        )
    else:
        raise TypeError(f"Unknown draw command: {cmd!r}")


def write_pdf(pages: RenderedPageSet, out_path: Path | str, title: str = "", author: str = "") -> Path:
    """Serialize a RenderedPageSet to a PDF file with ReportLab."""
    backend.require_backend()
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    page_w, page_h = pages.width * backend.mm, pages.height * backend.mm
    c = backend.Canvas(str(out), pagesize=(page_w, page_h))
    if author:
        c.setAuthor(author)
    if title:
        c.setTitle(title)
    for page in pages:
        for cmd in page.commands:
            _draw_command(c, cmd, page_h)
        c.showPage()
    c.save()
    return out


def safe_filename(name: str) -> str:
    # strip characters not allowed on Windows/mac paths
    return re.sub(r'[\\/*?:"<>|]', "", (name or "")).strip() or "document.pdf"


# ===== Public API =====
async def render(
    doc: InvoiceDocument,
    logo_source: Optional[LogoSource] = None,
    out_dir: Path | str | None = None,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Path:
    """Render `doc` to '{type}_{number}.pdf' in `out_dir` and return the path.

    Raises DrawingBackendUnavailable if ReportLab is missing. Logo problems
    never fail the render; the placeholder is drawn instead.
    """
    backend.require_backend()
    settings = settings or Settings()
    logger.info("Rendering %s %s", doc.document_type.value, doc.document_number)

    logo = await resolve_logo(logo_source, client)
    pages = layout_document(doc, logo, settings)

    folder = Path(out_dir or settings.output_dir or ".")
    out = write_pdf(
        pages,
        folder / safe_filename(doc.file_name),
        title=f"{doc.document_type.value.title()} {doc.document_number}",
        author=settings.company_name,
    )
    logger.info("PDF built: %s (%s page(s))", out, len(pages))
    return out


def render_sync(doc: InvoiceDocument, logo_source: Optional[LogoSource] = None, **kwargs) -> Path:
    return asyncio.run(render(doc, logo_source, **kwargs))
