from __future__ import annotations

# Allow running this file directly (python invoice_studio/main.py) by ensuring the project root is on sys.path
import os
import sys
if __package__ in (None, ""):
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from invoice_studio.core.settings import load_settings
from invoice_studio.data.models import InvoiceDocument
from invoice_studio.pdf.logo import FetchByUrl, InlineBytes, NoLogo
from invoice_studio.pdf.pdf_draw import render_sync

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render an invoice or quote JSON document to PDF.")
    p.add_argument("document", type=Path, help="JSON file in the InvoiceDocument.to_dict() shape")
    p.add_argument("--out", type=Path, default=None, help="output directory")
    p.add_argument("--settings", type=Path, default=None, help="settings.json to use")
    logo = p.add_mutually_exclusive_group()
    logo.add_argument("--logo-url", default=None, help="fetch the logo from this URL")
    logo.add_argument("--logo-file", type=Path, default=None, help="read the logo from a local image")
    logo.add_argument("--no-logo", action="store_true", help="draw the placeholder glyph")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.settings)

    if args.no_logo:
        source = NoLogo()
    elif args.logo_file:
        source = InlineBytes(args.logo_file.read_bytes())
    elif args.logo_url or settings.logo_url:
        source = FetchByUrl(args.logo_url or settings.logo_url)
    else:
        source = NoLogo()

    try:
        with args.document.open("r", encoding="utf-8") as f:
            doc = InvoiceDocument.from_dict(json.load(f))
        out = render_sync(doc, source, out_dir=args.out, settings=settings)
    except Exception:
        logger.exception("Failed to generate PDF for %s", args.document)
        return 1
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
