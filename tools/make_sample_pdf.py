from __future__ import annotations

from pathlib import Path
import sys

# Ensure project root is on sys.path when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoice_studio.data.models import DocumentType
from invoice_studio.form.state import InvoiceForm
from invoice_studio.pdf.logo import NoLogo
from invoice_studio.pdf.pdf_draw import render_sync

# Generates a one-page sample invoice and a multi-page sample quote for README/demo purposes.


def main() -> None:
    out_dir = ROOT / "assets" / "samples"

    form = InvoiceForm()
    form.set_billing(company_name="(Customer Name)", address="(Street)\n(City)", phone="(redacted)", email="(redacted)")
    invoice = render_sync(form.to_document(), NoLogo(), out_dir=out_dir)

    form.set_document_type(DocumentType.QUOTE)
    form.set_shipping_cost(25)
    for i in range(39):
        form.add_item(f"Sample component {i + 1}", quantity=i % 4 + 1, unit_price=12.5)
    quote = render_sync(form.to_document(), NoLogo(), out_dir=out_dir)

    print(f"Wrote samples to: {invoice} and {quote}")


if __name__ == "__main__":
    main()
