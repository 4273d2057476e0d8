from __future__ import annotations

try:
    from reportlab.lib import colors
    from reportlab.lib.units import mm
    from reportlab.lib.utils import ImageReader
    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfgen.canvas import Canvas
except ImportError:  # reported when a render is attempted
    colors = mm = ImageReader = pdfmetrics = Canvas = None  # type: ignore


class DrawingBackendUnavailable(RuntimeError):
    """ReportLab could not be loaded, so nothing can be measured or drawn."""


def require_backend() -> None:
    if pdfmetrics is None or Canvas is None:
        raise DrawingBackendUnavailable(
            "ReportLab is not installed; install the 'reportlab' package to render PDFs"
        )
