from __future__ import annotations

from typing import List

from invoice_studio.pdf import backend

# Standard PDF fonts; no font files to ship
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"
FONT_BOLD_ITALIC = "Helvetica-BoldOblique"

PT_TO_MM = 25.4 / 72.0


def pt_to_mm(size: float) -> float:
    return size * PT_TO_MM


def measure(text: str, font: str, size: float) -> float:
    """Width of `text` in millimetres at `size` points."""
    backend.require_backend()
    return backend.pdfmetrics.stringWidth(text or "", font, size) * PT_TO_MM


def _wrap_segment(segment: str, font: str, size: float, max_width: float) -> List[str]:
    words = segment.split()
    if not words:
        return [""]
    lines: List[str] = []
    line: List[str] = []
    for w in words:
        trial = " ".join(line + [w])
        if not line or measure(trial, font, size) <= max_width:
            line.append(w)
        else:
            lines.append(" ".join(line))
            line = [w]
    lines.append(" ".join(line))
    return lines


def wrap(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Greedy word wrap.

    Explicit newlines are hard breaks; each segment wraps on its own. A word
    wider than max_width is kept whole on a line of its own.
    """
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    lines: List[str] = []
    for segment in text.split("\n"):
        lines.extend(_wrap_segment(segment, font, size, max_width))
    return lines


def truncate(text: str, font: str, size: float, max_width: float) -> str:
    """Cut `text` to max_width, ending with an ellipsis when shortened."""
    text = text or ""
    if measure(text, font, size) <= max_width:
        return text
    s = text
    while s and measure(s + "…", font, size) > max_width:
        s = s[:-1]
    return (s.rstrip() + "…") if s else "…"
