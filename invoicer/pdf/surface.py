from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Tuple
import logging

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from invoicer.pdf.layout import Rect

logger = logging.getLogger(__name__)

LINE_SPACING = 1.2


@dataclass(frozen=True)
class TextStyle:
    font: str = "Helvetica"
    size: float = 10
    color: colors.Color = colors.black
    char_space: float = 0.0

    @property
    def leading(self) -> float:
        return self.size * LINE_SPACING


def text_width(text: str, style: TextStyle) -> float:
    return pdfmetrics.stringWidth(text, style.font, style.size) + style.char_space * len(text)


def _truncate(word: str, max_width: float, style: TextStyle) -> str:
    cut = word
    while cut and text_width(cut + "…", style) > max_width:
        cut = cut[:-1]
    return (cut + "…") if cut else "…"


def wrap_lines(text: str, max_width: float, style: TextStyle) -> List[str]:
    """Greedy word wrap; explicit newlines start new lines, overlong words are cut with an ellipsis."""
    lines: List[str] = []
    for para in (text or "").replace("\r", "").split("\n"):
        words = para.split()
        if not words:
            lines.append("")
            continue
        line: List[str] = []
        for w in words:
            if text_width(w, style) > max_width:
                w = _truncate(w, max_width, style)
            trial = " ".join(line + [w])
            if not line or text_width(trial, style) <= max_width:
                line.append(w)
            else:
                lines.append(" ".join(line))
                line = [w]
        lines.append(" ".join(line))
    return lines


def _image_reader(image: Any) -> ImageReader:
    if isinstance(image, ImageReader):
        return image
    if isinstance(image, (bytes, bytearray)):
        return ImageReader(BytesIO(bytes(image)))
    if isinstance(image, Path):
        return ImageReader(str(image))
    return ImageReader(image)


class Surface:
    """Drawing primitives over a reportlab Canvas in top-down page coordinates.

    Composers and the table engine only talk to this class; it flips y for
    reportlab's bottom-up space and keeps every primitive's graphics state local.
    """

    def __init__(self, canvas: Canvas, page_size: Tuple[float, float]):
        self.canvas = canvas
        self.page_width, self.page_height = float(page_size[0]), float(page_size[1])

    @property
    def page(self) -> Rect:
        return Rect(0.0, 0.0, self.page_width, self.page_height)

    def _y(self, top: float, height: float = 0.0) -> float:
        return self.page_height - top - height

    def fill_rect(self, rect: Rect, color: colors.Color) -> None:
        c = self.canvas
        c.saveState()
        c.setFillColor(color)
        c.rect(rect.x, self._y(rect.y, rect.height), rect.width, rect.height, stroke=0, fill=1)
        c.restoreState()

    def stroke_rect(self, rect: Rect, color: colors.Color, width: float = 1) -> None:
        c = self.canvas
        c.saveState()
        c.setStrokeColor(color)
        c.setLineWidth(width)
        c.rect(rect.x, self._y(rect.y, rect.height), rect.width, rect.height, stroke=1, fill=0)
        c.restoreState()

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, color: colors.Color, width: float = 1) -> None:
        c = self.canvas
        c.saveState()
        c.setStrokeColor(color)
        c.setLineWidth(width)
        c.line(x1, self._y(y1), x2, self._y(y2))
        c.restoreState()

    def draw_text(self, text: str, rect: Rect, style: TextStyle, align: str = "left") -> bool:
        """Draw wrapped text inside rect; return True when some lines did not fit."""
        lines = wrap_lines(text, rect.width, style)
        ascent = pdfmetrics.getAscent(style.font) / 1000.0 * style.size
        fit = max(1, int(rect.height // style.leading)) if rect.height >= style.size else 0
        c = self.canvas
        c.saveState()
        c.setFillColor(style.color)
        c.setFont(style.font, style.size)
        for i, line in enumerate(lines[:fit]):
            baseline = self._y(rect.y + i * style.leading + ascent)
            w = text_width(line, style)
            if align == "right":
                x = rect.max_x - w
            elif align == "center":
                x = rect.x + (rect.width - w) / 2
            else:
                x = rect.x
            c.drawString(x, baseline, line, charSpace=style.char_space)
        c.restoreState()
        return len(lines) > fit

    def draw_image(self, image: Any, rect: Rect, corner: float = 10, stroke: Optional[colors.Color] = None) -> bool:
        """Draw an image clipped to a rounded rect; unreadable images are logged and skipped."""
        if image is None:
            return False
        try:
            reader = _image_reader(image)
        except Exception:
            logger.warning("Skipping unreadable logo image", exc_info=True)
            return False
        c = self.canvas
        x, y = rect.x, self._y(rect.y, rect.height)
        c.saveState()
        path = c.beginPath()
        path.roundRect(x, y, rect.width, rect.height, corner)
        c.clipPath(path, stroke=0, fill=0)
        try:
            c.drawImage(reader, x, y, width=rect.width, height=rect.height,
                        preserveAspectRatio=True, anchor="c", mask="auto")
        except Exception:
            logger.warning("Failed to draw logo image", exc_info=True)
            c.restoreState()
            return False
        c.restoreState()
        if stroke is not None:
            self.stroke_rect(rect, stroke, width=1)
        return True

    def show_page(self) -> None:
        self.canvas.showPage()
