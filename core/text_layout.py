"""
Text measurement for overlays
=============================

Label-style layout on Pillow fonts:
- fixed base font size (30 by default)
- shrink-to-fit down to ``min_scale`` of the base size before wrapping
- word wrapping at the max width, overlong words broken by character
- explicit line breaks preserved
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from PIL import ImageFont

from core.geometry import Size

DEFAULT_FONT_SIZE = 30
DEFAULT_MIN_SCALE = 0.5
FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf")

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def load_font(size: int, font_path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, falling back to Pillow's bundled face."""
    candidates = ([font_path] if font_path else []) + list(FALLBACK_FONTS)
    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    if font_path:
        logger.warning("font %s not found, using Pillow default", font_path)
    return ImageFont.load_default(size=size)


def _break_word(word: str, max_width: float, font) -> List[str]:
    pieces = []
    chunk = ""
    for ch in word:
        if chunk and font.getlength(chunk + ch) > max_width:
            pieces.append(chunk)
            chunk = ch
        else:
            chunk += ch
    pieces.append(chunk)
    return pieces


def wrap_text(text: str, max_width: float, font) -> List[str]:
    """Word-wrap ``text`` to ``max_width`` pixels, keeping user line breaks."""
    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            test_line = f"{current} {word}" if current else word
            if font.getlength(test_line) <= max_width:
                current = test_line
                continue
            if current:
                lines.append(current)
            pieces = _break_word(word, max_width, font)
            lines.extend(pieces[:-1])
            current = pieces[-1]
        lines.append(current)
    return lines


@dataclass(frozen=True)
class TextLayout:
    lines: Tuple[str, ...]
    font_size: int
    line_height: int
    size: Size


class TextMeasurer:
    def __init__(self, font_size: int = DEFAULT_FONT_SIZE,
                 min_scale: float = DEFAULT_MIN_SCALE,
                 font_path: Optional[str] = None):
        if font_size <= 0:
            raise ValueError(f"font_size must be positive, got {font_size}")
        if not 0.0 < min_scale <= 1.0:
            raise ValueError(f"min_scale must be in (0, 1], got {min_scale}")
        self.font_size = font_size
        self.min_scale = min_scale
        self.font_path = font_path

    @property
    def min_font_size(self) -> int:
        return max(1, math.ceil(self.font_size * self.min_scale))

    def font(self, size: int):
        return load_font(size, self.font_path)

    @staticmethod
    def line_height(font) -> int:
        ascent, descent = font.getmetrics()
        return ascent + descent

    def _widest(self, paragraphs: Sequence[str], font) -> float:
        return max(font.getlength(p) for p in paragraphs)

    def measure(self, text: str, max_width: float,
                max_height: Optional[float] = None) -> TextLayout:
        """Lay out ``text`` inside ``max_width`` (and optionally ``max_height``).

        The font shrinks one point at a time until every paragraph fits on a
        single line or the minimum scale is reached; whatever still overflows
        is wrapped. Lines past ``max_height`` are dropped.
        """
        if max_width <= 0:
            raise ValueError(f"max_width must be positive, got {max_width}")
        paragraphs = text.split("\n")
        size = self.font_size
        while size > self.min_font_size and self._widest(paragraphs, self.font(size)) > max_width:
            size -= 1
        font = self.font(size)

        lines = wrap_text(text, max_width, font)
        line_h = self.line_height(font)
        if max_height is not None:
            keep = max(1, int(max_height // line_h))
            if keep < len(lines):
                logger.debug("truncating overlay text to %d of %d lines", keep, len(lines))
                lines = lines[:keep]

        width = min(max_width, math.ceil(max(font.getlength(line) for line in lines)))
        height = line_h * len(lines)
        if max_height is not None:
            height = min(max_height, height)
        return TextLayout(tuple(lines), size, line_h, Size(width, height))
