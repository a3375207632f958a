"""Text measurement providers."""

import logging
from abc import ABC, abstractmethod
from os import path
from typing import Dict, Optional, Set, Tuple
from PIL import ImageFont

from .elements import TextMeasurement, TextStyle


class MetricsProvider(ABC):
    """Measures the rendered size of a string under a text style."""

    @abstractmethod
    def measure(self, text: str, style: TextStyle) -> TextMeasurement:
        ...

    def width(self, text: str, style: TextStyle) -> float:
        return self.measure(text, style).horizontal_slice_width


class PillowMetrics(MetricsProvider):
    """Measure text with Pillow fonts, loading each (family, size) once."""

    def __init__(self, font_dir: Optional[str] = None):
        self.font_dir = font_dir
        self._fonts: Dict[Tuple[str, int], ImageFont.ImageFont] = {}
        self._warned: Set[str] = set()

    def measure(self, text: str, style: TextStyle) -> TextMeasurement:
        font = self.get_font(style)
        width = font.getlength(text)
        if text:
            _, top, _, bottom = font.getbbox(text)
            height = bottom - top
        else:
            bottom = height = 0
        baseline = font.getmetrics()[0] if hasattr(font, 'getmetrics') else bottom
        return TextMeasurement(float(width), float(height), float(baseline))

    def get_font(self, style: TextStyle) -> ImageFont.ImageFont:
        key = (style.font_family, style.font_size)
        if key not in self._fonts:
            self._fonts[key] = self._load_font(*key)
        return self._fonts[key]

    def _load_font(self, family: str, size: int) -> ImageFont.ImageFont:
        if family:
            try:
                return ImageFont.truetype(self._resolve(family), size)
            except OSError:
                if family not in self._warned:
                    self._warned.add(family)
                    logging.warning(f"Font '{family}' could not be loaded, using default font")
        return ImageFont.load_default(size)

    def _resolve(self, family: str) -> str:
        if self.font_dir and not path.isabs(family):
            candidate = path.join(self.font_dir, family)
            if path.exists(candidate):
                return candidate
        return family
