"""Text style, measurement and element value types."""

from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Optional, Tuple
from PIL import ImageColor

if TYPE_CHECKING:
    from .metrics import MetricsProvider

ELLIPSIS = "..."


class MaxWidthStrategy(Enum):
    NONE = "none"
    ELLIPSIZE = "ellipsize"


class TextDirection(Enum):
    LTR = "ltr"
    RTL = "rtl"


class TextStyle(NamedTuple):
    """Font and colour carried through wrapping unchanged."""
    font_family: str = ""
    font_size: int = 12
    font_weight: str = "normal"
    line_height: Optional[float] = None
    color: Tuple[int, int, int] = (0, 0, 0)

    def with_color(self, value: str) -> "TextStyle":
        """Return a copy using any colour string Pillow understands."""
        return self._replace(color=ImageColor.getrgb(value)[:3])


class TextMeasurement(NamedTuple):
    horizontal_slice_width: float
    vertical_slice_width: float
    baseline: float


class TextElement(NamedTuple):
    """A single renderable line of text.

    ``text`` is derived from ``content`` on every read. With the
    ``ELLIPSIZE`` strategy and a ``max_width`` the content is shortened
    one character at a time and suffixed with an ellipsis until it fits;
    if not even the bare ellipsis fits, the derived text is empty.
    """
    content: str
    style: TextStyle
    metrics: "MetricsProvider"
    max_width: Optional[float] = None
    max_width_strategy: MaxWidthStrategy = MaxWidthStrategy.NONE
    text_direction: TextDirection = TextDirection.LTR

    @property
    def measurement(self) -> TextMeasurement:
        return self.metrics.measure(self.content, self.style)

    @property
    def text(self) -> str:
        if self.max_width_strategy != MaxWidthStrategy.ELLIPSIZE or self.max_width is None:
            return self.content
        return _ellipsize(self.content, self.style, self.metrics, self.max_width)

    def with_max_width(self, max_width: float,
                       strategy: MaxWidthStrategy = MaxWidthStrategy.ELLIPSIZE) -> "TextElement":
        return self._replace(max_width=max_width, max_width_strategy=strategy)

    def with_text(self, text: str) -> "TextElement":
        """Create a fresh element for ``text`` sharing this element's style."""
        return create_text_element(text, self.style, self.metrics, self.text_direction)


def create_text_element(text: str, style: TextStyle, metrics: "MetricsProvider",
                        text_direction: TextDirection = TextDirection.LTR) -> TextElement:
    return TextElement(text, style, metrics, text_direction=text_direction)


def _ellipsize(content: str, style: TextStyle, metrics: "MetricsProvider", max_width: float) -> str:
    width = metrics.width(content, style)
    if width <= max_width or width <= metrics.width(ELLIPSIS, style):
        return content

    for length in range(len(content) - 1, -1, -1):
        candidate = content[:length].rstrip() + ELLIPSIS
        if metrics.width(candidate, style) <= max_width:
            return candidate
    return ""
