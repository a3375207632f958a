"""Fitting label text into a box."""

import logging
import math
from collections import deque
from typing import Callable, Deque, List, Optional

from .elements import ELLIPSIS, MaxWidthStrategy, TextElement, TextStyle
from .metrics import MetricsProvider

# Line height used when a style carries none, as a multiple of font size.
DEFAULT_LINE_HEIGHT_FACTOR = 1.2


class InvalidConstraintError(ValueError):
    """Raised when a wrap box has a non-positive dimension."""


def wrap_label_lines(element: TextElement, metrics: MetricsProvider, max_width: float, max_height: float,
                     *, allow_overflow: bool, multiline: bool) -> List[TextElement]:
    """Split a label into lines that fit a ``max_width`` x ``max_height`` box.

    Returns the lines top to bottom. An empty list means the label does not
    fit and must not be shown.
    """
    if max_width <= 0 or max_height <= 0:
        raise InvalidConstraintError(f"Box must be positive, got {max_width} x {max_height}")

    if not element.content:
        return [element]

    # Derived lines and ellipsis are measured with the same provider as the fit checks
    source = element._replace(metrics=metrics)
    words = element.content.split()
    if not multiline or not words:
        return _fit_single_line(element, source, max_width, allow_overflow)

    style = element.style

    def fits(text: str) -> bool:
        return metrics.width(text, style) <= max_width

    max_lines = line_budget(style, max_height)
    limit = None if allow_overflow else max_lines
    lines = _create_lines(words, fits, limit, allow_overflow)
    logging.debug(f"Wrapped '{element.content}' into {len(lines)} line(s), budget {max_lines}")
    return [source.with_text(line) for line in lines]


def line_budget(style: TextStyle, max_height: float) -> int:
    """Number of lines of ``style`` that fit in ``max_height``, at least one."""
    if style.line_height is not None:
        line_height = style.line_height
    else:
        line_height = style.font_size * DEFAULT_LINE_HEIGHT_FACTOR
    if line_height <= 0:
        return 1
    return max(1, math.floor(max_height / line_height))


def _fit_single_line(element: TextElement, source: TextElement, max_width: float,
                     allow_overflow: bool) -> List[TextElement]:
    """Keep the label whole, ellipsize it, or drop it."""
    metrics = source.metrics
    width = metrics.width(element.content, element.style)
    if width <= max_width or allow_overflow:
        return [element]
    if width <= metrics.width(ELLIPSIS, element.style):
        return [element]

    ellipsized = source.with_max_width(max_width, MaxWidthStrategy.ELLIPSIZE)
    if not ellipsized.text:
        logging.debug(f"Label '{element.content}' does not fit {max_width}, not even as an ellipsis")
        return []
    return [ellipsized]


def _create_lines(words: List[str], fits: Callable[[str], bool], limit: Optional[int],
                  allow_overflow: bool) -> List[str]:
    """Greedily pack words into lines, splitting words too long for any line."""
    lines = []
    pending: Deque[str] = deque(words)
    current = ""

    while pending and (limit is None or len(lines) < limit):
        word = pending.popleft()
        candidate = f"{current} {word}" if current else word
        if fits(candidate):
            current = candidate
            continue

        if current:
            # Close the line and retry the word on a fresh one
            lines.append(current)
            current = ""
            pending.appendleft(word)
            continue

        head = _longest_fitting_prefix(word, fits)
        if not head:
            if not allow_overflow:
                logging.debug(f"Character '{word[0]}' is wider than the box, giving up")
                return lines
            head = word[0]
        lines.append(head)
        if word[len(head):]:
            pending.appendleft(word[len(head):])

    if current and (limit is None or len(lines) < limit):
        lines.append(current)
    return lines


def _longest_fitting_prefix(word: str, fits: Callable[[str], bool]) -> str:
    """Grow a prefix of ``word`` one character at a time while it still fits."""
    length = 0
    while length < len(word) - 1 and fits(word[:length + 1]):
        length += 1
    return word[:length]
