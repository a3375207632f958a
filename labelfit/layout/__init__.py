"""Label text layout: measuring, ellipsizing and wrapping."""

from .elements import (ELLIPSIS, MaxWidthStrategy, TextDirection, TextElement, TextMeasurement, TextStyle,
                       create_text_element)
from .metrics import MetricsProvider, PillowMetrics
from .text import DEFAULT_LINE_HEIGHT_FACTOR, InvalidConstraintError, line_budget, wrap_label_lines

__all__ = ['ELLIPSIS', 'MaxWidthStrategy', 'TextDirection', 'TextElement', 'TextMeasurement', 'TextStyle',
           'create_text_element', 'MetricsProvider', 'PillowMetrics', 'DEFAULT_LINE_HEIGHT_FACTOR',
           'InvalidConstraintError', 'line_budget', 'wrap_label_lines']
