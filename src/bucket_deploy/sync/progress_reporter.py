#!/usr/bin/env python3
"""
Progress Reporter for Deploy Pipeline

Renders the single-line proportion bars shown while uploading and cleaning.
"""

import math
import sys
from typing import TextIO

from ..constants import DEFAULT_PROGRESS_BAR_WIDTH

FILLED = "="
EMPTY = "-"

# Carriage return plus ANSI "erase entire line"
CLEAR_LINE = "\r\x1b[2K"


def render_bar(fraction: float, width: int = DEFAULT_PROGRESS_BAR_WIDTH) -> str:
    """
    Render a fixed-width bar.

    Position ``i`` is filled when ``i / width <= fraction``.

    Args:
        fraction: Completed proportion, normally in [0, 1]
        width: Number of positions in the bar

    Returns:
        str: The bar wrapped in brackets, e.g. ``[===-------]``
    """
    cells = "".join(FILLED if i / width <= fraction else EMPTY for i in range(width))
    return f"[{cells}]"


def format_percent(fraction: float) -> str:
    """Percentage label, rounded up to the nearest integer."""
    return f"{math.ceil(fraction * 100)}%"


def format_progress(label: str, fraction: float, width: int = DEFAULT_PROGRESS_BAR_WIDTH) -> str:
    return f"{label} {render_bar(fraction, width)} {format_percent(fraction)}"


def draw_progress(
    label: str, fraction: float, width: int = DEFAULT_PROGRESS_BAR_WIDTH, stream: TextIO | None = None
) -> None:
    """Erase the current console line and redraw the bar in its place."""
    out = stream if stream is not None else sys.stdout
    out.write(f"{CLEAR_LINE}{format_progress(label, fraction, width)}")
    out.flush()


def upload_fraction(index: int, total: int) -> float:
    """Fraction shown after the upload at 0-based ``index`` of ``total``."""
    if total <= 0:
        return 1.0
    return index / total


def prune_fraction(index: int, count: int) -> float:
    """
    Fraction shown after the deletion at 0-based ``index`` of ``count``.

    Reaches exactly 1.0 on the last deletion. A single deletion would be 0/0,
    which is reported as complete.
    """
    if count <= 1:
        return 1.0
    return index / (count - 1)
