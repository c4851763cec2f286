"""
Coordinate transform between UI page space and PDF drawing space.

UI:  origin top-left, y grows downward.
PDF: origin bottom-left, y grows upward.
"""


def to_draw_y(page_height: float, ui_y: float) -> float:
    """Map a UI y onto the PDF y axis. Out-of-page values are not clamped."""
    return page_height - ui_y
