"""Pre-OCR Infrastructure: низкоуровневые операции над пикселями."""

from .filters import (
    as_cv_array,
    center_on_canvas,
    invert_color_channels,
    resize_bicubic,
    round_half_up,
)

__all__ = [
    "as_cv_array",
    "center_on_canvas",
    "invert_color_channels",
    "resize_bicubic",
    "round_half_up",
]
