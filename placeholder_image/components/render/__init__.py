"""
Render component - placeholder raster synthesis.
"""

from ._impl import (
    HEIGHT_FILL_RATIO,
    MAX_CANVAS_SIDE,
    MIN_FONT_SIZE,
    WIDTH_FILL_RATIO,
    InvalidDimensionsError,
    PlaceholderRenderer,
    compute_font_size,
    compute_text_origin,
    parse_hex_color,
    scan_hex_int,
    single_line,
    validate_dimensions,
)
from .component import run, run_render
from .models import (
    RenderInput,
    RenderOutput,
    RenderValidationError,
    RGBColor,
    TextLayout,
)

__all__ = [
    # Entry points
    "run",
    "run_render",
    # Models
    "RGBColor",
    "RenderInput",
    "RenderOutput",
    "RenderValidationError",
    "TextLayout",
    # _impl re-exports
    "HEIGHT_FILL_RATIO",
    "MAX_CANVAS_SIDE",
    "MIN_FONT_SIZE",
    "WIDTH_FILL_RATIO",
    "InvalidDimensionsError",
    "PlaceholderRenderer",
    "compute_font_size",
    "compute_text_origin",
    "parse_hex_color",
    "scan_hex_int",
    "single_line",
    "validate_dimensions",
]
