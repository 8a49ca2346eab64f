"""
PlaceholderRenderer - background fill, font sizing and centred label.

Pure computation: no I/O, no shared mutable state, identical inputs give
pixel-identical rasters.

Key behaviors:
- Canvas is exactly width x height, filled with the background colour
- Font size = min(width * 0.8 / max(len(text), 1), height * 0.2)
- Horizontal centring uses the text advance width
- Vertical centring uses the font line height, not the glyph ink box
- Text may overflow the canvas; it is never wrapped
- Hex colours are parsed leniently and never raise
"""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

from placeholder_image.ports.fonts import FontProviderPort

from .models import RGBColor, TextLayout

# --- Constants ---

WIDTH_FILL_RATIO = 0.8
HEIGHT_FILL_RATIO = 0.2

# Below this size FreeType produces nothing legible; only the background is drawn.
MIN_FONT_SIZE = 1.0

# Pillow sizes are C ints
MAX_CANVAS_SIDE = 2**31 - 1

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_UINT64_MAX = 2**64 - 1


# --- Errors ---


class InvalidDimensionsError(ValueError):
    """Raised when a canvas side is non-positive or cannot be allocated."""

    def __init__(self, width: int, height: int, reason: str = "must be positive") -> None:
        super().__init__(f"Canvas dimensions {reason}, got {width}x{height}")
        self.width = width
        self.height = height

    @property
    def field(self) -> str:
        """The offending side (width wins when both are bad)."""
        return "width" if not 0 < self.width <= MAX_CANVAS_SIDE else "height"


# --- Colour Parsing ---


def scan_hex_int(raw: str) -> int:
    """
    Scan a hexadecimal integer the way a lenient text scanner does.

    Leading whitespace and an optional 0x/0X prefix are skipped, then hex
    digits are consumed up to the first non-hex character. No digits gives 0.
    Values past 64 bits saturate.
    """
    s = raw.lstrip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]

    value = 0
    for ch in s:
        if ch not in _HEX_DIGITS:
            break
        value = value * 16 + int(ch, 16)
        if value > _UINT64_MAX:
            value = _UINT64_MAX
    return value


def parse_hex_color(raw: str) -> RGBColor:
    """Parse "rrggbb" (no '#') into a colour using the low 24 bits."""
    return RGBColor.from_int(scan_hex_int(raw))


# --- Layout Math ---


def single_line(text: str) -> str:
    """Collapse line breaks so the label always renders on one line."""
    return " ".join(text.splitlines())


def compute_font_size(width: int, height: int, text: str) -> float:
    """Largest size keeping the label within 80% of the width and 20% of the height."""
    return min(width * WIDTH_FILL_RATIO / max(len(text), 1), height * HEIGHT_FILL_RATIO)


def compute_text_origin(
    width: int, height: int, text_width: float, line_height: float
) -> tuple[float, float]:
    """Top-left corner of the line box that centres it on the canvas."""
    return (width - text_width) / 2, (height - line_height) / 2


def validate_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(width, height)
    if width > MAX_CANVAS_SIDE or height > MAX_CANVAS_SIDE:
        raise InvalidDimensionsError(width, height, f"must not exceed {MAX_CANVAS_SIDE}")


# --- Renderer ---


class PlaceholderRenderer:
    """Renders placeholder rasters with a single font family."""

    def __init__(self, fonts: FontProviderPort) -> None:
        self._fonts = fonts

    def _measure(
        self, width: int, height: int, text: str
    ) -> tuple[TextLayout, ImageFont.FreeTypeFont | None]:
        font_size = compute_font_size(width, height, text)
        if font_size < MIN_FONT_SIZE or not text:
            return (
                TextLayout(
                    font_size=font_size,
                    text_width=0.0,
                    line_height=0.0,
                    x=width / 2,
                    y=height / 2,
                    draws_text=False,
                ),
                None,
            )

        font = self._fonts.get_font(font_size)
        ascent, descent = font.getmetrics()
        line_height = float(ascent + descent)
        text_width = float(font.getlength(text))
        x, y = compute_text_origin(width, height, text_width, line_height)
        layout = TextLayout(
            font_size=font_size,
            text_width=text_width,
            line_height=line_height,
            x=x,
            y=y,
        )
        return layout, font

    def layout(self, width: int, height: int, text: str) -> TextLayout:
        """Compute where the label goes without drawing anything."""
        validate_dimensions(width, height)
        layout, _ = self._measure(width, height, single_line(text))
        return layout

    def render(
        self, width: int, height: int, text: str, fg: RGBColor, bg: RGBColor
    ) -> Image.Image:
        """
        Render the placeholder raster.

        Args:
            width: Canvas width in pixels (> 0).
            height: Canvas height in pixels (> 0).
            text: Label drawn centred on the canvas.
            fg: Label colour.
            bg: Background colour.

        Returns:
            An RGB image of exactly width x height pixels.

        Raises:
            InvalidDimensionsError: If width or height is not positive, exceeds
                MAX_CANVAS_SIDE or cannot be allocated.
        """
        validate_dimensions(width, height)
        text = single_line(text)

        try:
            image = Image.new("RGB", (width, height), bg.as_tuple())
        except (OverflowError, MemoryError) as e:
            raise InvalidDimensionsError(width, height, "cannot be allocated") from e

        layout, font = self._measure(width, height, text)
        if font is not None:
            draw = ImageDraw.Draw(image)
            # "la": origin is the left edge at the ascender line, i.e. the top of the line box
            draw.text((layout.x, layout.y), text, font=font, fill=fg.as_tuple(), anchor="la")

        return image
