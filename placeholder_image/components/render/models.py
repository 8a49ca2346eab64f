"""
Render component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from PIL import Image

# --- Colour ---


@dataclass(frozen=True)
class RGBColor:
    """Opaque 8-bit RGB colour."""

    r: int
    g: int
    b: int

    @classmethod
    def from_int(cls, value: int) -> RGBColor:
        """Build from the low 24 bits of an integer (0xRRGGBB)."""
        value &= 0xFFFFFF
        return cls(r=(value >> 16) & 0xFF, g=(value >> 8) & 0xFF, b=value & 0xFF)

    @classmethod
    def from_hex(cls, raw: str) -> RGBColor:
        """Parse a hex string leniently (see parse_hex_color)."""
        from ._impl import parse_hex_color

        return parse_hex_color(raw)

    @property
    def hex(self) -> str:
        return f"{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


# --- Validation Error ---


@dataclass(frozen=True)
class RenderValidationError:
    """Render validation error."""

    code: str
    message: str
    field: str | None = None


# --- Layout ---


@dataclass(frozen=True)
class TextLayout:
    """Computed placement of the label on the canvas."""

    font_size: float
    text_width: float
    line_height: float
    x: float
    y: float
    draws_text: bool = True


# --- Input Models ---


@dataclass(frozen=True)
class RenderInput:
    """Input for rendering a placeholder raster."""

    width: int
    height: int
    text: str
    fg: RGBColor
    bg: RGBColor


# --- Output Models ---


@dataclass(frozen=True)
class RenderOutput:
    """Output containing the rendered raster."""

    raster: Image.Image | None
    layout: TextLayout | None = None
    errors: list[RenderValidationError] = field(default_factory=list)
    success: bool = True
