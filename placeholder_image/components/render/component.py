"""
Render component - placeholder raster synthesis.

Builds a raster of the requested size: background fill, auto-sized label,
centred horizontally on its advance width and vertically on the line height.

Invariants:
- I1: Output raster is exactly width x height
- I2: Every pixel outside the label ink is the background colour
- I3: Rendering is deterministic
- I4: Non-positive dimensions are rejected before allocation
"""

from __future__ import annotations

from placeholder_image.ports.fonts import FontProviderPort

from ._impl import InvalidDimensionsError, PlaceholderRenderer
from .models import RenderInput, RenderOutput, RenderValidationError


def run_render(inp: RenderInput, *, fonts: FontProviderPort) -> RenderOutput:
    """
    Render a placeholder raster.

    Args:
        inp: Dimensions, label and colours.
        fonts: Font provider port.

    Returns:
        RenderOutput with the raster and its layout, or errors.
    """
    renderer = PlaceholderRenderer(fonts)

    try:
        layout = renderer.layout(inp.width, inp.height, inp.text)
        raster = renderer.render(inp.width, inp.height, inp.text, inp.fg, inp.bg)
    except InvalidDimensionsError as e:
        return RenderOutput(
            raster=None,
            errors=[
                RenderValidationError(
                    code="invalid_dimensions",
                    message=str(e),
                    field=e.field,
                )
            ],
            success=False,
        )

    return RenderOutput(raster=raster, layout=layout, errors=[], success=True)


def run(inp: RenderInput, *, fonts: FontProviderPort) -> RenderOutput:
    """Main entry point for the render component."""
    if isinstance(inp, RenderInput):
        return run_render(inp, fonts=fonts)
    raise ValueError(f"Unknown input type: {type(inp)}")
