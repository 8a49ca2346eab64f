from typing import Protocol

from PIL import Image

from placeholder_image.components.render.models import RGBColor


class RasterRendererPort(Protocol):
    def render(
        self, width: int, height: int, text: str, fg: RGBColor, bg: RGBColor
    ) -> Image.Image:
        """Render a placeholder raster of exactly width x height pixels."""
        ...
