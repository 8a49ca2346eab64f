from typing import Protocol

from PIL import ImageFont


class FontProviderPort(Protocol):
    def get_font(self, size: float) -> ImageFont.FreeTypeFont:
        """Return the placeholder font at the given point size."""
        ...
