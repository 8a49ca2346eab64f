"""
Font provider backed by matplotlib's font manager.

matplotlib ships DejaVu Sans, so family lookups always resolve to a real
TrueType file even on hosts without system fonts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib import font_manager
from PIL import ImageFont

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"


def resolve_font_path(family: str = DEFAULT_FONT_FAMILY) -> str:
    """Resolve a font family name to a TrueType file path."""
    props = font_manager.FontProperties(family=family)
    return font_manager.findfont(props, fallback_to_default=True)


class MatplotlibFontProvider:
    """
    Loads the placeholder font at arbitrary (fractional) point sizes.

    Only the resolved file path is kept; faces are opened per call so that
    concurrent renders never share a FreeType face.
    """

    def __init__(self, family: str = DEFAULT_FONT_FAMILY, path: str | None = None) -> None:
        if path is not None:
            if not Path(path).is_file():
                raise FileNotFoundError(f"Font file not found at: {path}")
            self.path = path
        else:
            self.path = resolve_font_path(family)
        logger.debug("Placeholder font resolved to %s", self.path)

    def get_font(self, size: float) -> ImageFont.FreeTypeFont:
        return ImageFont.truetype(self.path, size=float(size))
