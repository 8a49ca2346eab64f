"""
Intercept component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from placeholder_image.ports.encoder import ImageEncoderPort
from placeholder_image.ports.renderer import RasterRendererPort


class RulesPort(Protocol):
    """Port for interception rules configuration."""

    def get_sentinel_host(self) -> str:
        """Host whose requests are answered locally."""
        ...

    def get_image_path(self) -> str:
        """The only path that yields an image."""
        ...

    def get_default_params(self) -> dict[str, str | int]:
        """Defaults keyed by query parameter name."""
        ...


__all__ = ["ImageEncoderPort", "RasterRendererPort", "RulesPort"]
