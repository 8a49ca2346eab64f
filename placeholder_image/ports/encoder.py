from typing import Protocol

from PIL import Image


class EncodingError(RuntimeError):
    """Raised when a raster cannot be serialized to the output format."""


class ImageEncoderPort(Protocol):
    content_type: str

    def encode(self, raster: Image.Image) -> bytes:
        """Serialize a raster. Raises EncodingError on failure."""
        ...
