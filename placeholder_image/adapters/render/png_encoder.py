from io import BytesIO

from PIL import Image

from placeholder_image.ports.encoder import EncodingError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class PillowPngEncoder:
    content_type = "image/png"

    def __init__(self, optimize: bool = False) -> None:
        self.optimize = optimize

    def encode(self, raster: Image.Image) -> bytes:
        """
        Serialize a raster to PNG bytes.
        Raises EncodingError rather than returning an empty or partial body.
        """
        buf = BytesIO()
        try:
            raster.save(buf, format="PNG", optimize=self.optimize)
            data = buf.getvalue()
        except (OSError, ValueError, KeyError) as e:
            raise EncodingError(f"PNG encoding failed: {e}") from e
        finally:
            buf.close()

        if not data.startswith(PNG_SIGNATURE):
            raise EncodingError("PNG encoder produced no image data")

        return data
