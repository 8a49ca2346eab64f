import pytest
from PIL import Image

from placeholder_image.adapters.render.fonts import MatplotlibFontProvider
from placeholder_image.adapters.render.png_encoder import PillowPngEncoder
from placeholder_image.components.intercept import InterceptService
from placeholder_image.components.render import PlaceholderRenderer
from placeholder_image.ports.encoder import EncodingError


class FailingEncoder:
    """Encoder that always fails, for exercising the error path."""

    content_type = "image/png"

    def encode(self, raster: Image.Image) -> bytes:
        raise EncodingError("simulated encoder failure")


@pytest.fixture(scope="session")
def fonts() -> MatplotlibFontProvider:
    return MatplotlibFontProvider()


@pytest.fixture
def renderer(fonts: MatplotlibFontProvider) -> PlaceholderRenderer:
    return PlaceholderRenderer(fonts)


@pytest.fixture
def encoder() -> PillowPngEncoder:
    return PillowPngEncoder()


@pytest.fixture
def service(renderer: PlaceholderRenderer, encoder: PillowPngEncoder) -> InterceptService:
    return InterceptService(renderer=renderer, encoder=encoder)


@pytest.fixture
def failing_service(renderer: PlaceholderRenderer) -> InterceptService:
    return InterceptService(renderer=renderer, encoder=FailingEncoder())

