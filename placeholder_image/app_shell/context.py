from __future__ import annotations

from dataclasses import dataclass

from placeholder_image.adapters.loader import PlaceholderLoader
from placeholder_image.adapters.render.fonts import MatplotlibFontProvider
from placeholder_image.adapters.render.png_encoder import PillowPngEncoder
from placeholder_image.adapters.rules import RulesPortAdapter
from placeholder_image.components.intercept import (
    InterceptService,
    config_from_rules,
    create_intercept_service,
)
from placeholder_image.components.render import PlaceholderRenderer
from placeholder_image.ports.encoder import ImageEncoderPort
from placeholder_image.ports.fonts import FontProviderPort
from placeholder_image.ports.renderer import RasterRendererPort
from placeholder_image.rules.models import Rules


@dataclass
class ServiceContext:
    rules: Rules
    fonts: FontProviderPort
    renderer: RasterRendererPort
    encoder: ImageEncoderPort
    intercept_service: InterceptService

    @classmethod
    def create(cls, rules: Rules | None = None) -> ServiceContext:
        rules = rules or Rules()

        # Adapters
        fonts = MatplotlibFontProvider(family=rules.font.family, path=rules.font.path)
        renderer = PlaceholderRenderer(fonts)
        encoder = PillowPngEncoder()

        # Services
        intercept_service = create_intercept_service(
            renderer=renderer,
            encoder=encoder,
            config=config_from_rules(RulesPortAdapter(rules)),
        )

        return cls(
            rules=rules,
            fonts=fonts,
            renderer=renderer,
            encoder=encoder,
            intercept_service=intercept_service,
        )

    def create_loader(self, max_workers: int | None = None) -> PlaceholderLoader:
        return PlaceholderLoader(self.intercept_service, max_workers=max_workers)
