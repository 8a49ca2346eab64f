"""
InterceptService - decides which requests are answered locally and
synthesizes their responses.

Key behaviors:
- Only the sentinel host is intercepted (exact, case-sensitive match)
- Any path other than the image path yields a 404 text/plain response
- Query values that are missing or malformed fall back to defaults silently
- Encoding failures propagate; no response is produced for them
- Cancellation is cooperative and checked between steps
- No state is kept between requests
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from placeholder_image.components.render._impl import MAX_CANVAS_SIDE
from placeholder_image.components.render.models import RGBColor
from placeholder_image.ports.encoder import ImageEncoderPort
from placeholder_image.ports.renderer import RasterRendererPort

from .models import InterceptRequest, RenderParams, SyntheticResponse
from .ports import RulesPort

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class InterceptConfig:
    """Interception configuration from rules."""

    sentinel_host: str = "placeholder"
    image_path: str = "/image.png"

    # Query parameter defaults
    default_width: int = 250
    default_height: int = 250
    default_text: str = "dummy"
    default_fgcolor: str = "202f55"
    default_bgcolor: str = "dddddd"


DEFAULT_CONFIG = InterceptConfig()

# Query parameter names
PARAM_WIDTH = "width"
PARAM_HEIGHT = "height"
PARAM_TEXT = "text"
PARAM_FGCOLOR = "fgcolor"
PARAM_BGCOLOR = "bgcolor"

_INT_RE = re.compile(r"[+-]?[0-9]+")
# Largest side the renderer can allocate (Pillow sizes are C ints)
MAX_DIMENSION = MAX_CANVAS_SIDE
_MAX_DIMENSION_DIGITS = len(str(MAX_DIMENSION))


def config_from_rules(rules: RulesPort | None) -> InterceptConfig:
    """Build intercept config from a rules port; None gives the defaults."""
    if rules is None:
        return DEFAULT_CONFIG

    defaults = rules.get_default_params()
    base = DEFAULT_CONFIG
    return InterceptConfig(
        sentinel_host=rules.get_sentinel_host(),
        image_path=rules.get_image_path(),
        default_width=int(defaults.get(PARAM_WIDTH, base.default_width)),
        default_height=int(defaults.get(PARAM_HEIGHT, base.default_height)),
        default_text=str(defaults.get(PARAM_TEXT, base.default_text)),
        default_fgcolor=str(defaults.get(PARAM_FGCOLOR, base.default_fgcolor)),
        default_bgcolor=str(defaults.get(PARAM_BGCOLOR, base.default_bgcolor)),
    )


# --- Errors ---


class LoadCancelledError(Exception):
    """Raised inside a load once its caller has cancelled it."""


class HostNotInterceptedError(ValueError):
    """Raised when handle() is given a request for a host it does not own."""


# --- Request Parsing ---


def extract_host(netloc: str) -> str:
    """Host part of a netloc, case preserved, without userinfo or port."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        end = hostport.find("]")
        return hostport[1:end] if end != -1 else hostport[1:]
    return hostport.partition(":")[0]


def parse_query(query: str) -> dict[str, str]:
    """
    Split a raw query string into a name -> value mapping.

    Items without '=' carry no value and are skipped. Values are
    percent-decoded; '+' is kept literally. The last duplicate wins.
    """
    params: dict[str, str] = {}
    if not query:
        return params

    for item in query.split("&"):
        name, sep, value = item.partition("=")
        if not sep:
            continue
        params[unquote(name)] = unquote(value)
    return params


def request_from_url(url: str) -> InterceptRequest:
    parts = urlsplit(url)
    return InterceptRequest(
        host=extract_host(parts.netloc),
        path=unquote(parts.path),
        query_params=parse_query(parts.query),
    )


def request_from_httpx(request: httpx.Request) -> InterceptRequest:
    # Raw query so decoding matches request_from_url ('+' stays '+')
    return InterceptRequest(
        host=request.url.host,
        path=request.url.path,
        query_params=parse_query(request.url.query.decode("ascii")),
    )


def parse_dimension(raw: str | None, default: int) -> int:
    """
    Parse a pixel dimension.

    Absent, non-integer, non-positive or out-of-range values give the default.
    """
    if raw is None or not _INT_RE.fullmatch(raw):
        return default

    # Bound the digit count before int() so huge inputs never reach the converter
    if len(raw.lstrip("+-").lstrip("0")) > _MAX_DIMENSION_DIGITS:
        return default

    value = int(raw)
    if value <= 0 or value > MAX_DIMENSION:
        return default
    return value


def _never() -> bool:
    return False


def _raise_if_cancelled(is_cancelled: Callable[[], bool]) -> None:
    if is_cancelled():
        raise LoadCancelledError("Load cancelled by caller")


# --- Service ---


class InterceptService:
    """Predicate and handler pair for placeholder requests."""

    def __init__(
        self,
        renderer: RasterRendererPort,
        encoder: ImageEncoderPort,
        config: InterceptConfig | None = None,
    ) -> None:
        self.renderer = renderer
        self.encoder = encoder
        self.config = config or DEFAULT_CONFIG

    def should_handle(self, request: InterceptRequest) -> bool:
        """True iff the request targets the sentinel host."""
        return request.host == self.config.sentinel_host

    def resolve_params(self, request: InterceptRequest) -> RenderParams:
        """Extract rendering parameters, applying defaults."""
        q = request.query_params
        cfg = self.config

        return RenderParams(
            width=parse_dimension(q.get(PARAM_WIDTH), cfg.default_width),
            height=parse_dimension(q.get(PARAM_HEIGHT), cfg.default_height),
            text=q.get(PARAM_TEXT, cfg.default_text),
            fg=RGBColor.from_hex(q.get(PARAM_FGCOLOR, cfg.default_fgcolor)),
            bg=RGBColor.from_hex(q.get(PARAM_BGCOLOR, cfg.default_bgcolor)),
        )

    def handle(
        self,
        request: InterceptRequest,
        *,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> SyntheticResponse:
        """
        Produce the synthetic response for an intercepted request.

        Args:
            request: Request whose host is the sentinel host.
            is_cancelled: Polled between steps; once it returns True no
                further work is done.

        Returns:
            NotFound for unknown paths, ImageOK with the encoded raster otherwise.

        Raises:
            HostNotInterceptedError: If the request is not for the sentinel host.
            LoadCancelledError: If the caller cancelled the load.
            EncodingError: If the raster could not be serialized.
            InvalidDimensionsError: If the renderer cannot allocate the canvas.
        """
        check = is_cancelled or _never

        if not self.should_handle(request):
            raise HostNotInterceptedError(f"Host {request.host!r} is not intercepted")

        _raise_if_cancelled(check)

        if request.path != self.config.image_path:
            logger.debug("Unknown placeholder path %s, returning 404", request.path)
            return SyntheticResponse.not_found()

        params = self.resolve_params(request)
        raster = self.renderer.render(
            params.width, params.height, params.text, params.fg, params.bg
        )
        _raise_if_cancelled(check)

        body = self.encoder.encode(raster)
        _raise_if_cancelled(check)

        logger.info(
            "Rendered placeholder %dx%d text=%r (%d bytes)",
            params.width,
            params.height,
            params.text,
            len(body),
        )
        return SyntheticResponse.image_ok(body, content_type=self.encoder.content_type)


def create_intercept_service(
    renderer: RasterRendererPort,
    encoder: ImageEncoderPort,
    config: InterceptConfig | None = None,
) -> InterceptService:
    """Create an InterceptService."""
    return InterceptService(renderer=renderer, encoder=encoder, config=config)
