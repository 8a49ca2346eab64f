"""
Intercept component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from placeholder_image.components.render.models import RGBColor

if TYPE_CHECKING:
    import httpx

# --- Validation Error ---


@dataclass(frozen=True)
class InterceptError:
    """Intercept failure surfaced to the caller."""

    code: str
    message: str
    field: str | None = None


# --- Request / Params ---


@dataclass(frozen=True)
class InterceptRequest:
    """An outgoing request as seen by the interceptor."""

    host: str
    path: str
    query_params: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_url(cls, url: str) -> InterceptRequest:
        """Build from a URL string (host case preserved, last query value wins)."""
        from ._impl import request_from_url

        return request_from_url(url)

    @classmethod
    def from_httpx(cls, request: httpx.Request) -> InterceptRequest:
        """Build from an httpx request."""
        from ._impl import request_from_httpx

        return request_from_httpx(request)


@dataclass(frozen=True)
class RenderParams:
    """Resolved rendering parameters, defaults already applied."""

    width: int
    height: int
    text: str
    fg: RGBColor
    bg: RGBColor


# --- Response ---

NOT_FOUND_STATUS = 404
NOT_FOUND_CONTENT_TYPE = "text/plain"
NOT_FOUND_BODY = b"404 Not Found"
IMAGE_OK_STATUS = 200
IMAGE_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class SyntheticResponse:
    """Locally produced response: either NotFound or ImageOK."""

    status_code: int
    content_type: str
    body: bytes

    @classmethod
    def not_found(cls) -> SyntheticResponse:
        return cls(
            status_code=NOT_FOUND_STATUS,
            content_type=NOT_FOUND_CONTENT_TYPE,
            body=NOT_FOUND_BODY,
        )

    @classmethod
    def image_ok(cls, body: bytes, content_type: str = IMAGE_CONTENT_TYPE) -> SyntheticResponse:
        return cls(status_code=IMAGE_OK_STATUS, content_type=content_type, body=body)

    @property
    def ok(self) -> bool:
        return self.status_code == IMAGE_OK_STATUS

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": self.content_type}


# --- Input Models ---


@dataclass(frozen=True)
class ShouldHandleInput:
    """Input for the interception predicate."""

    request: InterceptRequest


@dataclass(frozen=True)
class HandleRequestInput:
    """Input for producing a synthetic response."""

    request: InterceptRequest


# --- Output Models ---


@dataclass(frozen=True)
class ShouldHandleOutput:
    """Output of the interception predicate."""

    handled: bool


@dataclass(frozen=True)
class InterceptOutput:
    """Output containing the synthetic response, or errors."""

    response: SyntheticResponse | None
    params: RenderParams | None = None
    errors: list[InterceptError] = field(default_factory=list)
    success: bool = True
