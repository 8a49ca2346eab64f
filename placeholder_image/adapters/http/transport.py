"""
httpx transports that answer placeholder requests locally.

Requests for the sentinel host never touch the network; everything else
is forwarded to the wrapped transport unchanged.

httpx lower-cases the host when it parses a URL, so the original case is
lost before the transport sees the request: "http://PLACEHOLDER/image.png"
is answered locally just like "http://placeholder/image.png".

Usage:
    client = httpx.Client(transport=PlaceholderTransport(service))
    client.get("http://placeholder/image.png?width=300&height=200")
"""

from __future__ import annotations

import asyncio
import logging
import threading

import httpx

from placeholder_image.components.intercept import (
    InterceptRequest,
    InterceptService,
    SyntheticResponse,
)
from placeholder_image.ports.encoder import EncodingError

logger = logging.getLogger(__name__)


class PlaceholderEncodingError(httpx.TransportError):
    """The placeholder raster could not be encoded; no response was produced."""


def to_httpx_response(synthetic: SyntheticResponse, request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        status_code=synthetic.status_code,
        headers=synthetic.headers,
        content=synthetic.body,
        request=request,
    )


class PlaceholderTransport(httpx.BaseTransport):
    def __init__(
        self,
        service: InterceptService,
        fallback: httpx.BaseTransport | None = None,
    ) -> None:
        self.service = service
        self.fallback = fallback or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        intercept = InterceptRequest.from_httpx(request)
        if not self.service.should_handle(intercept):
            return self.fallback.handle_request(request)

        try:
            synthetic = self.service.handle(intercept)
        except EncodingError as e:
            logger.exception("Placeholder encoding failed for %s", request.url)
            raise PlaceholderEncodingError(str(e), request=request) from e

        return to_httpx_response(synthetic, request)

    def close(self) -> None:
        self.fallback.close()


class AsyncPlaceholderTransport(httpx.AsyncBaseTransport):
    """Async variant; rendering runs in a worker thread."""

    def __init__(
        self,
        service: InterceptService,
        fallback: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.service = service
        self.fallback = fallback or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        intercept = InterceptRequest.from_httpx(request)
        if not self.service.should_handle(intercept):
            return await self.fallback.handle_async_request(request)

        cancel_event = threading.Event()
        try:
            synthetic = await asyncio.to_thread(
                self.service.handle, intercept, is_cancelled=cancel_event.is_set
            )
        except asyncio.CancelledError:
            cancel_event.set()
            raise
        except EncodingError as e:
            logger.exception("Placeholder encoding failed for %s", request.url)
            raise PlaceholderEncodingError(str(e), request=request) from e

        return to_httpx_response(synthetic, request)

    async def aclose(self) -> None:
        await self.fallback.aclose()
