"""
Placeholder image API.

A request-dispatch layer with the interceptor injected: requests whose
Host header is the sentinel host are answered by the InterceptService,
everything else goes through the normal routes.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from placeholder_image import __version__
from placeholder_image.api.deps import get_intercept_service, get_rules, get_settings
from placeholder_image.components.intercept import (
    InterceptRequest,
    InterceptService,
    extract_host,
    parse_query,
)
from placeholder_image.ports.encoder import EncodingError

logger = logging.getLogger(__name__)


def intercept_request_from_asgi(request: Request) -> InterceptRequest:
    return InterceptRequest(
        host=extract_host(request.headers.get("host", "")),
        path=request.url.path,
        query_params=parse_query(request.url.query),
    )


def create_app(service: InterceptService | None = None) -> FastAPI:
    """
    Build the API app.

    Args:
        service: Interceptor to inject. When None, one is built from the
            rules file on first use.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if service is None:
            # Fail fast on a broken rules file
            settings = get_settings()
            get_rules()
            logger.info("Rules loaded from %s", settings.rules_path)
        yield

    app = FastAPI(
        title="Placeholder Image API",
        version=__version__,
        lifespan=lifespan,
    )

    def _service() -> InterceptService:
        return service or get_intercept_service()

    @app.middleware("http")
    async def intercept_placeholder(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        intercept = intercept_request_from_asgi(request)
        svc = _service()
        if not svc.should_handle(intercept):
            return await call_next(request)

        try:
            synthetic = await run_in_threadpool(svc.handle, intercept)
        except EncodingError:
            logger.exception("Placeholder encoding failed for %s", intercept.path)
            return PlainTextResponse("Placeholder encoding failed", status_code=500)

        return Response(
            content=synthetic.body,
            status_code=synthetic.status_code,
            headers=synthetic.headers,
        )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "placeholder-image"}

    return app


app = create_app()
