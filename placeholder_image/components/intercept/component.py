"""
Intercept component - local answers for placeholder image requests.

Decides whether a request is handled locally and, if so, produces a
synthetic response: 404 for unknown paths, a PNG placeholder otherwise.

Invariants:
- I1: Only the sentinel host is intercepted (exact match)
- I2: Malformed query values never fail a request
- I3: Encoding failures never yield a response body
- I4: Every call ends in exactly one output
"""

from __future__ import annotations

import logging

from placeholder_image.components.render import InvalidDimensionsError
from placeholder_image.ports.encoder import EncodingError

from ._impl import (
    HostNotInterceptedError,
    InterceptConfig,
    InterceptService,
    config_from_rules,
)
from .models import (
    HandleRequestInput,
    InterceptError,
    InterceptOutput,
    ShouldHandleInput,
    ShouldHandleOutput,
)
from .ports import ImageEncoderPort, RasterRendererPort, RulesPort

logger = logging.getLogger(__name__)


def _build_config(rules: RulesPort | None) -> InterceptConfig:
    """Build intercept config from rules port."""
    return config_from_rules(rules)


def _create_service(
    renderer: RasterRendererPort,
    encoder: ImageEncoderPort,
    rules: RulesPort | None,
) -> InterceptService:
    """Create intercept service from ports."""
    return InterceptService(renderer=renderer, encoder=encoder, config=_build_config(rules))


# --- Component Entry Points ---


def run_should_handle(
    inp: ShouldHandleInput,
    *,
    rules: RulesPort | None = None,
) -> ShouldHandleOutput:
    """
    Check whether a request belongs to the interceptor.

    Args:
        inp: Input containing the request.
        rules: Optional rules port for configuration.

    Returns:
        ShouldHandleOutput with the decision.
    """
    config = _build_config(rules)
    return ShouldHandleOutput(handled=inp.request.host == config.sentinel_host)


def run_handle(
    inp: HandleRequestInput,
    *,
    renderer: RasterRendererPort,
    encoder: ImageEncoderPort,
    rules: RulesPort | None = None,
) -> InterceptOutput:
    """
    Produce the synthetic response for a request.

    Args:
        inp: Input containing the request.
        renderer: Raster renderer port.
        encoder: Image encoder port.
        rules: Optional rules port for configuration.

    Returns:
        InterceptOutput with the response, or errors when it could not be built.
    """
    service = _create_service(renderer, encoder, rules)
    request = inp.request

    try:
        response = service.handle(request)
    except HostNotInterceptedError as e:
        return InterceptOutput(
            response=None,
            errors=[InterceptError(code="host_not_matched", message=str(e), field="host")],
            success=False,
        )
    except InvalidDimensionsError as e:
        return InterceptOutput(
            response=None,
            errors=[InterceptError(code="invalid_dimensions", message=str(e))],
            success=False,
        )
    except EncodingError as e:
        logger.exception("Placeholder encoding failed for %s%s", request.host, request.path)
        return InterceptOutput(
            response=None,
            errors=[InterceptError(code="encoding_failed", message=str(e))],
            success=False,
        )

    params = service.resolve_params(request) if response.ok else None
    return InterceptOutput(response=response, params=params, errors=[], success=True)


def run(
    inp: ShouldHandleInput | HandleRequestInput,
    *,
    renderer: RasterRendererPort,
    encoder: ImageEncoderPort,
    rules: RulesPort | None = None,
) -> ShouldHandleOutput | InterceptOutput:
    """
    Main entry point for the intercept component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ShouldHandleInput):
        return run_should_handle(inp, rules=rules)
    elif isinstance(inp, HandleRequestInput):
        return run_handle(inp, renderer=renderer, encoder=encoder, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
