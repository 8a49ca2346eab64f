"""
Intercept component - local answers for placeholder image requests.
"""

from ._impl import (
    DEFAULT_CONFIG,
    MAX_DIMENSION,
    HostNotInterceptedError,
    InterceptConfig,
    InterceptService,
    LoadCancelledError,
    config_from_rules,
    create_intercept_service,
    extract_host,
    parse_dimension,
    parse_query,
    request_from_httpx,
    request_from_url,
)
from .component import run, run_handle, run_should_handle
from .models import (
    HandleRequestInput,
    InterceptError,
    InterceptOutput,
    InterceptRequest,
    RenderParams,
    ShouldHandleInput,
    ShouldHandleOutput,
    SyntheticResponse,
)
from .ports import ImageEncoderPort, RasterRendererPort, RulesPort

__all__ = [
    # Entry points
    "run",
    "run_handle",
    "run_should_handle",
    # Input models
    "HandleRequestInput",
    "ShouldHandleInput",
    # Output models
    "InterceptError",
    "InterceptOutput",
    "InterceptRequest",
    "RenderParams",
    "ShouldHandleOutput",
    "SyntheticResponse",
    # Ports
    "ImageEncoderPort",
    "RasterRendererPort",
    "RulesPort",
    # _impl re-exports
    "DEFAULT_CONFIG",
    "MAX_DIMENSION",
    "HostNotInterceptedError",
    "InterceptConfig",
    "InterceptService",
    "LoadCancelledError",
    "config_from_rules",
    "create_intercept_service",
    "extract_host",
    "parse_dimension",
    "parse_query",
    "request_from_httpx",
    "request_from_url",
]
