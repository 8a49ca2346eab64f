"""
Tests for PlaceholderLoader (asynchronous completion and cancellation).

Key behaviors:
- on_complete fires exactly once for every outcome
- Cancellation is cooperative and never yields a response
"""

from __future__ import annotations

import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor

import pytest
from PIL import Image

from placeholder_image.adapters.loader import PlaceholderLoader
from placeholder_image.adapters.render.png_encoder import PillowPngEncoder
from placeholder_image.app_shell.context import ServiceContext
from placeholder_image.components.intercept import (
    HostNotInterceptedError,
    InterceptRequest,
    InterceptService,
    LoadCancelledError,
    SyntheticResponse,
)
from placeholder_image.components.render import PlaceholderRenderer, RGBColor
from placeholder_image.ports.encoder import EncodingError

TIMEOUT = 10


class BlockingRenderer:
    """Wraps a renderer and blocks inside render() until released."""

    def __init__(self, inner: PlaceholderRenderer) -> None:
        self.inner = inner
        self.started = threading.Event()
        self.release = threading.Event()

    def render(
        self, width: int, height: int, text: str, fg: RGBColor, bg: RGBColor
    ) -> Image.Image:
        self.started.set()
        self.release.wait(TIMEOUT)
        return self.inner.render(width, height, text, fg, bg)


class CompletionRecorder:
    def __init__(self) -> None:
        self.calls: list[Future[SyntheticResponse]] = []
        self.fired = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, future: Future[SyntheticResponse]) -> None:
        with self._lock:
            self.calls.append(future)
        self.fired.set()


def _req(url: str = "http://placeholder/image.png?width=40&height=30") -> InterceptRequest:
    return InterceptRequest.from_url(url)


@pytest.fixture
def loader(service: InterceptService) -> PlaceholderLoader:
    with PlaceholderLoader(service, max_workers=2) as ldr:
        yield ldr


class TestCompletion:
    def test_success(self, loader: PlaceholderLoader) -> None:
        recorder = CompletionRecorder()

        handle = loader.submit(_req(), on_complete=recorder)
        response = handle.result(timeout=TIMEOUT)

        assert response.status_code == 200
        assert recorder.fired.wait(TIMEOUT)
        assert len(recorder.calls) == 1
        assert recorder.calls[0].result() is response

    def test_not_found(self, loader: PlaceholderLoader) -> None:
        recorder = CompletionRecorder()

        handle = loader.submit(_req("http://placeholder/nope"), on_complete=recorder)

        assert handle.result(timeout=TIMEOUT) == SyntheticResponse.not_found()
        assert recorder.fired.wait(TIMEOUT)
        assert len(recorder.calls) == 1

    def test_encoding_failure(self, failing_service: InterceptService) -> None:
        recorder = CompletionRecorder()

        with PlaceholderLoader(failing_service) as loader:
            handle = loader.submit(_req(), on_complete=recorder)
            with pytest.raises(EncodingError):
                handle.result(timeout=TIMEOUT)

        assert recorder.fired.wait(TIMEOUT)
        assert len(recorder.calls) == 1
        assert isinstance(recorder.calls[0].exception(), EncodingError)

    def test_foreign_host_fails(self, loader: PlaceholderLoader) -> None:
        assert loader.can_handle(_req("http://example.com/image.png")) is False
        handle = loader.submit(_req("http://example.com/image.png"))
        with pytest.raises(HostNotInterceptedError):
            handle.result(timeout=TIMEOUT)

    def test_concurrent_loads_are_independent(self, loader: PlaceholderLoader) -> None:
        handles = [
            loader.submit(_req(f"http://placeholder/image.png?width={w}&height=10"))
            for w in range(10, 20)
        ]
        responses = [h.result(timeout=TIMEOUT) for h in handles]
        assert all(r.ok for r in responses)
        assert len({r.body for r in responses}) == len(responses)


class TestCancellation:
    def test_cancel_during_render(self, renderer: PlaceholderRenderer) -> None:
        blocking = BlockingRenderer(renderer)
        service = InterceptService(blocking, PillowPngEncoder())
        recorder = CompletionRecorder()

        with PlaceholderLoader(service) as loader:
            handle = loader.submit(_req(), on_complete=recorder)
            assert blocking.started.wait(TIMEOUT)
            handle.cancel()
            blocking.release.set()

            with pytest.raises(LoadCancelledError):
                handle.result(timeout=TIMEOUT)

        assert handle.cancel_requested is True
        assert recorder.fired.wait(TIMEOUT)
        assert len(recorder.calls) == 1

    def test_cancel_before_start(self, renderer: PlaceholderRenderer) -> None:
        blocking = BlockingRenderer(renderer)
        service = InterceptService(blocking, PillowPngEncoder())
        executor = ThreadPoolExecutor(max_workers=1)
        recorder = CompletionRecorder()

        loader = PlaceholderLoader(service, executor=executor)
        first = loader.submit(_req())
        assert blocking.started.wait(TIMEOUT)

        queued = loader.submit(_req(), on_complete=recorder)
        queued.cancel()
        blocking.release.set()

        with pytest.raises(CancelledError):
            queued.result(timeout=TIMEOUT)
        assert first.result(timeout=TIMEOUT).ok

        executor.shutdown(wait=True)
        assert len(recorder.calls) == 1
        assert recorder.calls[0].cancelled()

    def test_cancel_after_completion_keeps_result(self, loader: PlaceholderLoader) -> None:
        handle = loader.submit(_req())
        response = handle.result(timeout=TIMEOUT)

        handle.cancel()

        assert handle.done is True
        assert handle.result() is response


class TestContextLoader:
    def test_loader_from_context(self) -> None:
        with ServiceContext.create().create_loader(max_workers=1) as loader:
            response = loader.submit(_req()).result(timeout=TIMEOUT)

        assert response.ok is True
