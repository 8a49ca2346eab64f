"""
Thread-pool loader for intercepted requests.

Runs InterceptService.handle off the caller's thread and reports the
outcome through a future.

Key behaviors:
- submit() returns at once; the outcome arrives asynchronously
- on_complete fires exactly once per load with the finished future
- cancel() is cooperative: the worker stops at its next checkpoint and
  the load ends in LoadCancelledError (or CancelledError if it never started)
- A cancelled load never resolves to a response
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from placeholder_image.components.intercept import (
    InterceptRequest,
    InterceptService,
    LoadCancelledError,
    SyntheticResponse,
)

logger = logging.getLogger(__name__)

CompletionCallback = Callable[["Future[SyntheticResponse]"], None]


class LoadHandle:
    """A single in-flight load."""

    def __init__(
        self,
        request: InterceptRequest,
        future: Future[SyntheticResponse],
        cancel_event: threading.Event,
    ) -> None:
        self.request = request
        self.future = future
        self._cancel_event = cancel_event

    @property
    def done(self) -> bool:
        return self.future.done()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Ask the load to stop. Safe to call more than once."""
        self._cancel_event.set()
        self.future.cancel()

    def result(self, timeout: float | None = None) -> SyntheticResponse:
        """
        Wait for the response.

        Raises whatever ended the load: LoadCancelledError or CancelledError
        after cancel(), EncodingError, HostNotInterceptedError.
        """
        return self.future.result(timeout=timeout)


class PlaceholderLoader:
    """
    Asynchronous front for an InterceptService.

    Holds no per-request state; concurrent loads share only the executor.
    """

    def __init__(
        self,
        service: InterceptService,
        max_workers: int | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.service = service
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="placeholder"
        )

    def can_handle(self, request: InterceptRequest) -> bool:
        return self.service.should_handle(request)

    def _run(self, request: InterceptRequest, cancel_event: threading.Event) -> SyntheticResponse:
        response = self.service.handle(request, is_cancelled=cancel_event.is_set)
        # Last checkpoint: cancel() may have landed after encoding finished
        if cancel_event.is_set():
            raise LoadCancelledError("Load cancelled by caller")
        return response

    def submit(
        self,
        request: InterceptRequest,
        on_complete: CompletionCallback | None = None,
    ) -> LoadHandle:
        """
        Start loading a request.

        Args:
            request: Request for the sentinel host.
            on_complete: Called exactly once with the finished future,
                whichever way the load ends.

        Returns:
            LoadHandle for waiting on or cancelling the load.
        """
        cancel_event = threading.Event()
        future = self._executor.submit(self._run, request, cancel_event)
        logger.debug("Submitted placeholder load %s%s", request.host, request.path)

        if on_complete is not None:
            future.add_done_callback(on_complete)

        return LoadHandle(request, future, cancel_event)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> PlaceholderLoader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()
