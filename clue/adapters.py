"""Adapter turning a method-aware router into a debug muxer."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol

from clue.debug import WSGIApp

HTTP_METHODS: tuple[str, ...] = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
)


class MethodMuxer(Protocol):
    """Router that registers WSGI handlers per HTTP method and path."""

    def __call__(
        self, environ: dict, start_response: Callable[..., Any]
    ) -> Iterable[bytes]: ...

    def handle(self, method: str, path: str, handler: WSGIApp) -> None: ...


class MuxAdapter:
    """Debug muxer that registers handlers for every HTTP method."""

    def __init__(self, muxer: MethodMuxer) -> None:
        self.muxer = muxer

    def __call__(
        self, environ: dict, start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        return self.muxer(environ, start_response)

    def handle(self, path: str, handler: WSGIApp) -> None:
        """Register ``handler`` on ``path`` for all HTTP methods."""
        for method in HTTP_METHODS:
            self.muxer.handle(method, path, handler)

    def handle_func(self, path: str, handler: WSGIApp) -> None:
        """Register ``handler`` on ``path`` for all HTTP methods."""
        self.handle(path, handler)


def adapt(muxer: MethodMuxer) -> MuxAdapter:
    """Return a debug muxer backed by ``muxer``."""
    return MuxAdapter(muxer)