"""HTTP middleware and gRPC interceptor applying the debug logs setting."""

from __future__ import annotations

import contextvars
from typing import Any, Callable, Iterable, Iterator

import grpc

from clue.debug import WSGIApp, _debug_context_snapshot, _debug_scope, debug_logs_enabled


def http_middleware() -> Callable[[WSGIApp], WSGIApp]:
    """Return WSGI middleware enabling debug logs per request when switched on."""

    def middleware(app: WSGIApp) -> WSGIApp:
        def wrapped(environ: dict, start_response: Callable[..., Any]) -> list[bytes]:
            with _debug_scope(debug_logs_enabled()):
                result = app(environ, start_response)
                try:
                    return list(result)
                finally:
                    close = getattr(result, "close", None)
                    if close is not None:
                        close()

        return wrapped

    return middleware


def _iterate_in(ctx: contextvars.Context, iterable: Iterable[Any]) -> Iterator[Any]:
    iterator = ctx.run(iter, iterable)
    while True:
        try:
            item = ctx.run(next, iterator)
        except StopIteration:
            return
        yield item


def _unary_response(behavior: Callable[..., Any]) -> Callable[..., Any]:
    def wrapped(request: Any, context: Any) -> Any:
        ctx = _debug_context_snapshot(debug_logs_enabled())
        return ctx.run(behavior, request, context)

    return wrapped


def _streaming_response(behavior: Callable[..., Any]) -> Callable[..., Any]:
    def wrapped(request: Any, context: Any) -> Iterator[Any]:
        ctx = _debug_context_snapshot(debug_logs_enabled())
        return _iterate_in(ctx, ctx.run(behavior, request, context))

    return wrapped


class DebugServerInterceptor(grpc.ServerInterceptor):
    """gRPC interceptor enabling debug logs per call when switched on.

    For streaming calls the setting is read when the call starts and holds
    for the whole stream.
    """

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None:
            return None
        codecs = {
            "request_deserializer": handler.request_deserializer,
            "response_serializer": handler.response_serializer,
        }
        if handler.request_streaming and handler.response_streaming:
            return grpc.stream_stream_rpc_method_handler(
                _streaming_response(handler.stream_stream), **codecs
            )
        if handler.request_streaming:
            return grpc.stream_unary_rpc_method_handler(
                _unary_response(handler.stream_unary), **codecs
            )
        if handler.response_streaming:
            return grpc.unary_stream_rpc_method_handler(
                _streaming_response(handler.unary_stream), **codecs
            )
        return grpc.unary_unary_rpc_method_handler(
            _unary_response(handler.unary_unary), **codecs
        )