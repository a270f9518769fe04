"""Runtime control of debug logs and debug logging of endpoint payloads."""

from __future__ import annotations

import contextlib
import contextvars
import logging
import threading
from typing import Any, Callable, Iterable, Iterator, Protocol
from urllib.parse import parse_qs

from clue.debug_options import (
    DebugLogEnablerOption,
    LogPayloadsOption,
    default_debug_log_enabler_options,
    default_log_payloads_options,
)

logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]
Endpoint = Callable[[Any], Any]
EndpointMiddleware = Callable[[Endpoint], Endpoint]


class Muxer(Protocol):
    """WSGI request multiplexer used to mount the debug endpoints."""

    def __call__(
        self, environ: dict, start_response: Callable[..., Any]
    ) -> Iterable[bytes]: ...

    def handle(self, pattern: str, handler: WSGIApp) -> None: ...

    def handle_func(self, pattern: str, handler: WSGIApp) -> None: ...


_debug_logs = threading.Event()
_debug_context: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "clue_debug_logs", default=False
)


def debug_logs_enabled() -> bool:
    """Return whether debug logs are switched on process-wide."""
    return _debug_logs.is_set()


def set_debug_logs(enabled: bool) -> None:
    """Switch debug logs on or off process-wide."""
    if enabled:
        _debug_logs.set()
    else:
        _debug_logs.clear()


def debug_context_enabled() -> bool:
    """Return whether debug logs are enabled for the current request."""
    return _debug_context.get()


@contextlib.contextmanager
def _debug_scope(enabled: bool) -> Iterator[None]:
    token = _debug_context.set(enabled)
    try:
        yield
    finally:
        _debug_context.reset(token)


def _debug_context_snapshot(enabled: bool) -> contextvars.Context:
    ctx = contextvars.copy_context()
    ctx.run(_debug_context.set, enabled)
    return ctx


def mount_debug_log_enabler(mux: Muxer, *args: DebugLogEnablerOption) -> None:
    """Mount an endpoint that reports and toggles the debug logs status.

    The query parameter (``debug-logs`` by default) set to the on value
    (``on``) enables debug logs, set to the off value (``off``) disables them;
    in all cases the endpoint replies with the current status.
    """
    opts = default_debug_log_enabler_options()
    for opt in args:
        opt(opts)
    path = opts.path if opts.path.startswith("/") else "/" + opts.path

    def enabler(environ: dict, start_response: Callable[..., Any]) -> list[bytes]:
        params = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        value = params.get(opts.query, [""])[0]
        if value == opts.on_value:
            set_debug_logs(True)
        elif value == opts.off_value:
            set_debug_logs(False)
        current = opts.on_value if debug_logs_enabled() else opts.off_value
        body = f'{{"{opts.query}":"{current}"}}'.encode()
        start_response(
            "200 OK",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]

    mux.handle(path, enabler)


def log_payloads(*args: LogPayloadsOption | None) -> EndpointMiddleware:
    """Return an endpoint middleware logging requests and results at debug level.

    Values are formatted only when debug logs are enabled for the request.
    """
    options = default_log_payloads_options()
    for opt in args:
        if opt is not None:
            opt(options)
    req_key, res_key = "payload", "result"
    if options.client:
        req_key, res_key = "client-" + req_key, "client-" + res_key

    def middleware(next_endpoint: Endpoint) -> Endpoint:
        def endpoint(request: Any) -> Any:
            if not debug_context_enabled():
                return next_endpoint(request)
            logger.debug("%s=%s", req_key, options.format(request)[: options.max_size])
            result = next_endpoint(request)
            logger.debug("%s=%s", res_key, options.format(result)[: options.max_size])
            return result

        return endpoint

    return middleware