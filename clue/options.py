"""Configuration options for the telemetry setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

ErrorHandler = Callable[[BaseException], None]
Option = Callable[["Options"], None]

DEFAULT_PROPAGATORS: tuple[str, ...] = ("tracecontext", "baggage")


def new_error_handler(logger: logging.Logger) -> ErrorHandler:
    """Return an error handler that logs errors with ``logger``."""

    def handle(err: BaseException) -> None:
        logger.error("%s", err)

    return handle


@dataclass
class Options:
    """Telemetry configuration options."""

    reader_interval: float = 0.0
    max_sampling_rate: int = 2
    sample_size: int = 10
    propagators: Any = DEFAULT_PROPAGATORS
    error_handler: ErrorHandler | None = field(default=None, compare=False)


def default_options(logger: logging.Logger) -> Options:
    """Return options with default values; errors are logged with ``logger``."""
    return Options(error_handler=new_error_handler(logger))


def with_reader_interval(interval: float) -> Option:
    """Set the interval, in seconds, at which the metrics reader runs."""

    def apply(opts: Options) -> None:
        opts.reader_interval = interval

    return apply


def with_max_sampling_rate(rate: int) -> Option:
    """Set the maximum sampling rate in requests per second."""

    def apply(opts: Options) -> None:
        opts.max_sampling_rate = rate

    return apply


def with_sample_size(size: int) -> Option:
    """Set the number of requests between two sampling rate adjustments."""

    def apply(opts: Options) -> None:
        opts.sample_size = size

    return apply


def with_propagators(propagators: Any) -> Option:
    """Set the propagators used to extract and inject trace context."""

    def apply(opts: Options) -> None:
        opts.propagators = propagators

    return apply


def with_error_handler(error_handler: ErrorHandler | None) -> Option:
    """Set the error handler used by the telemetry package."""

    def apply(opts: Options) -> None:
        opts.error_handler = error_handler

    return apply