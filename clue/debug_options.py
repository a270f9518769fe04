"""Options for the debug payload logger and the debug log enabler."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Callable

FormatFunc = Callable[[Any], str]

DEFAULT_MAX_SIZE = 1024
"""Default maximum size of a logged payload or result."""


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json(value: Any) -> str:
    """Format ``value`` as compact JSON, or describe why it cannot be."""
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, default=_to_jsonable
        )
    except (TypeError, ValueError) as err:
        return f"<invalid: {err}>"


@dataclass
class LogPayloadsOptions:
    """Settings of the payload logging middleware."""

    max_size: int = DEFAULT_MAX_SIZE
    format: FormatFunc = format_json
    client: bool = False


@dataclass
class DebugLogEnablerOptions:
    """Settings of the debug log enabler endpoint."""

    path: str = "debug"
    query: str = "debug-logs"
    on_value: str = "on"
    off_value: str = "off"


LogPayloadsOption = Callable[[LogPayloadsOptions], None]
DebugLogEnablerOption = Callable[[DebugLogEnablerOptions], None]


def default_log_payloads_options() -> LogPayloadsOptions:
    """Return payload logging options with default values."""
    return LogPayloadsOptions()


def default_debug_log_enabler_options() -> DebugLogEnablerOptions:
    """Return debug log enabler options with default values."""
    return DebugLogEnablerOptions()


def with_format(fn: FormatFunc) -> LogPayloadsOption:
    """Set the function used to format logged payloads and results."""

    def apply(o: LogPayloadsOptions) -> None:
        o.format = fn

    return apply


def with_max_size(n: int) -> LogPayloadsOption:
    """Set the maximum size of a single logged value."""

    def apply(o: LogPayloadsOptions) -> None:
        o.max_size = n

    return apply


def with_client() -> LogPayloadsOption:
    """Prefix logged keys with ``client-``."""

    def apply(o: LogPayloadsOptions) -> None:
        o.client = True

    return apply


def with_path(path: str) -> DebugLogEnablerOption:
    """Set the URL path of the debug log enabler."""

    def apply(o: DebugLogEnablerOptions) -> None:
        o.path = path

    return apply


def with_query(query: str) -> DebugLogEnablerOption:
    """Set the query parameter name that toggles debug logs."""

    def apply(o: DebugLogEnablerOptions) -> None:
        o.query = query

    return apply


def with_on_value(onval: str) -> DebugLogEnablerOption:
    """Set the query parameter value that enables debug logs."""

    def apply(o: DebugLogEnablerOptions) -> None:
        o.on_value = onval

    return apply


def with_off_value(offval: str) -> DebugLogEnablerOption:
    """Set the query parameter value that disables debug logs."""

    def apply(o: DebugLogEnablerOptions) -> None:
        o.off_value = offval

    return apply