"""Instrumentation helpers: adaptive sampling, debug log control, payload logging and a sample forecast service."""

__version__ = "0.1.0"

__all__ = [
    "adapters",
    "debug",
    "debug_options",
    "forecaster",
    "forecaster_types",
    "middleware",
    "options",
    "sampler",
    "weathergov",
]