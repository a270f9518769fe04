"""Types, endpoints and client of the Forecaster service."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

SERVICE_NAME = "Forecaster"
API_VERSION = "1.0.0"
METHOD_NAMES = ("forecast",)

Endpoint = Callable[[Any], Any]
Middleware = Callable[[Endpoint], Endpoint]

_EXAMPLE_MESSAGE = "'{\n      \"lat\": 37.8267,\n      \"long\": -122.4233\n   }'"


@dataclass
class ForecastPayload:
    """Payload of the forecast method."""

    lat: float = 0.0
    long: float = 0.0


@dataclass
class Location:
    """Geographical location."""

    lat: float
    long: float
    city: str
    state: str


@dataclass
class Period:
    """Weather forecast period."""

    name: str
    start_time: str
    end_time: str
    temperature: int
    temperature_unit: str
    summary: str


@dataclass
class Forecast:
    """Result of the forecast method."""

    location: Location | None = None
    periods: list[Period] = field(default_factory=list)


class Service(Protocol):
    """Service that provides weather forecasts."""

    def forecast(self, payload: ForecastPayload) -> Forecast: ...


def new_forecast_endpoint(service: Service) -> Endpoint:
    """Return an endpoint calling the service forecast method."""

    def endpoint(request: Any) -> Any:
        if not isinstance(request, ForecastPayload):
            raise TypeError(
                f"invalid forecast payload type {type(request).__name__}"
            )
        return service.forecast(request)

    return endpoint


@dataclass
class Endpoints:
    """The Forecaster service endpoints."""

    forecast: Endpoint

    def use(self, middleware: Middleware) -> None:
        """Apply ``middleware`` to every endpoint."""
        self.forecast = middleware(self.forecast)


def new_endpoints(service: Service) -> Endpoints:
    """Wrap the service methods with endpoints."""
    return Endpoints(forecast=new_forecast_endpoint(service))


class Client:
    """Forecaster service client built on top of endpoints."""

    def __init__(self, forecast_endpoint: Endpoint) -> None:
        self.forecast_endpoint = forecast_endpoint

    def forecast(self, payload: ForecastPayload) -> Forecast:
        """Call the forecast endpoint."""
        result = self.forecast_endpoint(payload)
        if not isinstance(result, Forecast):
            raise TypeError(f"unexpected forecast result type {type(result).__name__}")
        return result


def _invalid_message(err: Any) -> ValueError:
    return ValueError(
        f"invalid JSON for message, \nerror: {err}, \n"
        f"example of valid JSON:\n{_EXAMPLE_MESSAGE}"
    )


def _number(data: dict, key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid_message(f"field {key!r} must be a number")
    return float(value)


def build_forecast_payload(message: str) -> ForecastPayload:
    """Build a forecast payload from a JSON message given on the command line."""
    if not message:
        return ForecastPayload()
    try:
        data = json.loads(message)
    except json.JSONDecodeError as err:
        raise _invalid_message(err) from err
    if data is None:
        return ForecastPayload()
    if not isinstance(data, dict):
        raise _invalid_message("message must be a JSON object")
    return ForecastPayload(lat=_number(data, "lat"), long=_number(data, "long"))