"""Client for the Weather.gov forecast API."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol
from urllib.parse import urlsplit

import requests

BASE_URL = "https://api.weather.gov"
"""Base URL of the Weather.gov API."""

MAX_RETRIES = 10
RETRY_DELAY = 1.0

_PING_LAT = 34.4239263
_PING_LONG = -119.7068831


class WeatherGovError(Exception):
    """Raised when the Weather.gov API cannot provide a forecast."""


@dataclass
class Location:
    """Geographical location of a forecast."""

    lat: float
    long: float
    city: str
    state: str


@dataclass
class Period:
    """Forecast period; start and end times are RFC 3339 strings."""

    name: str
    start_time: str
    end_time: str
    temperature: int
    temperature_unit: str
    summary: str


@dataclass
class Forecast:
    """Forecast for a given location."""

    location: Location
    periods: list[Period] = field(default_factory=list)


class _Response(Protocol):
    status_code: int

    @property
    def text(self) -> str: ...

    def close(self) -> None: ...


class Doer(Protocol):
    """Anything that can issue HTTP GET requests, such as a requests session."""

    def get(self, url: str) -> Any: ...


def _points_url(lat: float, long: float) -> str:
    return f"{BASE_URL}/points/{lat:f},{long:f}"


def _decode(response: Any) -> dict:
    try:
        data = json.loads(response.text)
    except (ValueError, TypeError) as err:
        raise WeatherGovError(f"invalid response body: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise WeatherGovError("invalid response body: expected a JSON object")
    return data


def _object(data: dict, key: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise WeatherGovError(f"invalid response body: {key!r} must be an object")
    return value


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise WeatherGovError(f"invalid response body: {key!r} must be a string")
    return value


def _integer(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise WeatherGovError(f"invalid response body: {key!r} must be an integer")
    return value


def _to_periods(raw: Any) -> list[Period]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise WeatherGovError("invalid response body: 'periods' must be an array")
    periods = []
    for item in raw:
        if item is None:
            item = {}
        if not isinstance(item, dict):
            raise WeatherGovError("invalid response body: period must be an object")
        periods.append(
            Period(
                name=_string(item, "name"),
                start_time=_string(item, "startTime"),
                end_time=_string(item, "endTime"),
                temperature=_integer(item, "temperature"),
                temperature_unit=_string(item, "temperatureUnit"),
                summary=_string(item, "shortForecast"),
            )
        )
    return periods


class WeatherGovClient:
    """Client for the Weather.gov API.

    Requests answered with a status other than 200 are retried up to ten
    times, one second apart.
    """

    def __init__(
        self,
        session: Doer | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session: Doer = session if session is not None else requests.Session()
        self._sleep = sleep

    def get_forecast(self, lat: float, long: float) -> Forecast:
        """Return the forecast for the given location."""
        response = self._get_with_retries(_points_url(lat, long))
        try:
            point = _decode(response)
        finally:
            response.close()
        properties = _object(point, "properties")
        forecast_url = _string(properties, "forecast")
        relative = _object(_object(properties, "relativeLocation"), "properties")

        parts = urlsplit(forecast_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise WeatherGovError(
                f'failed to parse forecastURL "{forecast_url}": '
                "unsupported or missing scheme or host"
            )
        response = self._get_with_retries(forecast_url)
        try:
            forecast = _decode(response)
        finally:
            response.close()
        periods = _to_periods(_object(forecast, "properties").get("periods"))
        return Forecast(
            location=Location(
                lat=lat,
                long=long,
                city=_string(relative, "city"),
                state=_string(relative, "state"),
            ),
            periods=periods,
        )

    def name(self) -> str:
        """Return the client name used to report health check issues."""
        return "weathergov"

    def ping(self) -> None:
        """Check that the API is reachable; raise WeatherGovError otherwise."""
        response = self._get_with_retries(_points_url(_PING_LAT, _PING_LONG))
        response.close()

    def _request(self, url: str) -> Any:
        try:
            return self._session.get(url)
        except requests.RequestException as err:
            raise WeatherGovError(str(err)) from err

    def _get_with_retries(self, url: str) -> Any:
        response = self._request(url)
        retries = 0
        while response.status_code != 200 and retries < MAX_RETRIES:
            response.close()
            self._sleep(RETRY_DELAY)
            response = self._request(url)
            retries += 1
        if response.status_code != 200:
            try:
                message = response.text
            except Exception:
                message = "unknown error"
            response.close()
            raise WeatherGovError(
                f"unexpected response status code {response.status_code} ({message})"
            )
        return response