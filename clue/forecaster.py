"""Forecaster service implementation backed by the Weather.gov client."""

from __future__ import annotations

from typing import Protocol

from clue import weathergov
from clue.forecaster_types import Forecast, ForecastPayload, Location, Period


class WeatherClient(Protocol):
    """Weather.gov client interface used by the service."""

    def get_forecast(self, lat: float, long: float) -> weathergov.Forecast: ...

    def name(self) -> str: ...

    def ping(self) -> None: ...


class ForecasterService:
    """Service that provides weather forecasts."""

    def __init__(self, client: WeatherClient) -> None:
        self.client = client

    def forecast(self, payload: ForecastPayload) -> Forecast:
        """Return the forecast for the payload location."""
        result = self.client.get_forecast(payload.lat, payload.long)
        loc = result.location
        location = (
            None
            if loc is None
            else Location(lat=loc.lat, long=loc.long, city=loc.city, state=loc.state)
        )
        periods = [
            Period(
                name=p.name,
                start_time=p.start_time,
                end_time=p.end_time,
                temperature=p.temperature,
                temperature_unit=p.temperature_unit,
                summary=p.summary,
            )
            for p in result.periods
        ]
        return Forecast(location=location, periods=periods)