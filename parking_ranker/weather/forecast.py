from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Sequence

import numpy as np
from pydantic import BaseModel

from ..ranking.models import Coordinate

logger = logging.getLogger(__name__)


class District(BaseModel):
    name: str
    latitude: float
    longitude: float


class Forecast(BaseModel):
    district_name: str | None = None
    forecast_text: str | None = None

    def is_rain(self, indicator: str) -> bool:
        return bool(self.forecast_text) and indicator in self.forecast_text


class ForecastResolver(Protocol):
    def forecast(self, destination: Coordinate) -> Forecast:
        ...


class DistrictForecastResolver:
    """Forecast for the district whose label point is nearest the destination.

    Distances are planar over raw degrees, which is enough to pick among
    districts a few kilometres apart.
    """

    def __init__(self, districts: Sequence[District], forecasts: Mapping[str, str]) -> None:
        self._districts = list(districts)
        self._forecasts = dict(forecasts)
        self._coords = np.array(
            [[d.latitude, d.longitude] for d in self._districts], dtype=float
        ).reshape(-1, 2)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> DistrictForecastResolver:
        """Build from a 2-hour forecast response (``area_metadata`` + ``items``)."""
        districts = [
            District(
                name=area["name"],
                latitude=area["label_location"]["latitude"],
                longitude=area["label_location"]["longitude"],
            )
            for area in payload.get("area_metadata", [])
        ]
        items = payload.get("items") or [{}]
        forecasts = {f["area"]: f["forecast"] for f in items[0].get("forecasts", [])}
        return cls(districts, forecasts)

    def nearest_district(self, latitude: float, longitude: float) -> District | None:
        if not self._districts:
            return None
        deltas = self._coords - np.array([latitude, longitude])
        distances = np.sqrt((deltas ** 2).sum(axis=1))
        # argmin returns the first of equal minima
        return self._districts[int(np.argmin(distances))]

    def forecast(self, destination: Coordinate) -> Forecast:
        district = self.nearest_district(destination.latitude, destination.longitude)
        if district is None:
            logger.warning("No forecast districts available")
            return Forecast()
        text = self._forecasts.get(district.name)
        if text is None:
            logger.warning("No forecast entry for district %s", district.name)
        return Forecast(district_name=district.name, forecast_text=text)
