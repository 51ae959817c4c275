from __future__ import annotations

import logging
from typing import Sequence

from ..geo.distance import sort_by_distance
from ..weather.forecast import Forecast, ForecastResolver
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import Candidate, Coordinate, Criterion, RankingContext, ScoredEntry
from .scoring import score_by_rank

logger = logging.getLogger(__name__)


class WeatherRanker:
    """Closest carpark first, preferring sheltered carparks when rain is forecast."""

    criterion = Criterion.weather_condition

    def __init__(
        self,
        forecast_resolver: ForecastResolver,
        config: RankingConfig = DEFAULT_RANKING_CONFIG,
    ) -> None:
        self._forecasts = forecast_resolver
        self._config = config

    def lookup_forecast(self, destination: Coordinate) -> Forecast:
        try:
            return self._forecasts.forecast(destination)
        except Exception:
            logger.warning("Forecast lookup failed, ranking without weather", exc_info=True)
            return Forecast()

    def shortlist(self, candidates: Sequence[Candidate], forecast: Forecast) -> list[Candidate]:
        if forecast.is_rain(self._config.rain_indicator):
            sheltered = [c for c in candidates if c.agency == self._config.sheltered_agency]
            if sheltered:
                return sheltered
            logger.info(
                "Rain forecast for %s but no sheltered carparks nearby", forecast.district_name
            )
        return list(candidates)

    def rank(self, candidates: Sequence[Candidate], context: RankingContext) -> list[ScoredEntry]:
        if not candidates:
            return []
        destination = context.destination
        forecast = self.lookup_forecast(destination)
        ranked = sort_by_distance(
            self.shortlist(candidates, forecast), destination.latitude, destination.longitude
        )
        return score_by_rank(ranked, self.criterion)
