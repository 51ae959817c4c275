from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Mapping

from ..tariffs.resolver import TariffResolver
from ..weather.forecast import ForecastResolver
from .aggregator import aggregate
from .availability import AvailabilityRanker
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import (
    AggregatedEntry,
    Candidate,
    Coordinate,
    Criterion,
    PreferenceWeights,
    RankingContext,
)
from .price import PriceRanker
from .scoring import Ranker
from .validation import validate_eta, validate_preferences
from .weather import WeatherRanker

logger = logging.getLogger(__name__)


def _as_candidate(value: Candidate | Mapping[str, Any]) -> Candidate:
    return value if isinstance(value, Candidate) else Candidate.model_validate(value)


def _as_coordinate(value: Coordinate | Mapping[str, Any]) -> Coordinate:
    return value if isinstance(value, Coordinate) else Coordinate.model_validate(value)


def rank(
    destination: Coordinate | Mapping[str, Any],
    candidates: Iterable[Candidate | Mapping[str, Any]],
    weights: PreferenceWeights | Mapping[str, Any],
    eta: str,
    *,
    tariff_resolver: TariffResolver,
    forecast_resolver: ForecastResolver,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> dict[str, AggregatedEntry]:
    """
    Rank carparks near *destination* by availability, hourly rate and weather.

    Returns an ordered mapping of carpark id -> aggregated scores, best first.
    Raises ``RankingValidationError`` for malformed weights or ETA before any
    collaborator is called.
    """
    start_time = time.time()

    preferences = validate_preferences(weights)
    eta = validate_eta(eta)
    context = RankingContext(destination=_as_coordinate(destination), eta=eta)

    pool_candidates = [_as_candidate(c) for c in candidates]
    if not pool_candidates:
        return {}

    rankers: list[Ranker] = [
        AvailabilityRanker(config),
        WeatherRanker(forecast_resolver, config),
        PriceRanker(tariff_resolver, config),
    ]
    with ThreadPoolExecutor(max_workers=len(rankers)) as pool:
        futures = {r.criterion: pool.submit(r.rank, pool_candidates, context) for r in rankers}
        results = {criterion: future.result() for criterion, future in futures.items()}

    ranked = aggregate(
        results[Criterion.availability],
        results[Criterion.weather_condition],
        results[Criterion.hourly_rate],
        preferences,
    )

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.debug("Ranked %d carparks in %.1f ms", len(ranked), elapsed_ms)
    return ranked
