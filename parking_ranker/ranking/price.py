from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ..tariffs.resolver import TariffResolver
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import Candidate, Criterion, PricedCandidate, RankingContext, ScoredEntry
from .scoring import score_by_rank

logger = logging.getLogger(__name__)


def _rate_sort_key(candidate: PricedCandidate) -> tuple[bool, float]:
    # Highest rate first, unknown rates last
    rate = candidate.parking_rate
    return (rate is None, -rate if rate is not None else 0.0)


class PriceRanker:
    """Orders candidates by hourly rate at the arrival time, highest first.

    Every candidate is kept; one whose rate cannot be resolved is priced as
    ``None`` and sorts after all priced candidates.
    """

    criterion = Criterion.hourly_rate

    def __init__(
        self,
        tariff_resolver: TariffResolver,
        config: RankingConfig = DEFAULT_RANKING_CONFIG,
    ) -> None:
        self._tariffs = tariff_resolver
        self._max_workers = config.max_workers

    def _resolve(self, candidate: Candidate, eta: str) -> float | None:
        try:
            rate = self._tariffs.rate(candidate.id, candidate.agency, eta)
            if rate is None:
                return None
            rate = float(rate)
        except Exception:
            logger.warning(
                "Tariff lookup failed for carpark %s, treating its rate as unknown",
                candidate.id,
                exc_info=True,
            )
            return None
        return None if math.isnan(rate) else rate

    def price(self, candidates: Sequence[Candidate], eta: str) -> list[PricedCandidate]:
        if not candidates:
            return []
        workers = max(1, min(self._max_workers, len(candidates)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            rates = list(pool.map(lambda c: self._resolve(c, eta), candidates))
        return [
            PricedCandidate(**candidate.model_dump(), parking_rate=rate)
            for candidate, rate in zip(candidates, rates)
        ]

    def rank(self, candidates: Sequence[Candidate], context: RankingContext) -> list[ScoredEntry]:
        priced = self.price(candidates, context.eta)
        unpriced = sum(1 for c in priced if c.parking_rate is None)
        if unpriced:
            logger.debug("%d of %d carparks have no resolvable rate", unpriced, len(priced))
        ranked = sorted(priced, key=_rate_sort_key)
        return score_by_rank(ranked, self.criterion)
