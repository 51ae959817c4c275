from __future__ import annotations

from typing import Sequence

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import Candidate, Criterion, RankingContext, ScoredEntry
from .scoring import score_by_rank


class AvailabilityRanker:
    """Most free lots first, restricted to lots of the configured type."""

    criterion = Criterion.availability

    def __init__(self, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> None:
        self._lot_type = config.lot_type

    def eligible(self, candidates: Sequence[Candidate]) -> list[Candidate]:
        return [c for c in candidates if c.available_lots > 0 and c.lot_type == self._lot_type]

    def rank(
        self,
        candidates: Sequence[Candidate],
        context: RankingContext | None = None,
    ) -> list[ScoredEntry]:
        ranked = sorted(self.eligible(candidates), key=lambda c: c.available_lots, reverse=True)
        return score_by_rank(ranked, self.criterion)
