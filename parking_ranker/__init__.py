"""
Carpark recommendation core.

Responsibilities:
- Rank candidate carparks by slot availability, hourly rate and weather suitability.
- Combine the three rankings into one weighted score using user priority ranks.
- Return a deterministic, request-scoped ordering of candidates.
"""
from __future__ import annotations

from .ranking.models import AggregatedEntry, Candidate, Coordinate, PreferenceWeights
from .ranking.pipeline import rank
from .ranking.validation import RankingValidationError

__all__ = [
    "AggregatedEntry",
    "Candidate",
    "Coordinate",
    "PreferenceWeights",
    "RankingValidationError",
    "rank",
]
