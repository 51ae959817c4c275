from __future__ import annotations

from typing import Protocol, Sequence

from .models import Candidate, Criterion, RankingContext, ScoredEntry


class Ranker(Protocol):
    """One ranking criterion over a shared candidate set."""

    criterion: Criterion

    def rank(self, candidates: Sequence[Candidate], context: RankingContext) -> list[ScoredEntry]:
        ...


def score_by_rank(ranked: Sequence[Candidate], criterion: Criterion) -> list[ScoredEntry]:
    """Interpolate linearly from 1 (first) down to 0 (last).

    A single ranked candidate scores 1; an empty ranking yields no entries.
    """
    count = len(ranked)
    if count == 1:
        return [ScoredEntry(candidate_id=ranked[0].id, criterion=criterion, score=1.0)]
    return [
        ScoredEntry(candidate_id=candidate.id, criterion=criterion, score=1.0 - index / (count - 1))
        for index, candidate in enumerate(ranked)
    ]
