from __future__ import annotations

from typing import Iterable

from .models import AggregatedEntry, Criterion, PreferenceWeights, ScoredEntry


def group_by_candidate(*entry_lists: Iterable[ScoredEntry]) -> dict[str, AggregatedEntry]:
    """Join per-criterion entries on candidate id, in order of first appearance."""
    grouped: dict[str, AggregatedEntry] = {}
    for entries in entry_lists:
        for entry in entries:
            aggregated = grouped.get(entry.candidate_id)
            if aggregated is None:
                aggregated = grouped[entry.candidate_id] = AggregatedEntry(
                    candidate_id=entry.candidate_id
                )
            aggregated.individual_scores[entry.criterion] = entry.score
    return grouped


def assign_weights(
    availability: float,
    weather: float,
    hourly_rate: float,
) -> dict[Criterion, float]:
    """Turn priority ranks into weights.

    The divisor assumes the non-zero ranks are a permutation of 1..n (so the
    weights sum to 1); other inputs are divided the same way and simply do
    not sum to 1.
    """
    zero_count = sum(1 for rank in (availability, weather, hourly_rate) if rank == 0)
    if zero_count == 0:
        total = 6  # 1 + 2 + 3
    elif zero_count == 1:
        total = 3  # 1 + 2
    else:
        total = 1

    return {
        Criterion.availability: availability / total,
        Criterion.weather_condition: weather / total,
        Criterion.hourly_rate: hourly_rate / total,
    }


def calculate_weighted_score(
    availability: float,
    weather: float,
    hourly_rate: float,
    grouped: dict[str, AggregatedEntry],
) -> dict[str, AggregatedEntry]:
    """Write the weighted score onto every grouped entry.

    A criterion that did not rank a candidate contributes nothing to its score.
    """
    weights = assign_weights(availability, weather, hourly_rate)
    for entry in grouped.values():
        entry.weighted_score = sum(
            weight * entry.individual_scores.get(criterion, 0.0)
            for criterion, weight in weights.items()
        )
    return grouped


def aggregate(
    availability_entries: Iterable[ScoredEntry],
    weather_entries: Iterable[ScoredEntry],
    hourly_rate_entries: Iterable[ScoredEntry],
    preferences: PreferenceWeights,
) -> dict[str, AggregatedEntry]:
    grouped = group_by_candidate(availability_entries, weather_entries, hourly_rate_entries)
    calculate_weighted_score(
        preferences.availability,
        preferences.weather,
        preferences.hourly_rate,
        grouped,
    )
    # sorted() is stable, so ties keep first-appearance order
    return dict(sorted(grouped.items(), key=lambda item: item[1].weighted_score, reverse=True))
