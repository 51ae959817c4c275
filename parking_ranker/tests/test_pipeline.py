from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from parking_ranker import Candidate, Coordinate, RankingValidationError, rank
from parking_ranker.ranking.models import Criterion
from parking_ranker.tariffs.clock import fixed_clock
from parking_ranker.tariffs.resolver import AgencyTariffResolver
from parking_ranker.weather.forecast import DistrictForecastResolver

DESTINATION = {"latitude": 1.3432438, "longitude": 103.682751}


def _slot(cid, lots, lat=1.3454251335793708, lon=103.71339091636777, development="BLK 221 BOON LAY PLACE"):
    return {
        "id": cid,
        "area": "",
        "development": development,
        "latitude": lat,
        "longitude": lon,
        "available_lots": lots,
        "lot_type": "C",
        "agency": "HDB",
    }


NEARBY_SLOTS = [
    _slot("BL1", 47, lat=1.34687470765211, lon=103.70923455522829, development="BLK 174/179 BOON LAY DRIVE"),
    _slot("BL2", 27),
    _slot("BL3", 2),
    _slot("BL4", 253),
    _slot("BL5", 397),
]

FORECAST_PAYLOAD = {
    "area_metadata": [
        {"name": "Jurong West", "label_location": {"latitude": 1.34039, "longitude": 103.705}},
        {"name": "City", "label_location": {"latitude": 1.292, "longitude": 103.844}},
    ],
    "items": [
        {
            "forecasts": [
                {"area": "Jurong West", "forecast": "Thundery Showers"},
                {"area": "City", "forecast": "Cloudy"},
            ]
        }
    ],
}

ETA = "22:39"


def _rank(preferences, slots=NEARBY_SLOTS, eta=ETA, weekday=2):
    return rank(
        DESTINATION,
        slots,
        preferences,
        eta,
        tariff_resolver=AgencyTariffResolver.default(clock=fixed_clock(weekday)),
        forecast_resolver=DistrictForecastResolver.from_payload(FORECAST_PAYLOAD),
    )


def _weighted(result):
    return {cid: entry.weighted_score for cid, entry in result.items()}


# ── Reference scenarios ──────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("preferences", "expected"),
    [
        (
            {"weather": 0, "hourlyRate": 2, "availability": 1},
            {"BL1": 0.833, "BL2": 0.583, "BL3": 0.333, "BL4": 0.416, "BL5": 0.333},
        ),
        (
            {"weather": 3, "hourlyRate": 2, "availability": 1},
            {"BL1": 0.916, "BL2": 0.666, "BL3": 0.416, "BL4": 0.333, "BL5": 0.166},
        ),
        (
            {"weather": 1, "hourlyRate": 2, "availability": 3},
            {"BL1": 0.75, "BL2": 0.5, "BL3": 0.25, "BL4": 0.5, "BL5": 0.5},
        ),
        (
            {"weather": 3, "hourlyRate": 1, "availability": 2},
            {"BL1": 0.833, "BL2": 0.583, "BL3": 0.333, "BL4": 0.416, "BL5": 0.333},
        ),
        (
            {"weather": 0, "hourlyRate": 0, "availability": 0},
            {"BL1": 0.0, "BL2": 0.0, "BL3": 0.0, "BL4": 0.0, "BL5": 0.0},
        ),
    ],
)
def test_reference_scenarios(preferences, expected):
    result = _rank(preferences)
    weighted = _weighted(result)
    assert set(weighted) == set(expected)
    for cid, score in expected.items():
        assert weighted[cid] == pytest.approx(score, abs=0.01)


def test_result_is_ordered_best_first():
    result = _rank({"weather": 0, "hourlyRate": 2, "availability": 1})
    assert list(result)[:3] == ["BL1", "BL2", "BL4"]
    scores = list(_weighted(result).values())
    assert scores == sorted(scores, reverse=True)


def test_individual_scores_per_criterion():
    result = _rank({"weather": 3, "hourlyRate": 2, "availability": 1})
    assert result["BL5"].individual_scores == {
        Criterion.availability: 1.0,
        Criterion.weather_condition: 0.0,
        Criterion.hourly_rate: 0.0,
    }
    assert result["BL1"].individual_scores[Criterion.weather_condition] == 1.0


def test_accepts_models_and_snake_case_weights():
    candidates = [Candidate.model_validate(slot) for slot in NEARBY_SLOTS]
    result = rank(
        Coordinate(**DESTINATION),
        candidates,
        {"weather": 0, "hourly_rate": 2, "availability": 1},
        ETA,
        tariff_resolver=AgencyTariffResolver.default(clock=fixed_clock(0)),
        forecast_resolver=DistrictForecastResolver.from_payload(FORECAST_PAYLOAD),
    )
    assert result["BL1"].weighted_score == pytest.approx(0.833, abs=0.01)


def test_accepts_camel_case_candidate_fields():
    slots = [
        {**{k: v for k, v in slot.items() if k not in ("available_lots", "lot_type")},
         "availableLots": slot["available_lots"], "lotType": slot["lot_type"]}
        for slot in NEARBY_SLOTS
    ]
    preferences = {"weather": 0, "hourlyRate": 2, "availability": 1}
    result = _rank(preferences, slots=slots)
    assert result["BL5"].individual_scores[Criterion.availability] == 1.0
    assert result == _rank(preferences)


@pytest.mark.parametrize("missing", ["latitude", "available_lots", "lot_type", "agency"])
def test_candidate_missing_required_field_is_rejected(missing):
    slot = {k: v for k, v in NEARBY_SLOTS[0].items() if k != missing}
    with pytest.raises(ValidationError):
        Candidate.model_validate(slot)


def test_candidate_filtered_by_availability_still_ranked():
    slots = NEARBY_SLOTS + [_slot("FULL", 0)]
    result = _rank({"weather": 3, "hourlyRate": 2, "availability": 1}, slots=slots)
    assert "FULL" in result
    assert Criterion.availability not in result["FULL"].individual_scores
    assert 0.0 <= result["FULL"].weighted_score <= 1.0


def test_single_candidate_scores_one_everywhere():
    result = _rank({"weather": 3, "hourlyRate": 2, "availability": 1}, slots=NEARBY_SLOTS[:1])
    assert result["BL1"].individual_scores == {
        Criterion.availability: 1.0,
        Criterion.weather_condition: 1.0,
        Criterion.hourly_rate: 1.0,
    }
    assert result["BL1"].weighted_score == pytest.approx(1.0)


def test_central_carpark_ranks_first_on_price():
    slots = [_slot("BL1", 10), _slot("ACB", 10)]
    result = _rank({"weather": 0, "hourlyRate": 1, "availability": 0}, slots=slots, eta="12:00", weekday=0)
    assert list(result) == ["ACB", "BL1"]


# ── Edge cases & validation ──────────────────────────────────────────────


def _collaborators():
    tariffs = MagicMock()
    forecasts = MagicMock()
    return tariffs, forecasts


def test_empty_candidates_returns_empty_without_lookups():
    tariffs, forecasts = _collaborators()
    result = rank(
        DESTINATION, [], {"weather": 0, "hourlyRate": 2, "availability": 1}, ETA,
        tariff_resolver=tariffs, forecast_resolver=forecasts,
    )
    assert result == {}
    tariffs.rate.assert_not_called()
    forecasts.forecast.assert_not_called()


@pytest.mark.parametrize(
    "preferences",
    [
        {},
        {"weather": 0, "hourlyRate": 2},
        {"availability": 1, "weather": 0},
        {"availability": -1, "weather": 0, "hourlyRate": 2},
        {"availability": "high", "weather": 0, "hourlyRate": 2},
        {"availability": True, "weather": 2, "hourlyRate": 3},
        {"availability": 1, "weather": "2", "hourlyRate": 3},
        {"availability": 1, "weather": 2, "hourlyRate": 3.0},
        None,
    ],
)
def test_invalid_preferences_fail_before_scoring(preferences):
    tariffs, forecasts = _collaborators()
    with pytest.raises(RankingValidationError, match="Invalid Preferences"):
        rank(
            DESTINATION, NEARBY_SLOTS, preferences, ETA,
            tariff_resolver=tariffs, forecast_resolver=forecasts,
        )
    tariffs.rate.assert_not_called()
    forecasts.forecast.assert_not_called()


@pytest.mark.parametrize("eta", ["123412341234", "24:00", "9pm", "12:30\n", "", None])
def test_invalid_eta_fails_before_scoring(eta):
    tariffs, forecasts = _collaborators()
    with pytest.raises(RankingValidationError, match="Invalid ETA"):
        rank(
            DESTINATION, NEARBY_SLOTS, {"weather": 0, "hourlyRate": 2, "availability": 1}, eta,
            tariff_resolver=tariffs, forecast_resolver=forecasts,
        )
    tariffs.rate.assert_not_called()
    forecasts.forecast.assert_not_called()


def test_collaborator_failures_degrade_gracefully():
    tariffs, forecasts = _collaborators()
    tariffs.rate.side_effect = TimeoutError("tariff service")
    forecasts.forecast.side_effect = TimeoutError("forecast service")
    result = rank(
        DESTINATION, NEARBY_SLOTS, {"weather": 3, "hourlyRate": 2, "availability": 1}, ETA,
        tariff_resolver=tariffs, forecast_resolver=forecasts,
    )
    assert len(result) == 5
    assert result["BL1"].weighted_score == pytest.approx(0.916, abs=0.01)
