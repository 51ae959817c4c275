from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Criterion(str, Enum):
    availability = "availability"
    hourly_rate = "hourlyRate"
    weather_condition = "weatherCondition"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    area: str = ""
    development: str = ""
    latitude: float
    longitude: float
    available_lots: int = Field(..., ge=0, alias="availableLots")
    lot_type: str = Field(..., alias="lotType")
    agency: str


class PricedCandidate(Candidate):
    parking_rate: float | None = None


class PreferenceWeights(BaseModel):
    """User priority rank per criterion; 0 switches a criterion off."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    availability: int = Field(..., ge=0, strict=True)
    weather: int = Field(..., ge=0, strict=True)
    hourly_rate: int = Field(..., ge=0, strict=True, alias="hourlyRate")


class RankingContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: Coordinate
    eta: str


class ScoredEntry(BaseModel):
    candidate_id: str
    criterion: Criterion
    score: float = Field(..., ge=0.0, le=1.0)


class AggregatedEntry(BaseModel):
    candidate_id: str
    individual_scores: dict[Criterion, float] = Field(default_factory=dict)
    weighted_score: float = 0.0
