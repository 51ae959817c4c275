from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from ..tariffs.clock import is_valid_eta
from .models import PreferenceWeights


class RankingValidationError(ValueError):
    """Malformed ranking input, raised before any candidate is scored."""


def validate_preferences(preferences: Any) -> PreferenceWeights:
    if isinstance(preferences, PreferenceWeights):
        return preferences
    if not isinstance(preferences, Mapping):
        raise RankingValidationError("Invalid Preferences")
    try:
        return PreferenceWeights.model_validate(dict(preferences))
    except ValidationError as exc:
        raise RankingValidationError("Invalid Preferences") from exc


def validate_eta(eta: Any) -> str:
    if not is_valid_eta(eta):
        raise RankingValidationError("Invalid ETA")
    return eta
