from __future__ import annotations

import logging
from datetime import time
from typing import Mapping, Protocol

import pandas as pd

from .central_area import CentralAreaTariff
from .clock import Clock, make_clock, parse_eta
from .config import DEFAULT_TARIFF_CONFIG, TariffConfig
from .rate_table import RateTableTariff

logger = logging.getLogger(__name__)


class TariffPolicy(Protocol):
    def rate(self, carpark_id: str, eta: time, weekday: int) -> float | None:
        ...


class TariffResolver(Protocol):
    """Resolves the hourly rate a carpark charges at a given arrival time."""

    def rate(self, candidate_id: str, agency: str, eta: str) -> float | None:
        ...


class AgencyTariffResolver:
    """Route each lookup to the tariff policy owned by the carpark's agency.

    Agencies without a registered policy resolve to ``None``; the caller
    treats that as an unknown price rather than an error.
    """

    def __init__(
        self,
        policies: Mapping[str, TariffPolicy],
        clock: Clock | None = None,
        config: TariffConfig = DEFAULT_TARIFF_CONFIG,
    ) -> None:
        self._policies = dict(policies)
        self._clock = clock or make_clock(config.timezone)

    @classmethod
    def default(
        cls,
        rate_table: pd.DataFrame | None = None,
        clock: Clock | None = None,
        config: TariffConfig = DEFAULT_TARIFF_CONFIG,
    ) -> AgencyTariffResolver:
        policies: dict[str, TariffPolicy] = {"HDB": CentralAreaTariff(config)}
        if rate_table is not None:
            policies["URA"] = RateTableTariff(rate_table, config=config)
        return cls(policies, clock=clock, config=config)

    @property
    def agencies(self) -> list[str]:
        return sorted(self._policies)

    def rate(self, candidate_id: str, agency: str, eta: str) -> float | None:
        policy = self._policies.get(agency)
        if policy is None:
            logger.debug("No tariff policy for agency %r (carpark %s)", agency, candidate_id)
            return None
        return policy.rate(candidate_id, parse_eta(eta), self._clock())
