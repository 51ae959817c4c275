from __future__ import annotations

from datetime import time

from .clock import SUNDAY
from .config import DEFAULT_TARIFF_CONFIG, TariffConfig


class CentralAreaTariff:
    """Fixed two-band rule for carparks without a published rate table.

    Carparks inside the central area charge the peak rate from Monday to
    Saturday between ``peak_start`` and ``peak_end`` (both inclusive). Every
    other carpark, day and time pays the standard rate.
    """

    def __init__(self, config: TariffConfig = DEFAULT_TARIFF_CONFIG) -> None:
        self._config = config
        self._central = frozenset(config.central_carparks)

    def is_central(self, carpark_id: str) -> bool:
        return carpark_id in self._central

    def rate(self, carpark_id: str, eta: time, weekday: int) -> float:
        cfg = self._config
        if not self.is_central(carpark_id) or weekday == SUNDAY:
            return cfg.standard_rate
        if cfg.peak_start <= eta <= cfg.peak_end:
            return cfg.central_peak_rate
        return cfg.standard_rate
