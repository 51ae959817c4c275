from __future__ import annotations

import logging
import math
import re
from datetime import time
from pathlib import Path
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from .clock import SATURDAY, SUNDAY, minutes_of_day, parse_twelve_hour
from .config import DEFAULT_TARIFF_CONFIG, TariffConfig

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: frozenset[str] = frozenset(
    {"ppCode", "vehCat", "startTime", "endTime", "weekdayRate", "satdayRate", "sunPHRate"}
)

_AMOUNT_RE = re.compile(r"\d+(?:\.\d+)?")


def _rate_columns(weekday: int) -> tuple[str, str]:
    """Return the (rate, block-minutes) columns charged on *weekday*."""
    if weekday == SUNDAY:
        return "sunPHRate", "sunPHMin"
    if weekday == SATURDAY:
        return "satdayRate", "satdayMin"
    return "weekdayRate", "weekdayMin"


def _parse_amount(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    match = _AMOUNT_RE.search(str(value).replace(",", ""))
    return float(match.group()) if match else None


def _window_minutes(value: Any) -> float:
    try:
        return float(minutes_of_day(parse_twelve_hour(value)))
    except ValueError:
        return np.nan


def load_rate_table(path: Path | str) -> pd.DataFrame:
    """Read a CSV snapshot of a published rate table."""
    return pd.read_csv(path, dtype=str, keep_default_na=False)


class RateTableTariff:
    """Hourly rates from a published carpark rate table.

    Each row covers one carpark, vehicle category and time-of-day window, with
    separate charges for weekdays, Saturdays and Sundays/public holidays. The
    first row whose window contains the arrival time wins.
    """

    def __init__(
        self,
        table: pd.DataFrame,
        config: TariffConfig = DEFAULT_TARIFF_CONFIG,
        overnight: bool | None = None,
    ) -> None:
        missing = REQUIRED_COLUMNS - set(table.columns)
        if missing:
            raise ValueError(f"Rate table is missing columns: {sorted(missing)}")
        self._config = config
        self._overnight = config.overnight if overnight is None else overnight
        self._table = self._prepare(table)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        config: TariffConfig = DEFAULT_TARIFF_CONFIG,
        overnight: bool | None = None,
    ) -> RateTableTariff:
        return cls(pd.DataFrame(list(records)), config=config, overnight=overnight)

    @classmethod
    def from_csv(
        cls,
        path: Path | str,
        config: TariffConfig = DEFAULT_TARIFF_CONFIG,
        overnight: bool | None = None,
    ) -> RateTableTariff:
        return cls(load_rate_table(path), config=config, overnight=overnight)

    @staticmethod
    def _prepare(table: pd.DataFrame) -> pd.DataFrame:
        df = table.copy()
        df["ppCode"] = df["ppCode"].astype(str).str.strip()
        df["vehCat"] = df["vehCat"].astype(str).str.strip()
        df["_start"] = df["startTime"].map(_window_minutes)
        df["_end"] = df["endTime"].map(_window_minutes)

        unparsable = df["_start"].isna() | df["_end"].isna()
        if unparsable.any():
            logger.warning("Ignoring %d rate-table rows with unparsable time windows", int(unparsable.sum()))
        return df.loc[~unparsable].reset_index(drop=True)

    def __len__(self) -> int:
        return len(self._table)

    def rate(self, carpark_id: str, eta: time, weekday: int) -> float | None:
        df = self._table
        rows = df[(df["vehCat"] == self._config.vehicle_category) & (df["ppCode"] == carpark_id)]
        if rows.empty:
            return None

        arrival = minutes_of_day(eta)
        start, end = rows["_start"], rows["_end"]
        within = (start <= arrival) & (arrival <= end)
        if self._overnight:
            # Window crosses midnight
            wraps = end < start
            within = within | (wraps & ((arrival >= start) | (arrival <= end)))

        matches = rows.loc[within]
        if matches.empty:
            return None

        row = matches.iloc[0]
        rate_column, minutes_column = _rate_columns(weekday)
        amount = _parse_amount(row.get(rate_column))
        if amount is None:
            logger.warning("Unparsable %s %r for carpark %s", rate_column, row.get(rate_column), carpark_id)
            return None

        block = _parse_amount(row.get(minutes_column)) or self._config.default_block_minutes
        return round(amount * 60.0 / block, 4)
