from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

CENTRAL_CARPARKS: tuple[str, ...] = (
    "ACB",
    "BBB",
    "BRB1",
    "CY",
    "DUXM",
    "HLM",
    "KAB",
    "KAM",
    "KAS",
    "PRM",
    "SLS",
    "SR1",
    "SR2",
    "TPM",
    "UCS",
    "WCB",
)


@dataclass(frozen=True)
class TariffConfig:
    timezone: str = os.getenv("PARKING_TIMEZONE", "Asia/Singapore")
    central_carparks: tuple[str, ...] = CENTRAL_CARPARKS
    # Hourly rates, i.e. twice the per-half-hour charge
    central_peak_rate: float = 2.4
    standard_rate: float = 1.2
    peak_start: time = time(7, 0)
    peak_end: time = time(17, 0)
    vehicle_category: str = "Car"
    default_block_minutes: int = 30
    overnight: bool = False


DEFAULT_TARIFF_CONFIG = TariffConfig()
