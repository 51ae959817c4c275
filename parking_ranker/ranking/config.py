from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RankingConfig:
    lot_type: str = os.getenv("PARKING_LOT_TYPE", "C")
    sheltered_agency: str = os.getenv("PARKING_SHELTERED_AGENCY", "LTA")
    rain_indicator: str = "Showers"
    max_workers: int = int(os.getenv("PARKING_RANKER_WORKERS", "8"))


DEFAULT_RANKING_CONFIG = RankingConfig()
