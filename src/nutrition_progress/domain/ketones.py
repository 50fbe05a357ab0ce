"""Ketone measurement domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class KetoneLog:
    """Single blood, breath or urine ketone reading."""

    id: UUID
    user_id: UUID
    timestamp: datetime
    ketone_level: float
    measurement_type: str = "blood"
    notes: str | None = None


@dataclass(frozen=True)
class KetosisStatus:
    """Discrete ketosis level for a reading."""

    in_ketosis: bool
    level: str


@dataclass(frozen=True)
class KetoneStats:
    """Summary of recent ketone readings."""

    avg_level: float
    min_level: float
    max_level: float
    days_in_ketosis: int
    total_days: int
    ketosis_rate: float
    trend: str
