"""Ketosis classification and ketone log tracking."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from nutrition_progress.domain.ketones import KetoneLog, KetoneStats, KetosisStatus
from nutrition_progress.services.clock import Clock, SystemClock
from nutrition_progress.services.rounding import round_to

_logger = logging.getLogger(__name__)

KETOSIS_THRESHOLD = 0.5
OPTIMAL_THRESHOLD = 1.0
HIGH_THRESHOLD = 3.0
MAX_KETONE_LEVEL = 10.0
MAX_RECENT_LOGS = 100
STATS_TREND_WINDOW = 3
STATS_TREND_THRESHOLD = 0.2


class KetoneLevelError(ValueError):
    """Raised when a ketone reading falls outside the plausible range."""


def classify(ketone_level: float) -> KetosisStatus:
    """Map a blood ketone level in mmol/L to a ketosis status."""
    if ketone_level < KETOSIS_THRESHOLD:
        return KetosisStatus(in_ketosis=False, level="none")
    if ketone_level < OPTIMAL_THRESHOLD:
        return KetosisStatus(in_ketosis=True, level="light")
    if ketone_level < HIGH_THRESHOLD:
        return KetosisStatus(in_ketosis=True, level="optimal")
    return KetosisStatus(in_ketosis=True, level="high")


def net_carbs(total_carbs: float, fiber: float) -> float:
    """Return total carbs minus fiber, never below zero."""
    return max(0, total_carbs - fiber)


def calculate_ketone_stats(logs: list[KetoneLog]) -> KetoneStats:
    """Summarize readings ordered most recent first.

    A UTC day counts as in ketosis when any reading that day reaches the
    ketosis threshold. The trend compares the three latest readings with the
    three before them and needs at least six readings.
    """
    if not logs:
        return KetoneStats(
            avg_level=0,
            min_level=0,
            max_level=0,
            days_in_ketosis=0,
            total_days=0,
            ketosis_rate=0,
            trend="none",
        )

    levels = [log.ketone_level for log in logs]
    days: dict[date, bool] = {}
    for log in logs:
        day = log.timestamp.astimezone(UTC).date()
        days[day] = days.get(day, False) or log.ketone_level >= KETOSIS_THRESHOLD

    total_days = len(days)
    days_in_ketosis = sum(1 for in_ketosis in days.values() if in_ketosis)

    trend = "none"
    if len(logs) >= STATS_TREND_WINDOW * 2:
        recent = sum(levels[:STATS_TREND_WINDOW]) / STATS_TREND_WINDOW
        older = (
            sum(levels[STATS_TREND_WINDOW : STATS_TREND_WINDOW * 2])
            / STATS_TREND_WINDOW
        )
        if recent > older + STATS_TREND_THRESHOLD:
            trend = "improving"
        elif recent < older - STATS_TREND_THRESHOLD:
            trend = "declining"
        else:
            trend = "stable"

    return KetoneStats(
        avg_level=round_to(sum(levels) / len(levels), 2),
        min_level=round_to(min(levels), 2),
        max_level=round_to(max(levels), 2),
        days_in_ketosis=days_in_ketosis,
        total_days=total_days,
        ketosis_rate=round_to(days_in_ketosis / total_days, 2),
        trend=trend,
    )


class KetoneRepository(Protocol):
    """Persistence interface for ketone readings."""

    def create(
        self,
        user_id: UUID,
        ketone_level: float,
        measurement_type: str,
        notes: str | None,
        timestamp: datetime,
    ) -> KetoneLog:
        """Store a reading and return it."""

    def list_recent(self, user_id: UUID, limit: int) -> list[KetoneLog]:
        """Return readings most recent first."""

    def delete(self, user_id: UUID, log_id: UUID) -> bool:
        """Delete a reading owned by the user; return False if absent."""


@dataclass
class KetoneService:
    """Service for logging and reviewing ketone readings."""

    repository: KetoneRepository
    clock: Clock = field(default_factory=SystemClock)

    def log_reading(
        self,
        user_id: UUID,
        ketone_level: float,
        measurement_type: str = "blood",
        notes: str | None = None,
    ) -> tuple[KetoneLog, KetosisStatus]:
        """Store a reading and return it with its ketosis status.

        Raises:
            KetoneLevelError: if the level is negative or above 10 mmol/L.
        """
        if ketone_level < 0:
            raise KetoneLevelError("Valid ketone level required")
        if ketone_level > MAX_KETONE_LEVEL:
            raise KetoneLevelError("Ketone level seems too high. Please verify.")

        log = self.repository.create(
            user_id=user_id,
            ketone_level=ketone_level,
            measurement_type=measurement_type,
            notes=notes or None,
            timestamp=self.clock.now(),
        )
        status = classify(ketone_level)
        _logger.info(
            "Ketone reading logged: user_id=%s level=%s status=%s",
            user_id,
            ketone_level,
            status.level,
        )
        return log, status

    def recent(
        self, user_id: UUID, limit: int = 30
    ) -> tuple[list[KetoneLog], KetoneStats]:
        """Return recent readings, capped at 100, with their stats."""
        capped = min(max(limit, 1), MAX_RECENT_LOGS)
        logs = self.repository.list_recent(user_id, capped)
        return logs, calculate_ketone_stats(logs)

    def latest(self, user_id: UUID) -> tuple[KetoneLog, KetosisStatus] | None:
        """Return the latest reading with its status, if any."""
        logs = self.repository.list_recent(user_id, 1)
        if not logs:
            return None
        return logs[0], classify(logs[0].ketone_level)

    def delete(self, user_id: UUID, log_id: UUID) -> bool:
        """Delete a reading; return False when it does not exist."""
        return self.repository.delete(user_id, log_id)
