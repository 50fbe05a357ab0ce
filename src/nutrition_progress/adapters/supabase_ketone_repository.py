"""Supabase repository for ketone readings."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_progress.adapters.row_parsing import parse_datetime, parse_float
from nutrition_progress.domain.ketones import KetoneLog
from nutrition_progress.services.ketosis import KetoneRepository

_COLUMNS = "id, user_id, timestamp, ketone_level, measurement_type, notes"


@dataclass
class SupabaseKetoneRepository(KetoneRepository):
    """Supabase implementation for ketone logs."""

    client: Client

    def create(
        self,
        user_id: UUID,
        ketone_level: float,
        measurement_type: str,
        notes: str | None,
        timestamp: datetime,
    ) -> KetoneLog:
        """Insert a reading and return the stored row."""
        response = (
            self.client.table("ketone_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "ketone_level": ketone_level,
                    "measurement_type": measurement_type,
                    "notes": notes,
                    "timestamp": timestamp.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ketone log")
        return _parse_row(response.data[0])

    def list_recent(self, user_id: UUID, limit: int) -> list[KetoneLog]:
        """Return readings newest first."""
        response = (
            self.client.table("ketone_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete(self, user_id: UUID, log_id: UUID) -> bool:
        """Delete a reading owned by the user."""
        response = (
            self.client.table("ketone_logs")
            .delete()
            .eq("id", str(log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> KetoneLog:
    notes = row.get("notes")
    return KetoneLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        timestamp=parse_datetime(row.get("timestamp")),
        ketone_level=parse_float(row.get("ketone_level")),
        measurement_type=str(row.get("measurement_type") or "blood"),
        notes=str(notes) if notes else None,
    )
