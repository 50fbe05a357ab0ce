"""Ketone log endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from nutrition_progress.api.auth import current_user_id
from nutrition_progress.api.models import KetoneLogRequest
from nutrition_progress.services.ketosis import KetoneLevelError

if TYPE_CHECKING:
    from nutrition_progress.containers import AppContainer

router = APIRouter(prefix="/api/ketone", tags=["ketone"])


@router.post("", response_model=None)
async def log_ketone(
    body: KetoneLogRequest, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Store a ketone reading and classify it."""
    container: AppContainer = request.app.state.container
    try:
        log, ketosis_status = container.ketone_service.log_reading(
            user_id,
            body.ketone_level,
            measurement_type=body.measurement_type,
            notes=body.notes,
        )
    except KetoneLevelError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )
    return {"log": asdict(log), "ketosis_status": asdict(ketosis_status)}


@router.get("/recent", response_model=None)
async def recent_ketones(
    request: Request,
    limit: int | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return recent readings with summary stats."""
    container: AppContainer = request.app.state.container
    logs, stats = container.ketone_service.recent(
        user_id, limit or container.settings.ketone_recent_limit
    )
    return {"logs": [asdict(log) for log in logs], "stats": asdict(stats)}


@router.get("/latest", response_model=None)
async def latest_ketone(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the latest reading, or nulls when there is none."""
    container: AppContainer = request.app.state.container
    latest = container.ketone_service.latest(user_id)
    if latest is None:
        return {"log": None, "ketosis_status": None}
    log, ketosis_status = latest
    return {"log": asdict(log), "ketosis_status": asdict(ketosis_status)}


@router.delete("/{log_id}", response_model=None)
async def delete_ketone(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Delete one of the user's readings."""
    container: AppContainer = request.app.state.container
    if not container.ketone_service.delete(user_id, log_id):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Log not found"}
        )
    return {"success": True}
