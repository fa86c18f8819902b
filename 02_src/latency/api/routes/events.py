"""Inbound delivery routes, one per backend."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...errors import MalformedEnvelopeError, SequenceOutOfRangeError, UnknownBackendError


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_events_router(app: IApplication) -> APIRouter:
    """Create delivery router."""
    router = APIRouter(prefix="/events", tags=["events"])

    @router.post("/{backend}", response_model=StatusResponse)
    async def deliver(backend: str, envelope: dict[str, Any] = Body(...)) -> dict:
        """Hand a backend's delivery envelope to its listener."""
        try:
            adapter = app.adapter(backend)
        except UnknownBackendError:
            raise HTTPException(status_code=404, detail=f"Unknown backend: {backend}")

        try:
            await adapter.deliver(envelope)
            return {"status": "ok"}
        except (MalformedEnvelopeError, SequenceOutOfRangeError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
