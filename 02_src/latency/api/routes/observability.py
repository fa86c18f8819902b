"""Observability API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class SampleResponse(BaseModel):
    """Response model for a timing sample."""

    backend: str
    sequence: int
    dispatch_timestamp: int
    delivery_timestamp: int


class ChainProgressResponse(BaseModel):
    """Response model for one backend's progress."""

    backend: str
    samples: int
    highest_sequence: int | None


class ProgressResponse(BaseModel):
    """Response model for run progress."""

    chain_length: int
    chains: list[ChainProgressResponse]


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/samples", response_model=list[SampleResponse])
    async def get_samples(
        backend: str | None = Query(None, description="Filter by backend"),
    ) -> list[dict]:
        """Get all timing samples."""
        try:
            samples = await app.store.scan_all()
            return [
                {
                    "backend": s.backend.value,
                    "sequence": s.sequence,
                    "dispatch_timestamp": s.dispatch_timestamp,
                    "delivery_timestamp": s.delivery_timestamp,
                }
                for s in samples
                if backend is None or s.backend.value == backend
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/progress", response_model=ProgressResponse)
    async def get_progress() -> dict:
        """Get per-backend chain progress."""
        try:
            chains = await app.aggregator.progress()
            return {
                "chain_length": app.driver.chain_length,
                "chains": [
                    {
                        "backend": c.backend,
                        "samples": c.samples,
                        "highest_sequence": c.highest_sequence,
                    }
                    for c in chains
                ],
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
