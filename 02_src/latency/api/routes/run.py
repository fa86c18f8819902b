"""Front door routes: start a run and chart the results."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ...app import IApplication
from ...chart import render_chart
from ...errors import NoDataError
from ...logging_config import get_logger

logger = get_logger(__name__)


def create_run_router(app: IApplication) -> APIRouter:
    """Create front door router."""
    router = APIRouter(tags=["run"])

    @router.get("/")
    async def start_run() -> Response:
        """Dispatch sequence 0 into every backend."""
        try:
            await app.start_run()
            return Response(status_code=200)
        except Exception as e:
            logger.error("Run failed to start: %s", e)
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/chart")
    async def chart() -> Response:
        """Render the latency chart."""
        try:
            data = await app.aggregator.compute_series()
        except NoDataError as e:
            return PlainTextResponse(str(e), status_code=500)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return HTMLResponse(render_chart(data))

    return router
