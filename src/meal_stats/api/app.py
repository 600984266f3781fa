"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from meal_stats.app_logging import configure_logging
from meal_stats.containers import AppContainer
from meal_stats.domain.stats import MalformedWindowError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MalformedWindowError)
    async def malformed_window(
        _request: Request, exc: MalformedWindowError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid period parameter", "message": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/statistics", response_model=None)
    async def statistics(  # noqa: PLR0913
        user_id: UUID,
        request: Request,
        period: str = "week",
        start: datetime | None = None,
        end: datetime | None = None,
        insights: bool = False,
    ) -> dict[str, object] | JSONResponse:
        """Return nutrition statistics for a user and period."""
        state_container: AppContainer = request.app.state.container
        try:
            report = state_container.stats_service.get_report(
                user_id, period, start=start, end=end
            )
        except MalformedWindowError:
            raise
        except Exception as exc:
            logger.exception("Failed to compute statistics for user %s", user_id)
            return JSONResponse(
                status_code=500,
                content={"error": "Failed to fetch statistics", "message": str(exc)},
            )
        if insights:
            report = await state_container.insight_service.enrich(report)
        return {"success": True, "data": report.to_payload()}

    return app
