"""FastAPI application factory for the report service.

This module defines API application composition used by the runtime.
"""

from fastapi import FastAPI

from shopstats.analytics import CustomerSourcePort, OrderStatsReportService
from shopstats.config import AppSettings

from .routers import api_create_health_router, api_create_reports_router


def create_api_application(
    settings: AppSettings,
    source: CustomerSourcePort,
    report_service: OrderStatsReportService,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        source: Customer source used by health endpoints.
        report_service: Report service used by report endpoints.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="Shop Stats")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Minimal response for API framework verification.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "shopstats",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(source=source))
    application.include_router(api_create_reports_router(report_service=report_service))

    return application
