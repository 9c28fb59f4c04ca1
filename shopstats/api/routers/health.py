"""Health endpoint router composition for app and dataset checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from shopstats.analytics import CustomerSourcePort
from shopstats.domain import DatasetLoadError, HealthStatus


def api_check_source_health(source: CustomerSourcePort) -> HealthStatus:
    """Check that the customer source can be materialized.

    Args:
        source: Customer source backing report endpoints.

    Returns:
        HealthStatus: Healthy status with the number of readable customers.

    Raises:
        DatasetLoadError: Raised when the source cannot be read.
    """

    customer_count = sum(1 for _ in source.source_iter_customers())
    return HealthStatus(status="ok", detail=f"{customer_count} customers readable")


def api_create_health_router(source: CustomerSourcePort) -> APIRouter:
    """Create health-check router with app and dataset readability status.

    Args:
        source: Customer source backing report endpoints.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when source is invalid.
    """

    if source is None:
        raise ValueError("source must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and dataset health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: Raised if the handler cannot produce a response.
        """

        try:
            source_health = api_check_source_health(source)
            payload = {
                "status": "ok",
                "app": "up",
                "dataset": source_health.status,
                "detail": source_health.detail,
                "target": source.source_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except DatasetLoadError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "dataset": "down",
                "detail": str(error),
                "target": source.source_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
