"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from shopstats.analytics import JsonFileCustomerSource, OrderStatsReportService, ReportPolicy
from shopstats.api import create_api_application
from shopstats.config import AppSettings, config_load_settings


def bootstrap_create_report_service(settings: AppSettings) -> OrderStatsReportService:
    """Build report service over the configured JSON dataset.

    Args:
        settings: Validated runtime settings.

    Returns:
        OrderStatsReportService: Report service with settings-derived policy.

    Raises:
        ValueError: Raised when the dataset path is blank.
    """

    return OrderStatsReportService(
        source=JsonFileCustomerSource(dataset_path=settings.dataset_path),
        policy=ReportPolicy(
            average_scale=settings.average_price_scale,
            average_rounding=settings.average_price_rounding,
            duplicate_email_policy=settings.duplicate_email_policy,
        ),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings, loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    source = JsonFileCustomerSource(dataset_path=resolved_settings.dataset_path)
    report_service = bootstrap_create_report_service(resolved_settings)
    return create_api_application(
        settings=resolved_settings,
        source=source,
        report_service=report_service,
    )
