"""API router package for endpoint composition."""

from .health import api_create_health_router
from .reports import REPORT_NAMES, ReportRequestError, api_build_report_payload, api_create_reports_router

__all__ = [
	"REPORT_NAMES",
	"ReportRequestError",
	"api_build_report_payload",
	"api_create_health_router",
	"api_create_reports_router",
]
