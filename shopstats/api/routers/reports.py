"""Report API router composition for order statistics reads."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from shopstats.analytics import AnalyticsError, DuplicateCustomerEmailError, OrderStatsReportService
from shopstats.domain import CardType, Color, DatasetLoadError, Order
from shopstats.domain.dataset import domain_dataset_parse_enum

logger = logging.getLogger(__name__)

REPORT_NAMES = (
    "orders-for-card-type",
    "order-sizes",
    "has-color-product",
    "cards-count-for-customer",
    "most-popular-country",
    "average-product-price",
)


class ReportRequestError(ValueError):
    """Raised when report parameters are missing or unsupported.

    Attributes:
        code: Stable machine-readable error code.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


def api_create_reports_router(report_service: OrderStatsReportService) -> APIRouter:
    """Create reports router exposing one endpoint per order statistics report.

    Args:
        report_service: Report service bound to the runtime customer source.

    Returns:
        APIRouter: Router exposing `/reports/*` endpoints.

    Raises:
        ValueError: Raised when report_service is invalid.
    """

    if report_service is None:
        raise ValueError("report_service must not be None")

    router = APIRouter(prefix="/reports", tags=["reports"])

    def _respond(report_name: str, **parameters: str | None) -> JSONResponse:
        try:
            payload = api_build_report_payload(report_service, report_name, **parameters)
        except ReportRequestError as error:
            return api_error_response(status.HTTP_400_BAD_REQUEST, error.code, str(error))
        except DuplicateCustomerEmailError as error:
            return api_error_response(status.HTTP_409_CONFLICT, error.error_code, str(error))
        except AnalyticsError as error:
            return api_error_response(status.HTTP_404_NOT_FOUND, error.error_code, str(error))
        except DatasetLoadError as error:
            logger.error("Report %s failed to read source: %s", report_name, error)
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "DATASET_UNAVAILABLE", str(error))
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/orders-for-card-type")
    def api_report_orders_for_card_type(card_type: str = Query(...)) -> JSONResponse:
        """List orders paid with one card type."""

        return _respond("orders-for-card-type", card_type=card_type)

    @router.get("/order-sizes")
    def api_report_order_sizes() -> JSONResponse:
        """Group all orders by total unit quantity."""

        return _respond("order-sizes")

    @router.get("/has-color-product")
    def api_report_has_color_product(color: str = Query(...)) -> JSONResponse:
        """Check whether every order contains a product of one color."""

        return _respond("has-color-product", color=color)

    @router.get("/cards-count-for-customer")
    def api_report_cards_count_for_customer() -> JSONResponse:
        """Count distinct cards per customer email."""

        return _respond("cards-count-for-customer")

    @router.get("/most-popular-country")
    def api_report_most_popular_country() -> JSONResponse:
        """Return the country with most customers."""

        return _respond("most-popular-country")

    @router.get("/average-product-price")
    def api_report_average_product_price(card_number: str = Query(...)) -> JSONResponse:
        """Return the quantity-weighted average product price for one card number."""

        return _respond("average-product-price", card_number=card_number)

    return router


def api_build_report_payload(
    report_service: OrderStatsReportService,
    report_name: str,
    card_type: str | None = None,
    color: str | None = None,
    card_number: str | None = None,
) -> dict[str, object]:
    """Run one named report and serialize its result to a JSON payload.

    Args:
        report_service: Report service bound to a customer source.
        report_name: One of `REPORT_NAMES`.
        card_type: Card type name for `orders-for-card-type`.
        color: Color name for `has-color-product`.
        card_number: Card number for `average-product-price`.

    Returns:
        dict[str, object]: JSON-serializable report payload.

    Raises:
        ReportRequestError: Raised when the report name or a parameter is invalid.
        AnalyticsError: Raised when the report cannot produce a value.
        DatasetLoadError: Raised when the customer source cannot be read.
    """

    if report_name == "orders-for-card-type":
        resolved_card_type = _api_require_enum(CardType, card_type, "card_type", "INVALID_CARD_TYPE")
        orders = report_service.report_orders_for_card_type(resolved_card_type)
        return {
            "report": report_name,
            "card_type": resolved_card_type.value,
            "items": [api_serialize_order(order) for order in orders],
            "returned": len(orders),
        }

    if report_name == "order-sizes":
        orders_by_size = report_service.report_order_sizes()
        return {
            "report": report_name,
            "buckets": [
                {
                    "size": size,
                    "orders": [api_serialize_order(order) for order in orders_by_size[size]],
                }
                for size in sorted(orders_by_size)
            ],
        }

    if report_name == "has-color-product":
        resolved_color = _api_require_enum(Color, color, "color", "INVALID_COLOR")
        return {
            "report": report_name,
            "color": resolved_color.value,
            "result": report_service.report_has_color_product(resolved_color),
        }

    if report_name == "cards-count-for-customer":
        return {
            "report": report_name,
            "policy": report_service.policy.duplicate_email_policy.value,
            "counts": report_service.report_cards_count_for_customer(),
        }

    if report_name == "most-popular-country":
        return {
            "report": report_name,
            "country": report_service.report_most_popular_country(),
        }

    if report_name == "average-product-price":
        if card_number is None or not card_number.strip():
            raise ReportRequestError("MISSING_CARD_NUMBER", "card_number must not be blank")
        average_price = report_service.report_average_product_price_for_credit_card(card_number)
        return {
            "report": report_name,
            "card_number": card_number,
            "average_price": str(average_price),
            "scale": report_service.policy.average_scale,
            "rounding": report_service.policy.average_rounding,
        }

    raise ReportRequestError("UNKNOWN_REPORT", f"unsupported report={report_name}")


def api_serialize_order(order: Order) -> dict[str, object]:
    """Serialize one order to JSON payload with decimal prices as strings.

    Args:
        order: Domain order.

    Returns:
        dict[str, object]: JSON-serializable order payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "payment_info": {
            "card_type": order.payment_info.card_type.value,
            "card_number": order.payment_info.card_number,
        },
        "order_items": [
            {
                "product": {
                    "name": item.product.name,
                    "price": str(item.product.price),
                    "color": item.product.color.value,
                },
                "quantity": item.quantity,
            }
            for item in order.order_items
        ],
    }


def api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build error envelope response."""

    return JSONResponse(
        content={"status": "error", "code": code, "message": message},
        status_code=status_code,
    )


def _api_require_enum(enum_type, value: str | None, field_name: str, error_code: str):
    resolved_value = domain_dataset_parse_enum(enum_type, value)
    if resolved_value is None:
        supported_values = ", ".join(enum_type.__members__)
        raise ReportRequestError(error_code, f"unsupported {field_name}={value}; expected one of {supported_values}")
    return resolved_value


__all__ = [
    "REPORT_NAMES",
    "ReportRequestError",
    "api_build_report_payload",
    "api_create_reports_router",
    "api_error_response",
    "api_serialize_order",
]
