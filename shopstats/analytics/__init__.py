"""Analytics layer package for order statistics reports."""

from .accumulator import DEFAULT_AVERAGE_ROUNDING, DEFAULT_AVERAGE_SCALE, WeightedAverageAccumulator
from .errors import AnalyticsError, DuplicateCustomerEmailError, EmptyAggregationError
from .interfaces import CustomerSourcePort, InMemoryCustomerSource, JsonFileCustomerSource
from .order_stats import (
	DuplicateKeyPolicy,
	stats_average_product_price_for_credit_card,
	stats_cards_count_for_customer,
	stats_has_color_product,
	stats_iter_orders,
	stats_most_popular_country,
	stats_order_has_color,
	stats_order_size,
	stats_order_sizes,
	stats_orders_for_card_type,
	stats_price_accumulator_for_credit_card,
)
from .report_service import OrderStatsReportService, ReportPolicy

__all__ = [
	"DEFAULT_AVERAGE_ROUNDING",
	"DEFAULT_AVERAGE_SCALE",
	"WeightedAverageAccumulator",
	"AnalyticsError",
	"DuplicateCustomerEmailError",
	"EmptyAggregationError",
	"CustomerSourcePort",
	"InMemoryCustomerSource",
	"JsonFileCustomerSource",
	"DuplicateKeyPolicy",
	"stats_average_product_price_for_credit_card",
	"stats_cards_count_for_customer",
	"stats_has_color_product",
	"stats_iter_orders",
	"stats_most_popular_country",
	"stats_order_has_color",
	"stats_order_size",
	"stats_order_sizes",
	"stats_orders_for_card_type",
	"stats_price_accumulator_for_credit_card",
	"OrderStatsReportService",
	"ReportPolicy",
]
