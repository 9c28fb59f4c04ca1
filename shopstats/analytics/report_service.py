"""Report service binding customer sources to the order statistics reports."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shopstats.domain import CardType, Color, Order

from .accumulator import DEFAULT_AVERAGE_ROUNDING, DEFAULT_AVERAGE_SCALE
from .interfaces import CustomerSourcePort
from .order_stats import (
    DuplicateKeyPolicy,
    stats_average_product_price_for_credit_card,
    stats_cards_count_for_customer,
    stats_has_color_product,
    stats_iter_orders,
    stats_most_popular_country,
    stats_order_sizes,
    stats_orders_for_card_type,
)


@dataclass(frozen=True)
class ReportPolicy:
    """Policy knobs applied by the report service.

    Attributes:
        average_scale: Decimal places of weighted average results.
        average_rounding: `decimal` rounding mode name for weighted averages.
        duplicate_email_policy: Resolution rule for customers sharing one email.
    """

    average_scale: int = DEFAULT_AVERAGE_SCALE
    average_rounding: str = DEFAULT_AVERAGE_ROUNDING
    duplicate_email_policy: DuplicateKeyPolicy = DuplicateKeyPolicy.KEEP_LAST


class OrderStatsReportService:
    """Run order statistics reports against a re-materializable customer source."""

    def __init__(self, source: CustomerSourcePort, policy: ReportPolicy | None = None):
        """Initialize report service dependencies.

        Args:
            source: Customer source queried once per report call.
            policy: Optional report policy, defaults to `ReportPolicy()`.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when source is invalid.
        """

        if source is None:
            raise ValueError("source must not be None")
        self._source = source
        self._policy = policy or ReportPolicy()

    @property
    def policy(self) -> ReportPolicy:
        return self._policy

    def report_source_label(self) -> str:
        return self._source.source_label()

    def report_orders_for_card_type(self, card_type: CardType) -> list[Order]:
        return stats_orders_for_card_type(self._source.source_iter_customers(), card_type)

    def report_order_sizes(self) -> dict[int, list[Order]]:
        """Group all orders of all customers by order size."""

        return stats_order_sizes(stats_iter_orders(self._source.source_iter_customers()))

    def report_has_color_product(self, color: Color) -> bool:
        """Check the color across all orders of all customers."""

        return stats_has_color_product(stats_iter_orders(self._source.source_iter_customers()), color)

    def report_cards_count_for_customer(self) -> dict[str, int]:
        return stats_cards_count_for_customer(
            self._source.source_iter_customers(),
            duplicate_policy=self._policy.duplicate_email_policy,
        )

    def report_most_popular_country(self) -> str | None:
        return stats_most_popular_country(self._source.source_iter_customers())

    def report_average_product_price_for_credit_card(self, card_number: str) -> Decimal:
        """Compute the weighted average price for one card number.

        Args:
            card_number: Card number matched by exact string equality.

        Returns:
            Decimal: Weighted average quantized per policy.

        Raises:
            EmptyAggregationError: Raised when no item was paid with the card.
        """

        return stats_average_product_price_for_credit_card(
            self._source.source_iter_customers(),
            card_number,
            scale=self._policy.average_scale,
            rounding=self._policy.average_rounding,
        )


__all__ = ["OrderStatsReportService", "ReportPolicy"]
