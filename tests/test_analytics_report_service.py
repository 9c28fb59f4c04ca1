"""Regression tests for the report service and customer sources."""

from __future__ import annotations

import json
from decimal import ROUND_DOWN, Decimal
from pathlib import Path

import pytest

from shopstats.analytics import (
    DuplicateCustomerEmailError,
    DuplicateKeyPolicy,
    InMemoryCustomerSource,
    JsonFileCustomerSource,
    OrderStatsReportService,
    ReportPolicy,
)
from shopstats.domain import Address, CardType, Color, Customer, Order, OrderItem, PaymentInfo, Product


class _CountingCustomerSource:
    """Customer source stub that hands out single-pass generators."""

    def __init__(self, customers: list[Customer]) -> None:
        self._customers = customers
        self.materialization_count = 0

    def source_label(self) -> str:
        return "counting"

    def source_iter_customers(self):
        self.materialization_count += 1
        return (customer for customer in self._customers)


def _build_customers() -> list[Customer]:
    visa_order = Order(
        payment_info=PaymentInfo(card_type=CardType.VISA, card_number="1234"),
        order_items=(
            OrderItem(product=Product(price=Decimal("100"), color=Color.RED), quantity=2),
            OrderItem(product=Product(price=Decimal("161"), color=Color.BLUE), quantity=1),
        ),
    )
    mastercard_order = Order(
        payment_info=PaymentInfo(card_type=CardType.MASTERCARD, card_number="5678"),
        order_items=(OrderItem(product=Product(price=Decimal("5"), color=Color.RED), quantity=4),),
    )
    return [
        Customer(email="a@example.com", address=Address(country="USA"), orders=(visa_order, mastercard_order)),
        Customer(email="b@example.com", address=Address(country="France"), orders=()),
        Customer(email="a@example.com", address=Address(country="USA"), orders=(mastercard_order,)),
    ]


def test_report_service_rematerializes_source_for_every_report() -> None:
    """Request a fresh iterable from the source for each report call.

    Returns:
        None: Assertions validate per-call materialization.

    Raises:
        AssertionError: Raised when generators are reused across reports.
    """

    source = _CountingCustomerSource(_build_customers())
    service = OrderStatsReportService(source=source)

    assert len(service.report_orders_for_card_type(CardType.MASTERCARD)) == 2
    assert sorted(service.report_order_sizes()) == [3, 4]
    assert service.report_has_color_product(Color.RED) is True
    assert service.report_cards_count_for_customer() == {"a@example.com": 1, "b@example.com": 0}
    assert service.report_most_popular_country() == "USA"
    assert service.report_average_product_price_for_credit_card("1234") == Decimal("120.33")
    assert source.materialization_count == 6


def test_report_service_applies_policy() -> None:
    """Use policy scale, rounding, and duplicate-email resolution."""

    service = OrderStatsReportService(
        source=InMemoryCustomerSource(_build_customers()),
        policy=ReportPolicy(
            average_scale=1,
            average_rounding=ROUND_DOWN,
            duplicate_email_policy=DuplicateKeyPolicy.KEEP_FIRST,
        ),
    )

    assert service.report_average_product_price_for_credit_card("1234") == Decimal("120.3")
    assert service.report_cards_count_for_customer() == {"a@example.com": 2, "b@example.com": 0}

    strict_service = OrderStatsReportService(
        source=InMemoryCustomerSource(_build_customers()),
        policy=ReportPolicy(duplicate_email_policy=DuplicateKeyPolicy.ERROR),
    )
    with pytest.raises(DuplicateCustomerEmailError):
        strict_service.report_cards_count_for_customer()


def test_report_service_rejects_missing_source() -> None:
    with pytest.raises(ValueError):
        OrderStatsReportService(source=None)


def test_json_file_customer_source_reads_file_per_call(tmp_path: Path) -> None:
    """Reflect dataset file changes between calls.

    Returns:
        None: Assertions validate file re-reads.

    Raises:
        AssertionError: Raised when the source caches stale records.
    """

    dataset_path = tmp_path / "shop.json"
    dataset_path.write_text(
        json.dumps({"customers": [{"email": "a@example.com", "address": {"country": "USA"}}]}),
        encoding="utf-8",
    )
    service = OrderStatsReportService(source=JsonFileCustomerSource(dataset_path))

    assert service.report_most_popular_country() == "USA"

    dataset_path.write_text(
        json.dumps({"customers": [{"email": "b@example.com", "address": {"country": "Peru"}}]}),
        encoding="utf-8",
    )

    assert service.report_most_popular_country() == "Peru"
    assert service.report_source_label() == str(dataset_path)
