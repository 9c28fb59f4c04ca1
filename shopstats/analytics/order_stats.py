"""Fixed statistical reports over customers and orders of the e-shop.

Every report consumes its input iterable exactly once and never mutates the
records it reads. Callers that need to run several reports over the same data
must re-materialize the iterable for each call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from decimal import Decimal
from enum import Enum

from shopstats.domain import CardType, Color, Customer, Order

from .accumulator import DEFAULT_AVERAGE_ROUNDING, DEFAULT_AVERAGE_SCALE, WeightedAverageAccumulator
from .errors import DuplicateCustomerEmailError

logger = logging.getLogger(__name__)


class DuplicateKeyPolicy(str, Enum):
    """Resolution rule for customers sharing one email."""

    KEEP_FIRST = "keep_first"
    KEEP_LAST = "keep_last"
    ERROR = "error"


def stats_orders_for_card_type(customers: Iterable[Customer], card_type: CardType) -> list[Order]:
    """Return orders paid with the given card type.

    Args:
        customers: Customers to scan, in traversal order.
        card_type: Payment network to match.

    Returns:
        list[Order]: Matching orders in customer order, then per-customer order.

    Raises:
        RuntimeError: This report does not raise runtime errors.
    """

    matching_orders = [
        order for order in stats_iter_orders(customers) if order.payment_info.card_type == card_type
    ]
    logger.debug("orders_for_card_type card_type=%s matched=%d", card_type.value, len(matching_orders))
    return matching_orders


def stats_order_size(order: Order) -> int:
    """Return the total unit quantity across all items of one order."""

    return sum(item.quantity for item in order.order_items)


def stats_order_sizes(orders: Iterable[Order]) -> dict[int, list[Order]]:
    """Group orders by order size.

    Args:
        orders: Orders to group.

    Returns:
        dict[int, list[Order]]: Size to orders of that size. Orders without items
        land under key 0. Bucket contents keep traversal order.

    Raises:
        RuntimeError: This report does not raise runtime errors.
    """

    orders_by_size: dict[int, list[Order]] = {}
    for order in orders:
        orders_by_size.setdefault(stats_order_size(order), []).append(order)
    logger.debug("order_sizes buckets=%d", len(orders_by_size))
    return orders_by_size


def stats_order_has_color(order: Order, color: Color) -> bool:
    """Return whether at least one item of the order has a product of the given color."""

    for item in order.order_items:
        if item.product.color == color:
            return True
    return False


def stats_has_color_product(orders: Iterable[Order], color: Color) -> bool:
    """Return whether every order contains a product of the given color.

    An empty order sequence satisfies the check. An order without items fails it.

    Args:
        orders: Orders to check.
        color: Product color to look for.

    Returns:
        bool: True when no order is missing the color.

    Raises:
        RuntimeError: This report does not raise runtime errors.
    """

    for order in orders:
        if not stats_order_has_color(order, color):
            return False
    return True


def stats_cards_count_for_customer(
    customers: Iterable[Customer],
    duplicate_policy: DuplicateKeyPolicy = DuplicateKeyPolicy.KEEP_LAST,
) -> dict[str, int]:
    """Count distinct card numbers used by each customer.

    Customers are first grouped by email, then each group is reduced to one
    customer with `duplicate_policy`. `KEEP_LAST` matches plain map insertion
    and is a known limitation: orders of an earlier customer with the same
    email are not counted.

    Args:
        customers: Customers to scan.
        duplicate_policy: Rule applied when several customers share one email.

    Returns:
        dict[str, int]: Email to number of distinct card numbers, in first-seen email order.

    Raises:
        DuplicateCustomerEmailError: Raised on a shared email under `ERROR` policy.
    """

    customers_by_email: dict[str, list[Customer]] = {}
    for customer in customers:
        customers_by_email.setdefault(customer.email, []).append(customer)

    card_counts: dict[str, int] = {}
    for email, email_customers in customers_by_email.items():
        selected_customer = _stats_reduce_duplicate_customers(email, email_customers, duplicate_policy)
        card_counts[email] = len({order.payment_info.card_number for order in selected_customer.orders})
    logger.debug("cards_count_for_customer customers=%d", len(card_counts))
    return card_counts


def stats_most_popular_country(customers: Iterable[Customer]) -> str | None:
    """Return the country shared by the largest number of customers.

    Ties on customer count go to the shortest country name, then to the
    lexicographically smallest name.

    Args:
        customers: Customers to scan.

    Returns:
        str | None: Winning country name, or None for empty input.

    Raises:
        RuntimeError: This report does not raise runtime errors.
    """

    customer_count_by_country: dict[str, int] = {}
    for customer in customers:
        country = customer.address.country
        customer_count_by_country[country] = customer_count_by_country.get(country, 0) + 1

    if not customer_count_by_country:
        return None

    # highest count first, then shortest name, then alphabetical
    winner, winner_count = min(
        customer_count_by_country.items(),
        key=lambda entry: (-entry[1], len(entry[0]), entry[0]),
    )
    logger.debug("most_popular_country country=%s customers=%d", winner, winner_count)
    return winner


def stats_average_product_price_for_credit_card(
    customers: Iterable[Customer],
    card_number: str,
    scale: int = DEFAULT_AVERAGE_SCALE,
    rounding: str = DEFAULT_AVERAGE_ROUNDING,
) -> Decimal:
    """Return the quantity-weighted average product price for one card number.

    Every unit of quantity counts as one price observation, so items
    `[(100, qty=2), (160, qty=1)]` average to 120, not 130.

    Args:
        customers: Customers to scan.
        card_number: Card number matched by exact string equality.
        scale: Decimal places of the returned average.
        rounding: `decimal` rounding mode name applied at the final division.

    Returns:
        Decimal: Weighted average price.

    Raises:
        EmptyAggregationError: Raised when no item was paid with the card.
    """

    accumulator = stats_price_accumulator_for_credit_card(customers, card_number)
    logger.debug(
        "average_product_price_for_credit_card units=%d",
        accumulator.total_weight,
    )
    return accumulator.accumulator_average(scale=scale, rounding=rounding)


def stats_price_accumulator_for_credit_card(
    customers: Iterable[Customer],
    card_number: str,
) -> WeightedAverageAccumulator:
    """Build the price accumulator behind the weighted average report.

    Partial accumulators from disjoint customer partitions can be combined with
    `WeightedAverageAccumulator.accumulator_merge` before averaging.

    Args:
        customers: Customers to scan.
        card_number: Card number matched by exact string equality.

    Returns:
        WeightedAverageAccumulator: Accumulated prices weighted by quantity.

    Raises:
        ValueError: Raised when an item carries a quantity lower than one.
    """

    accumulator = WeightedAverageAccumulator()
    for order in stats_iter_orders(customers):
        if order.payment_info.card_number != card_number:
            continue
        for item in order.order_items:
            accumulator.accumulator_add(item.product.price, weight=item.quantity)
    return accumulator


def stats_iter_orders(customers: Iterable[Customer]) -> Iterator[Order]:
    """Yield every order of every customer in traversal order."""

    for customer in customers:
        yield from customer.orders


def _stats_reduce_duplicate_customers(
    email: str,
    email_customers: list[Customer],
    duplicate_policy: DuplicateKeyPolicy,
) -> Customer:
    if len(email_customers) == 1:
        return email_customers[0]
    if duplicate_policy == DuplicateKeyPolicy.ERROR:
        raise DuplicateCustomerEmailError(email)

    logger.warning(
        "customers share email=%s count=%d policy=%s",
        email,
        len(email_customers),
        duplicate_policy.value,
    )
    if duplicate_policy == DuplicateKeyPolicy.KEEP_FIRST:
        return email_customers[0]
    return email_customers[-1]


__all__ = [
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
]
