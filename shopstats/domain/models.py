"""Typed e-shop domain records shared across runtime layers.

Records are immutable and consumed read-only by the analytics layer. Nothing in
this package validates business invariants such as positive quantities; those
remain caller preconditions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class CardType(str, Enum):
    """Payment network identifiers."""

    VISA = "VISA"
    MASTERCARD = "MASTERCARD"


class Color(str, Enum):
    """Product colors available in the shop catalog."""

    RED = "RED"
    GREEN = "GREEN"
    BLUE = "BLUE"
    BLACK = "BLACK"
    WHITE = "WHITE"
    YELLOW = "YELLOW"


@dataclass(frozen=True)
class Address:
    """Customer postal address.

    Attributes:
        country: Country name used for popularity grouping.
        city: Optional city name.
    """

    country: str
    city: str = ""


@dataclass(frozen=True)
class Product:
    """Catalog product.

    Attributes:
        price: Exact unit price.
        color: Product color.
        name: Optional display name.
    """

    price: Decimal
    color: Color
    name: str = ""


@dataclass(frozen=True)
class OrderItem:
    """One order line: a product and its unit quantity."""

    product: Product
    quantity: int


@dataclass(frozen=True)
class PaymentInfo:
    """Payment card used to pay for one order.

    Attributes:
        card_type: Payment network.
        card_number: Card number as printed, compared by exact string equality.
    """

    card_type: CardType
    card_number: str


@dataclass(frozen=True)
class Order:
    """Customer order with its payment info and ordered line items."""

    payment_info: PaymentInfo
    order_items: tuple[OrderItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Customer:
    """Shop customer.

    Attributes:
        email: Customer email, expected but not enforced to be unique.
        address: Customer address.
        orders: Orders in placement order.
        name: Optional display name.
    """

    email: str
    address: Address
    orders: tuple[Order, ...] = field(default_factory=tuple)
    name: str = ""


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str
