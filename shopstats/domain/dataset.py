"""JSON dataset parsing helpers for e-shop domain records.

A dataset is a JSON object with a top-level `customers` array. Each customer
nests its address and orders; each order nests its payment info and items:

    {
        "customers": [
            {
                "email": "a@example.com",
                "address": {"country": "USA"},
                "orders": [
                    {
                        "payment_info": {"card_type": "VISA", "card_number": "1234"},
                        "order_items": [
                            {"product": {"price": "100", "color": "RED"}, "quantity": 2}
                        ]
                    }
                ]
            }
        ]
    }

Prices must be JSON strings or integers so parsed values stay exact.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from .models import Address, CardType, Color, Customer, Order, OrderItem, PaymentInfo, Product

logger = logging.getLogger(__name__)

_EnumT = TypeVar("_EnumT", bound=Enum)


class DatasetLoadError(RuntimeError):
    """Raised when a dataset file or payload cannot be parsed into domain records."""


def domain_dataset_load(path: str | Path) -> list[Customer]:
    """Load customers from one JSON dataset file.

    Args:
        path: Dataset file path.

    Returns:
        list[Customer]: Parsed customers in file order.

    Raises:
        DatasetLoadError: Raised when the file is missing, not JSON, or malformed.
    """

    dataset_path = Path(path)
    try:
        raw_text = dataset_path.read_text(encoding="utf-8")
    except OSError as error:
        raise DatasetLoadError(f"cannot read dataset file={dataset_path}: {error}") from error

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise DatasetLoadError(f"dataset file={dataset_path} is not valid JSON: {error}") from error

    customers = domain_dataset_parse(payload)
    logger.info("Loaded %d customers from %s", len(customers), dataset_path)
    return customers


def domain_dataset_parse(payload: Any) -> list[Customer]:
    """Build customer records from one JSON-compatible dataset payload.

    Args:
        payload: Decoded JSON object with a `customers` array.

    Returns:
        list[Customer]: Parsed customers in payload order.

    Raises:
        DatasetLoadError: Raised when the payload shape or a field value is invalid.
    """

    if not isinstance(payload, dict):
        raise DatasetLoadError("dataset payload must be a JSON object")
    raw_customers = payload.get("customers")
    if not isinstance(raw_customers, list):
        raise DatasetLoadError("dataset payload must contain a `customers` array")

    return [
        _domain_dataset_parse_customer(raw_customer, location=f"customers[{customer_index}]")
        for customer_index, raw_customer in enumerate(raw_customers)
    ]


def domain_dataset_parse_enum(enum_type: type[_EnumT], value: Any) -> _EnumT | None:
    """Resolve one enum member by case-insensitive name.

    Args:
        enum_type: Target enum class.
        value: Candidate text value.

    Returns:
        _EnumT | None: Matching enum member, else None.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(value, str):
        return None
    normalized_value = value.strip().upper()
    if not normalized_value:
        return None
    return enum_type.__members__.get(normalized_value)


def domain_dataset_parse_price(value: Any) -> Decimal | None:
    """Parse one exact price value.

    Args:
        value: Candidate price as string or integer.

    Returns:
        Decimal | None: Parsed finite price, else None. Floats are rejected.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, bool) or isinstance(value, float):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed_value = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not parsed_value.is_finite():
        return None
    return parsed_value


def _domain_dataset_parse_customer(raw_customer: Any, location: str) -> Customer:
    mapping = _domain_dataset_require_mapping(raw_customer, location)
    email = _domain_dataset_require_text(mapping.get("email"), f"{location}.email")
    address_mapping = _domain_dataset_require_mapping(mapping.get("address"), f"{location}.address")
    address = Address(
        country=_domain_dataset_require_text(address_mapping.get("country"), f"{location}.address.country"),
        city=str(address_mapping.get("city") or ""),
    )
    raw_orders = _domain_dataset_require_list(mapping.get("orders", []), f"{location}.orders")
    orders = tuple(
        _domain_dataset_parse_order(raw_order, location=f"{location}.orders[{order_index}]")
        for order_index, raw_order in enumerate(raw_orders)
    )
    return Customer(email=email, address=address, orders=orders, name=str(mapping.get("name") or ""))


def _domain_dataset_parse_order(raw_order: Any, location: str) -> Order:
    mapping = _domain_dataset_require_mapping(raw_order, location)
    payment_mapping = _domain_dataset_require_mapping(mapping.get("payment_info"), f"{location}.payment_info")
    card_type = domain_dataset_parse_enum(CardType, payment_mapping.get("card_type"))
    if card_type is None:
        raise DatasetLoadError(f"{location}.payment_info.card_type has unsupported value={payment_mapping.get('card_type')!r}")
    payment_info = PaymentInfo(
        card_type=card_type,
        card_number=_domain_dataset_require_text(
            payment_mapping.get("card_number"),
            f"{location}.payment_info.card_number",
            strip=False,
        ),
    )
    raw_items = _domain_dataset_require_list(mapping.get("order_items", []), f"{location}.order_items")
    order_items = tuple(
        _domain_dataset_parse_order_item(raw_item, location=f"{location}.order_items[{item_index}]")
        for item_index, raw_item in enumerate(raw_items)
    )
    return Order(payment_info=payment_info, order_items=order_items)


def _domain_dataset_parse_order_item(raw_item: Any, location: str) -> OrderItem:
    mapping = _domain_dataset_require_mapping(raw_item, location)
    product_mapping = _domain_dataset_require_mapping(mapping.get("product"), f"{location}.product")

    price = domain_dataset_parse_price(product_mapping.get("price"))
    if price is None:
        raise DatasetLoadError(
            f"{location}.product.price must be a decimal string or integer, got {product_mapping.get('price')!r}"
        )
    color = domain_dataset_parse_enum(Color, product_mapping.get("color"))
    if color is None:
        raise DatasetLoadError(f"{location}.product.color has unsupported value={product_mapping.get('color')!r}")

    quantity = mapping.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise DatasetLoadError(f"{location}.quantity must be an integer, got {quantity!r}")
    if quantity < 1:
        raise DatasetLoadError(f"{location}.quantity must be >= 1, got {quantity}")

    return OrderItem(
        product=Product(price=price, color=color, name=str(product_mapping.get("name") or "")),
        quantity=quantity,
    )


def _domain_dataset_require_mapping(value: Any, location: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DatasetLoadError(f"{location} must be a JSON object")
    return value


def _domain_dataset_require_list(value: Any, location: str) -> list[Any]:
    if not isinstance(value, list):
        raise DatasetLoadError(f"{location} must be a JSON array")
    return value


def _domain_dataset_require_text(value: Any, location: str, strip: bool = True) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DatasetLoadError(f"{location} must be a non-blank string")
    return value.strip() if strip else value


__all__ = [
    "DatasetLoadError",
    "domain_dataset_load",
    "domain_dataset_parse",
    "domain_dataset_parse_enum",
    "domain_dataset_parse_price",
]
