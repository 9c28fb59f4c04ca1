"""Project-native typed exceptions for analytics-layer failures."""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base exception for report computation failures.

    Attributes:
        error_code: Stable machine-readable failure code.
    """

    error_code = "ANALYTICS_ERROR"


class EmptyAggregationError(AnalyticsError, ValueError):
    """Average requested over zero observations."""

    error_code = "NO_MATCHING_ITEMS"


class DuplicateCustomerEmailError(AnalyticsError, ValueError):
    """Two customers share one email under the `error` duplicate-key policy.

    Attributes:
        email: Colliding customer email.
    """

    error_code = "DUPLICATE_CUSTOMER_EMAIL"

    def __init__(self, email: str):
        super().__init__(f"duplicate customer email={email}")
        self.email = email
