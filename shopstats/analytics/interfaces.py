"""Typed interfaces for analytics-layer input sources."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from shopstats.domain import Customer, domain_dataset_load


class CustomerSourcePort(Protocol):
    """Port definition for re-materializable customer inputs."""

    def source_label(self) -> str:
        """Return a human-readable label for the source.

        Returns:
            str: Source identifier used in diagnostics.

        Raises:
            RuntimeError: Raised when label metadata is unavailable.
        """

    def source_iter_customers(self) -> Iterable[Customer]:
        """Return a fresh customer iterable.

        Every call must return a new iterable so that each report can consume
        its own input exactly once.

        Returns:
            Iterable[Customer]: Customers in source order.

        Raises:
            DatasetLoadError: Raised when the underlying data cannot be read.
        """


class InMemoryCustomerSource:
    """Customer source backed by an already materialized customer sequence."""

    def __init__(self, customers: Sequence[Customer], label: str = "memory"):
        if customers is None:
            raise ValueError("customers must not be None")
        self._customers = tuple(customers)
        self._label = label

    def source_label(self) -> str:
        return self._label

    def source_iter_customers(self) -> Iterable[Customer]:
        return iter(self._customers)


class JsonFileCustomerSource:
    """Customer source that re-reads one JSON dataset file on every call."""

    def __init__(self, dataset_path: str | Path):
        """Initialize source with a dataset path.

        Args:
            dataset_path: JSON dataset file path.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dataset_path is blank.
        """

        if not str(dataset_path).strip():
            raise ValueError("dataset_path must not be blank")
        self._dataset_path = Path(dataset_path)

    def source_label(self) -> str:
        return str(self._dataset_path)

    def source_iter_customers(self) -> Iterable[Customer]:
        return iter(domain_dataset_load(self._dataset_path))


__all__ = ["CustomerSourcePort", "InMemoryCustomerSource", "JsonFileCustomerSource"]
