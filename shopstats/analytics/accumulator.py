"""Streaming weighted-average accumulator over exact decimal values."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    Inexact,
    localcontext,
)

from .errors import EmptyAggregationError

DEFAULT_AVERAGE_SCALE = 2
DEFAULT_AVERAGE_ROUNDING = ROUND_HALF_UP

# sums and products never round under this context
_ACCUMULATOR_EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)
_ACCUMULATOR_GUARD_DIGITS = 2


@dataclass
class WeightedAverageAccumulator:
    """Running weighted sum and total weight for one average computation.

    Each observation contributes `value * weight` to the sum and `weight` to the
    total weight, which matches feeding the same value `weight` times. Partial
    accumulators combine by adding sums and weights independently; division
    happens once in `accumulator_average`.

    Attributes:
        weighted_sum: Sum of value times weight over all observations.
        total_weight: Sum of weights over all observations.
    """

    weighted_sum: Decimal = field(default_factory=lambda: Decimal("0"))
    total_weight: int = 0

    def accumulator_add(self, value: Decimal, weight: int = 1) -> None:
        """Ingest one observation.

        Args:
            value: Observed decimal value.
            weight: Number of unit observations this value stands for.

        Returns:
            None: Accumulator state is updated in place.

        Raises:
            ValueError: Raised when weight is lower than one.
        """

        if weight < 1:
            raise ValueError(f"weight must be >= 1, got {weight}")
        with localcontext(_ACCUMULATOR_EXACT_CONTEXT):
            self.weighted_sum += value * weight
        self.total_weight += weight

    def accumulator_merge(self, other: WeightedAverageAccumulator) -> WeightedAverageAccumulator:
        """Combine two partial accumulators into a new one.

        Args:
            other: Partial accumulator built over a disjoint partition.

        Returns:
            WeightedAverageAccumulator: Accumulator over both partitions.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        with localcontext(_ACCUMULATOR_EXACT_CONTEXT):
            merged_sum = self.weighted_sum + other.weighted_sum
        return WeightedAverageAccumulator(
            weighted_sum=merged_sum,
            total_weight=self.total_weight + other.total_weight,
        )

    def accumulator_is_empty(self) -> bool:
        """Return whether no observation has been ingested."""

        return self.total_weight == 0

    def accumulator_average(
        self,
        scale: int = DEFAULT_AVERAGE_SCALE,
        rounding: str = DEFAULT_AVERAGE_ROUNDING,
    ) -> Decimal:
        """Return the weighted mean quantized to a fixed number of decimal places.

        The quotient is rounded exactly once, with `rounding`, whatever the
        magnitude of the sum or the ambient `decimal` context precision.

        Args:
            scale: Number of digits after the decimal point.
            rounding: `decimal` rounding mode name such as `ROUND_HALF_UP`.

        Returns:
            Decimal: Weighted mean, e.g. `Decimal("120.00")` for scale 2.

        Raises:
            EmptyAggregationError: Raised when no observation was ingested.
            ValueError: Raised when scale is negative.
        """

        if self.accumulator_is_empty():
            raise EmptyAggregationError("cannot average zero observations")
        if scale < 0:
            raise ValueError(f"scale must be >= 0, got {scale}")

        return _accumulator_divide_and_quantize(self.weighted_sum, self.total_weight, scale, rounding)


def _accumulator_divide_and_quantize(numerator: Decimal, denominator: int, scale: int, rounding: str) -> Decimal:
    # The quotient never exceeds the numerator, so this keeps guard digits below the quantum.
    precision = max(numerator.adjusted(), 0) + 1 + scale + _ACCUMULATOR_GUARD_DIGITS
    with localcontext() as context:
        context.prec = precision
        context.rounding = ROUND_DOWN
        context.clear_flags()
        context.traps[Inexact] = False
        truncated = numerator / Decimal(denominator)
        inexact = bool(context.flags[Inexact])

    quantum = Decimal(1).scaleb(-scale)
    with localcontext() as context:
        context.prec = precision + 2
        if inexact:
            # sticky digit: marks a discarded remainder so ties are not mistaken for exact halves
            sticky = Decimal(5).scaleb(truncated.as_tuple().exponent - 1).copy_sign(truncated)
            truncated += sticky
        return truncated.quantize(quantum, rounding=rounding)


__all__ = ["DEFAULT_AVERAGE_ROUNDING", "DEFAULT_AVERAGE_SCALE", "WeightedAverageAccumulator"]
