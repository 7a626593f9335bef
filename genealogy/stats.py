"""Numerically stable running sums and means."""

import math

from genealogy.exceptions import EmptyAggregation


class CompensatedSum:
    """Running sum with Neumaier compensation.

    Each addition keeps the low-order bits lost to rounding in a separate
    compensation term, so the error of the total stays bounded by a small
    multiple of machine epsilon regardless of the number of terms.
    """

    def __init__(self):
        self._sum = 0.0
        self._compensation = 0.0

    def add(self, value: float) -> "CompensatedSum":
        """Add a value to the sum.

        Args:
            value: Number to add

        Returns:
            Self for chaining
        """
        value = float(value)
        total = self._sum + value
        if abs(self._sum) >= abs(value):
            self._compensation += (self._sum - total) + value
        else:
            self._compensation += (value - total) + self._sum
        self._sum = total
        return self

    @property
    def total(self) -> float:
        """The compensated total."""
        return self._sum + self._compensation


class Mean:
    """Arithmetic mean over a stream of values, summed with compensation."""

    def __init__(self):
        self._sum = CompensatedSum()
        self._count = 0

    def add(self, value: float) -> "Mean":
        self._sum.add(value)
        self._count += 1
        return self

    @property
    def count(self) -> int:
        return self._count

    @property
    def value(self) -> float:
        """Mean of all added values.

        Raises:
            EmptyAggregation: If no value was added
        """
        if self._count == 0:
            raise EmptyAggregation("Can't compute the mean of zero values.")
        return self._sum.total / self._count


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (62.5 -> 63, -2.5 -> -3).

    Python's built-in round() uses banker's rounding, which would turn 62.5
    into 62.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
