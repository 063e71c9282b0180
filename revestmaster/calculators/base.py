"""
Abstract base class for estimation calculators.

Input: a RoomSpec (or a mapping of its fields)
Output: a MaterialResult
"""

import math
from abc import ABC, abstractmethod
from decimal import Decimal, ROUND_HALF_UP

from ..errors import InvalidInput


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round on the exact binary value of a float, ties away from zero.

    round() ties to even, so 0.125 would become 0.12; stored results were
    rounded with ties going up.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class BaseCalculator(ABC):
    """All estimation calculators inherit from this."""

    @abstractmethod
    def calculate(self, spec):
        """Takes a room spec, returns a MaterialResult."""
        pass

    # --- Helper methods for all calculators ---

    def apply_waste(self, quantity: float, waste_pct: float) -> float:
        """Add a percentage waste margin to a quantity. Not rounded."""
        return quantity * (1 + (waste_pct / 100))

    def round_up(self, quantity: float) -> int:
        """Always round UP to the next whole unit. Partial tiles and bags can't be used or bought."""
        return math.ceil(quantity)

    def round_half_up(self, value: float, places: int = 2) -> float:
        return round_half_up(value, places)

    def require_positive(self, value, field: str) -> float:
        """Value must be a finite number > 0."""
        number = self._require_number(value, field)
        if number <= 0:
            raise InvalidInput(f"{field} must be greater than zero (got {value})", field=field)
        return number

    def require_non_negative(self, value, field: str) -> float:
        """Value must be a finite number ≥ 0."""
        number = self._require_number(value, field)
        if number < 0:
            raise InvalidInput(f"{field} must not be negative (got {value})", field=field)
        return number

    def _require_number(self, value, field: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInput(f"{field} must be a number (got {value!r})", field=field)
        if not math.isfinite(value):
            raise InvalidInput(f"{field} must be finite (got {value})", field=field)
        return float(value)
