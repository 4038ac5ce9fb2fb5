"""
Abstract base class for the weight calculators, plus the numeric
coercion every form field goes through.
"""

import math
from abc import ABC, abstractmethod


def to_number(value, default: float = 0.0) -> float:
    """
    Parse a free-text numeric form value.

    Blank, non-numeric and non-finite input ('', 'abc', 'nan', 'inf')
    all come back as the default. Never raises.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip())
    except (ValueError, TypeError):
        return default
    if not math.isfinite(number):
        return default
    return number


class BaseCalculator(ABC):
    """All weight calculators inherit from this."""

    MM_PER_M = 1000.0

    @abstractmethod
    def calculate(self, *args, **kwargs):
        pass

    # --- Helper methods for all calculators ---

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input."""
        return to_number(value, default)

    def item_quantity(self, value) -> float:
        """Blank, zero or negative quantities count as one piece."""
        quantity = self.parse_number(value, default=1.0)
        if quantity < 1:
            quantity = 1.0
        return quantity

    def mm_to_m(self, mm: float) -> float:
        return mm / self.MM_PER_M

    def area_m2(self, width_m: float, height_m: float) -> float:
        """Rectangle area in square meters."""
        return width_m * height_m

    def perimeter_m(self, width_m: float, height_m: float) -> float:
        """Frame perimeter in meters."""
        return 2.0 * (width_m + height_m)
