"""
Calculator registry — maps calculator names to calculator classes.
"""

from .base import BaseCalculator
from .multi_item import MultiItemCalculator
from .quotation_items import ItemsQuotationCalculator
from .window_weight import WindowWeightCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "window": WindowWeightCalculator,
    "multi_item": MultiItemCalculator,
    "quotation_items": ItemsQuotationCalculator,
}


def get_calculator(name: str, **kwargs) -> BaseCalculator:
    """Returns an instance of the named calculator, or raises ValueError."""
    if name not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for: {name}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[name](**kwargs)


def has_calculator(name: str) -> bool:
    return name in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    return list(CALCULATOR_REGISTRY.keys())
