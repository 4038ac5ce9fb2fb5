"""
Single window weight calculator.

Glass weight from area × density × type factor, frame weight from
perimeter × profile linear density, plus the accessories weight the
user types in.
"""

from .base import BaseCalculator
from .dimensions import DimensionNormalizer
from ..rates import (
    DEFAULT_RATES,
    MaterialRates,
    base_glass_density,
    glass_type_factor,
    profile_weight_per_m,
)
from ..schemas import EstimateInput


class WindowWeightCalculator(BaseCalculator):

    def __init__(self, rates: MaterialRates = DEFAULT_RATES):
        self.rates = rates
        self.dimensions = DimensionNormalizer()

    def calculate(self, estimate_input: EstimateInput) -> dict:
        dims = self.dimensions.calculate(estimate_input.width_mm, estimate_input.height_mm)

        base_density = base_glass_density(
            estimate_input.glass_type, estimate_input.glass_thickness_mm, self.rates,
        )
        type_factor = glass_type_factor(estimate_input.glass_type)
        glass_weight = dims["area_m2"] * base_density * type_factor

        aluminium_weight = dims["perimeter_m"] * profile_weight_per_m(
            estimate_input.profile, self.rates,
        )

        accessories = estimate_input.accessories_kg
        return {
            "area_m2": dims["area_m2"],
            "glass_density_kg_m2": base_density * type_factor,
            "glass_weight_kg": glass_weight,
            "perimeter_m": dims["perimeter_m"],
            "aluminium_weight_kg": aluminium_weight,
            "accessories_kg": accessories,
            "total_weight_kg": glass_weight + aluminium_weight + accessories,
        }
