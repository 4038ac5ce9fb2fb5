"""
Multi-item weight takeoff.

A list of windows measured in meters, each with a quantity and optional
glass/profile overrides. Blank overrides fall back to the takeoff-wide
defaults. Glass is weighed straight from the thickness table, with no
type factor.
"""

from .base import BaseCalculator
from ..errors import UnknownGlassLabelError
from ..rates import DEFAULT_RATES, MaterialRates, profile_weight_per_m
from ..schemas import TakeoffItem, TakeoffLine, TakeoffRequest, TakeoffResult


class MultiItemCalculator(BaseCalculator):

    def __init__(self, rates: MaterialRates = DEFAULT_RATES):
        self.rates = rates

    def calculate(self, request: TakeoffRequest) -> TakeoffResult:
        lines = [
            self.calculate_item(item, index, request)
            for index, item in enumerate(request.items, start=1)
        ]

        total_glass_weight = sum(line.glass_weight_kg for line in lines)
        total_profile_weight = sum(line.profile_weight_kg for line in lines)
        total_weight = total_glass_weight + total_profile_weight
        total_cost = total_weight * request.rate_per_kg if request.rate_per_kg else 0.0

        return TakeoffResult(
            lines=lines,
            total_glass_area_m2=sum(line.glass_area_m2 for line in lines),
            total_glass_weight_kg=total_glass_weight,
            total_profile_length_m=sum(line.profile_length_m for line in lines),
            total_profile_weight_kg=total_profile_weight,
            total_weight_kg=total_weight,
            total_cost=total_cost,
        )

    def calculate_item(self, item: TakeoffItem, index: int,
                       request: TakeoffRequest) -> TakeoffLine:
        glass_label = item.glass_label or request.glass_label
        profile = item.profile or request.profile
        quantity = self.item_quantity(item.quantity)

        width_m = max(item.width_m, 0.0)
        height_m = max(item.height_m, 0.0)

        glass_area = self.area_m2(width_m, height_m) * quantity
        glass_weight = glass_area * self.glass_weight_per_m2(glass_label)

        profile_length = self.perimeter_m(width_m, height_m) * quantity
        profile_weight = profile_length * profile_weight_per_m(profile, self.rates)

        return TakeoffLine(
            name=item.name or f"Window {index}",
            quantity=quantity,
            glass_label=glass_label,
            profile=profile,
            glass_area_m2=glass_area,
            glass_weight_kg=glass_weight,
            profile_length_m=profile_length,
            profile_weight_kg=profile_weight,
            total_weight_kg=glass_weight + profile_weight,
        )

    def glass_weight_per_m2(self, label: str) -> float:
        table = self.rates.glass_weight_per_m2
        if label not in table:
            raise UnknownGlassLabelError(label, table.keys())
        return table[label]
