"""
Multi-item quotation pricing.

Each window or door is priced from its glass area, frame weight and
fitted accessories at the shop's per-unit rates. Labor and company
markup are percentages of the material subtotal; GST is charged on
subtotal + labor + markup.
"""

from .base import BaseCalculator
from ..models import Accessory, FrameType, ItemType, QuotationGlass
from ..rates import frame_weight_per_m
from ..schemas import (
    ItemsQuotation, ItemsQuotationRequest, PricedQuotationItem, QuotationItemInput,
    QuotationPricing,
)

# Smart suggestion thresholds (meters / m²)
TEMPERED_AREA_THRESHOLD = 5.0
WEATHER_STRIP_AREA_THRESHOLD = 4.0
SLIDING_WIDTH_THRESHOLD = 2.0
SLIDING_HEIGHT_THRESHOLD = 2.5


def smart_recommendations(item: QuotationItemInput) -> list[str]:
    """Suggestions for one item, based on its single-piece size."""
    recommendations = []
    area = item.width_m * item.height_m

    if item.glass_type == QuotationGlass.CLEAR_FLOAT_5MM and area > TEMPERED_AREA_THRESHOLD:
        recommendations.append("Consider tempered glass for larger areas (>5m²) for safety.")

    if item.glass_type == QuotationGlass.DOUBLE_GLAZED_UNIT and item.frame_type == FrameType.STANDARD:
        recommendations.append("Heavy Duty Frame is recommended for Double Glazed Units.")

    large_opening = (item.width_m >= SLIDING_WIDTH_THRESHOLD
                     or item.height_m >= SLIDING_HEIGHT_THRESHOLD)
    if large_opening and Accessory.SLIDING_MECHANISM not in item.accessories:
        recommendations.append(
            f"For {item.width_m:.1f}m × {item.height_m:.1f}m dimensions, "
            f"sliding mechanism is recommended."
        )

    if item.type == ItemType.DOOR and Accessory.SECURITY_LOCK not in item.accessories:
        recommendations.append("Security Lock is recommended for doors.")

    if area > WEATHER_STRIP_AREA_THRESHOLD and Accessory.WEATHER_STRIP not in item.accessories:
        recommendations.append("Weather Strip recommended for better insulation.")

    return recommendations


class ItemsQuotationCalculator(BaseCalculator):

    def calculate(self, request: ItemsQuotationRequest) -> ItemsQuotation:
        pricing = request.pricing
        items = [self.price_item(item, index, pricing)
                 for index, item in enumerate(request.items, start=1)]

        subtotal = sum(item.glass_cost + item.frame_cost + item.accessory_cost for item in items)
        labor_charges = subtotal * (pricing.labor_charge_percent / 100)
        company_markup = subtotal * (pricing.company_markup_percent / 100)
        total_before_gst = subtotal + labor_charges + company_markup
        gst = total_before_gst * (pricing.gst_percent / 100)

        return ItemsQuotation(
            items=items,
            total_glass_area_m2=sum(item.glass_area_m2 for item in items),
            total_frame_weight_kg=sum(item.frame_weight_kg for item in items),
            subtotal=subtotal,
            labor_charges=labor_charges,
            company_markup=company_markup,
            total_before_gst=total_before_gst,
            gst=gst,
            grand_total=total_before_gst + gst,
        )

    def price_item(self, item: QuotationItemInput, index: int,
                   pricing: QuotationPricing) -> PricedQuotationItem:
        quantity = self.item_quantity(item.quantity)
        width_m = max(item.width_m, 0.0)
        height_m = max(item.height_m, 0.0)
        item = item.model_copy(update={
            "name": item.name or f"{item.type.value.title()} {index}",
            "width_m": width_m,
            "height_m": height_m,
            "quantity": quantity,
        })

        glass_area = self.area_m2(width_m, height_m) * quantity
        frame_weight = (self.perimeter_m(width_m, height_m)
                        * frame_weight_per_m(item.frame_type) * quantity)

        glass_cost = glass_area * pricing.glass_rate_per_m2
        frame_cost = frame_weight * pricing.aluminium_rate_per_kg
        accessory_cost = len(item.accessories) * pricing.accessory_rate_per_item * quantity

        item_subtotal = glass_cost + frame_cost + accessory_cost
        labor_cost = item_subtotal * (pricing.labor_charge_percent / 100)

        return PricedQuotationItem(
            **item.model_dump(),
            glass_area_m2=glass_area,
            frame_weight_kg=frame_weight,
            glass_cost=glass_cost,
            frame_cost=frame_cost,
            accessory_cost=accessory_cost,
            labor_cost=labor_cost,
            item_total=item_subtotal + labor_cost,
            recommendations=smart_recommendations(item),
        )
