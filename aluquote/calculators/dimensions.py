"""
Dimension normalizer — millimeter form values to meter geometry.
"""

from .base import BaseCalculator


class DimensionNormalizer(BaseCalculator):

    def calculate(self, width_mm, height_mm) -> dict:
        """
        Returns width_m, height_m, area_m2 and perimeter_m.
        Negative sides are clamped to zero.
        """
        width_m = self.mm_to_m(max(self.parse_number(width_mm), 0.0))
        height_m = self.mm_to_m(max(self.parse_number(height_mm), 0.0))
        return {
            "width_m": width_m,
            "height_m": height_m,
            "area_m2": self.area_m2(width_m, height_m),
            "perimeter_m": self.perimeter_m(width_m, height_m),
        }


def normalize_dimensions(width_mm, height_mm) -> dict:
    return DimensionNormalizer().calculate(width_mm, height_mm)
