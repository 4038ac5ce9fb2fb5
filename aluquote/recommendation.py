"""
Profile guidance for a window size.

Large openings need a heavier section; thin glass on a large pane gets
an extra warning.
"""

from .calculators.base import to_number
from .models import Profile
from .schemas import Recommendation

LARGE_HEIGHT_M = 2.1
LARGE_WIDTH_M = 1.5
MEDIUM_HEIGHT_M = 1.8
THIN_GLASS_MM = 5
THIN_GLASS_MAX_WIDTH_M = 1.2


def recommend_profile(width_mm, height_mm, thickness_mm=5) -> Recommendation:
    width_m = to_number(width_mm) / 1000.0
    height_m = to_number(height_mm) / 1000.0
    thickness = to_number(thickness_mm)

    if height_m > LARGE_HEIGHT_M or width_m > LARGE_WIDTH_M:
        message = "Consider Series 75 or Sliding Heavy for better strength."
        suggested = [Profile.SERIES_75, Profile.SLIDING_HEAVY]
    elif height_m > MEDIUM_HEIGHT_M:
        message = "Series 60 is usually sufficient for medium frames."
        suggested = [Profile.SERIES_60]
    else:
        message = "Series 45 is fine for small windows."
        suggested = [Profile.SERIES_45]

    thin_glass = thickness < THIN_GLASS_MM and (
        width_m > THIN_GLASS_MAX_WIDTH_M or height_m > MEDIUM_HEIGHT_M
    )
    if thin_glass:
        message += " Glass may be too thin for this size."

    return Recommendation(
        message=message,
        suggested_profiles=suggested,
        thin_glass_warning=thin_glass,
    )
