# Glass and aluminium weight constants — source: shop rate card

import logging
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, field_validator

from .errors import UnknownProfileError
from .models import Finish, FrameType, GlassType, Profile

logger = logging.getLogger(__name__)

# Glass base density by thickness label (kg/m²)
GLASS_WEIGHT_PER_M2 = {
    "4mm": 10.0,
    "5mm": 12.5,
    "6mm": 15.0,
    "24mm DG": 22.0,
}

# Aluminium profile linear density (kg/m)
PROFILE_WEIGHT_PER_M = {
    Profile.SERIES_45.value: 2.5,
    Profile.SERIES_60.value: 3.8,
    Profile.SERIES_75.value: 4.5,
    Profile.SLIDING_LIGHT.value: 2.2,
    Profile.SLIDING_HEAVY.value: 5.0,
}

# Frame linear density for the multi-item quotation (kg/m)
FRAME_WEIGHT_PER_M = {
    FrameType.STANDARD: 2.5,
    FrameType.HEAVY_DUTY: 3.5,
    FrameType.POWDER_COATED: 2.8,
    FrameType.WOODEN: 2.0,
    FrameType.UPVC: 1.8,
}

# Double glazed units have a fixed nominal build-up
DOUBLE_GLAZED_DENSITY = 22.0

# kg/m² per mm of glass when a thickness has no table entry
DENSITY_PER_MM = 2.5

GLASS_TYPE_FACTORS = {
    GlassType.CLEAR: 1.0,
    GlassType.TOUGHENED: 1.1,
    GlassType.REFLECTIVE: 1.05,
    GlassType.DOUBLE_GLAZED: 1.0,
}

FINISH_FACTORS = {
    Finish.POWDER_COATED: 1.05,
    Finish.ANODIZED: 1.08,
}


class MaterialRates(BaseModel):
    """
    Lookup tables the weight calculator reads.

    Frozen once built: the fields cannot be reassigned and the tables are
    stored as read-only mappings, so DEFAULT_RATES is fixed for the life
    of the process.
    """
    glass_weight_per_m2: Mapping[str, float]
    profile_weight_per_m: Mapping[str, float]

    @field_validator("glass_weight_per_m2", "profile_weight_per_m", mode="after")
    @classmethod
    def read_only(cls, value):
        return MappingProxyType(dict(value))

    class Config:
        frozen = True


DEFAULT_RATES = MaterialRates(
    glass_weight_per_m2=dict(GLASS_WEIGHT_PER_M2),
    profile_weight_per_m=dict(PROFILE_WEIGHT_PER_M),
)


def thickness_label(thickness_mm: float) -> str:
    """Table key for a thickness, e.g. 5 -> '5mm', 5.5 -> '5.5mm'."""
    if float(thickness_mm).is_integer():
        return f"{int(thickness_mm)}mm"
    return f"{thickness_mm}mm"


def base_glass_density(glass_type: GlassType, thickness_mm: float,
                       rates: MaterialRates = DEFAULT_RATES) -> float:
    """
    Base glass density in kg/m² before the type factor.

    Double glazed ignores thickness entirely. Other glass is looked up by
    thickness label and falls back to thickness × 2.5 when not in the table.
    """
    if glass_type == GlassType.DOUBLE_GLAZED:
        return DOUBLE_GLAZED_DENSITY
    density = rates.glass_weight_per_m2.get(thickness_label(thickness_mm))
    if density is None:
        return thickness_mm * DENSITY_PER_MM
    return density


def glass_type_factor(glass_type: GlassType) -> float:
    return GLASS_TYPE_FACTORS[GlassType(glass_type)]


def finish_factor(finish: Finish) -> float:
    return FINISH_FACTORS[Finish(finish)]


def frame_weight_per_m(frame_type: FrameType) -> float:
    return FRAME_WEIGHT_PER_M[FrameType(frame_type)]


def profile_weight_per_m(profile, rates: MaterialRates = DEFAULT_RATES) -> float:
    """Linear density for a profile. Raises UnknownProfileError if missing."""
    key = profile.value if isinstance(profile, Profile) else str(profile)
    if key not in rates.profile_weight_per_m:
        logger.warning("Rejected unknown profile %r", key)
        raise UnknownProfileError(key, rates.profile_weight_per_m.keys())
    return rates.profile_weight_per_m[key]


def rate_card(rates: MaterialRates = DEFAULT_RATES) -> dict:
    """All lookup tables as plain JSON-friendly dicts."""
    return {
        "glass_weight_per_m2": dict(rates.glass_weight_per_m2),
        "profile_weight_per_m": dict(rates.profile_weight_per_m),
        "double_glazed_density": DOUBLE_GLAZED_DENSITY,
        "density_per_mm": DENSITY_PER_MM,
        "glass_type_factors": {k.value: v for k, v in GLASS_TYPE_FACTORS.items()},
        "finish_factors": {k.value: v for k, v in FINISH_FACTORS.items()},
        "frame_weight_per_m": {k.value: v for k, v in FRAME_WEIGHT_PER_M.items()},
    }
