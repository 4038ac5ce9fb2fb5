from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from .calculators.base import to_number
from .config import settings
from .models import (
    Accessory, Finish, FrameType, GlassType, ItemType, Profile, QuotationGlass, QuotationStatus,
)


def _blank_to_none(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


# --- Single window estimate ---

class EstimateInput(BaseModel):
    """Snapshot of the estimate form. Numeric fields accept free text."""
    width_mm: float = 0.0
    height_mm: float = 0.0
    glass_type: GlassType = GlassType.CLEAR
    glass_thickness_mm: float = 5.0
    profile: Profile = Profile.SERIES_60
    finish: Finish = Finish.POWDER_COATED
    cost_per_kg: float = 0.0
    accessories_kg: float = 0.0
    profit_margin_pct: float = Field(default_factory=lambda: settings.PROFIT_MARGIN_DEFAULT)
    discount_pct: float = 0.0

    @field_validator(
        "width_mm", "height_mm", "glass_thickness_mm", "cost_per_kg",
        "accessories_kg", "profit_margin_pct", "discount_pct",
        mode="before",
    )
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)

    class Config:
        frozen = True


class EstimateResult(BaseModel):
    area_m2: float
    glass_density_kg_m2: float
    glass_weight_kg: float
    perimeter_m: float
    aluminium_weight_kg: float
    accessories_kg: float
    total_weight_kg: float
    estimated_cost: float
    final_cost: float

    class Config:
        frozen = True


class QuotationCharges(BaseModel):
    delivery_charge: float = 0.0
    labor_charge: float = 0.0
    gst_percent: float = Field(default_factory=lambda: settings.GST_PERCENT_DEFAULT)

    @field_validator("delivery_charge", "labor_charge", "gst_percent", mode="before")
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)

    class Config:
        frozen = True


class Quotation(BaseModel):
    subtotal: float
    tax_amount: float
    grand_total: float

    class Config:
        frozen = True


class QuotationRequest(BaseModel):
    input: EstimateInput = Field(default_factory=EstimateInput)
    charges: QuotationCharges = Field(default_factory=QuotationCharges)


class QuotationResponse(BaseModel):
    estimate: EstimateResult
    quotation: Quotation


# --- Profile guidance ---

class RecommendationRequest(BaseModel):
    width_mm: float = 0.0
    height_mm: float = 0.0
    glass_thickness_mm: float = 5.0

    @field_validator("width_mm", "height_mm", "glass_thickness_mm", mode="before")
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)


class Recommendation(BaseModel):
    message: str
    suggested_profiles: List[Profile]
    thin_glass_warning: bool = False


# --- Multi-item takeoff ---

class TakeoffItem(BaseModel):
    name: str = ""
    width_m: float = 0.0
    height_m: float = 0.0
    quantity: float = 1.0
    glass_label: Optional[str] = None
    profile: Optional[Profile] = None

    @field_validator("width_m", "height_m", "quantity", mode="before")
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)

    @field_validator("glass_label", "profile", mode="before")
    @classmethod
    def blank_means_default(cls, value):
        return _blank_to_none(value)


class TakeoffRequest(BaseModel):
    items: List[TakeoffItem] = []
    glass_label: str = "5mm"
    profile: Profile = Profile.SERIES_60
    rate_per_kg: float = 0.0

    @field_validator("rate_per_kg", mode="before")
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)


class TakeoffLine(BaseModel):
    name: str
    quantity: float
    glass_label: str
    profile: Profile
    glass_area_m2: float
    glass_weight_kg: float
    profile_length_m: float
    profile_weight_kg: float
    total_weight_kg: float


class TakeoffResult(BaseModel):
    lines: List[TakeoffLine]
    total_glass_area_m2: float
    total_glass_weight_kg: float
    total_profile_length_m: float
    total_profile_weight_kg: float
    total_weight_kg: float
    total_cost: float


# --- Share links ---

class ShareLink(BaseModel):
    query: str
    url: str


# --- Saved projects ---

class ProjectCreate(BaseModel):
    name: Optional[str] = None
    input: EstimateInput = Field(default_factory=EstimateInput)


class Project(BaseModel):
    id: int
    name: str
    created_at: datetime
    state: EstimateInput

    class Config:
        from_attributes = True


# --- Multi-item quotation ---

class QuotationPricing(BaseModel):
    glass_rate_per_m2: float = Field(default_factory=lambda: settings.GLASS_RATE_PER_M2)
    aluminium_rate_per_kg: float = Field(default_factory=lambda: settings.ALUMINIUM_RATE_PER_KG)
    accessory_rate_per_item: float = Field(default_factory=lambda: settings.ACCESSORY_RATE_PER_ITEM)
    labor_charge_percent: float = Field(default_factory=lambda: settings.LABOR_CHARGE_PERCENT)
    gst_percent: float = Field(default_factory=lambda: settings.GST_PERCENT_DEFAULT)
    company_markup_percent: float = Field(default_factory=lambda: settings.COMPANY_MARKUP_PERCENT)

    @field_validator(
        "glass_rate_per_m2", "aluminium_rate_per_kg", "accessory_rate_per_item",
        "labor_charge_percent", "gst_percent", "company_markup_percent",
        mode="before",
    )
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)


class QuotationItemInput(BaseModel):
    name: str = ""
    type: ItemType = ItemType.WINDOW
    width_m: float = 0.0
    height_m: float = 0.0
    quantity: float = 1.0
    glass_type: QuotationGlass = QuotationGlass.CLEAR_FLOAT_5MM
    frame_type: FrameType = FrameType.STANDARD
    accessories: List[Accessory] = []
    notes: str = ""

    @field_validator("width_m", "height_m", "quantity", mode="before")
    @classmethod
    def coerce_number(cls, value):
        return to_number(value)

    @field_validator("accessories", mode="after")
    @classmethod
    def unique_accessories(cls, value):
        # An accessory is either fitted or not
        return list(dict.fromkeys(value))


class PricedQuotationItem(QuotationItemInput):
    glass_area_m2: float
    frame_weight_kg: float
    glass_cost: float
    frame_cost: float
    accessory_cost: float
    labor_cost: float
    item_total: float
    recommendations: List[str] = []


class ItemsQuotationRequest(BaseModel):
    items: List[QuotationItemInput] = []
    pricing: QuotationPricing = Field(default_factory=QuotationPricing)


class ItemsQuotation(BaseModel):
    items: List[PricedQuotationItem]
    total_glass_area_m2: float
    total_frame_weight_kg: float
    subtotal: float
    labor_charges: float
    company_markup: float
    total_before_gst: float
    gst: float
    grand_total: float


# --- Saved quotations ---

class CustomerDetails(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str = ""
    address: Optional[str] = None

    @field_validator("name", "phone", "email", mode="before")
    @classmethod
    def strip_text(cls, value):
        return "" if value is None else str(value).strip()


class SavedQuotationCreate(BaseModel):
    customer: CustomerDetails
    items: List[QuotationItemInput] = Field(min_length=1)
    pricing: QuotationPricing = Field(default_factory=QuotationPricing)
    status: QuotationStatus = QuotationStatus.DRAFT
    notes: Optional[str] = None


class SavedQuotationUpdate(BaseModel):
    customer: Optional[CustomerDetails] = None
    items: Optional[List[QuotationItemInput]] = Field(default=None, min_length=1)
    pricing: Optional[QuotationPricing] = None
    status: Optional[QuotationStatus] = None
    notes: Optional[str] = None


class SavedQuotation(BaseModel):
    id: int
    quotation_id: str
    customer_name: str
    customer_phone: str
    customer_email: str = ""
    customer_address: Optional[str] = None
    items: List[PricedQuotationItem]
    pricing: QuotationPricing
    total_glass_area: float
    total_frame_weight: float
    subtotal: float
    labor_charges: float
    company_markup: float
    gst: float
    grand_total: float
    status: QuotationStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class QuotationStats(BaseModel):
    total_quotations: int = 0
    total_value: float = 0.0
    pending_quotations: int = 0
    approved_quotations: int = 0
    this_month_quotations: int = 0
    this_month_value: float = 0.0
