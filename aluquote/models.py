from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
from datetime import datetime
from .database import Base
import enum


# --- Enums ---
# Values are the labels the shop form uses, so saved snapshots and share
# links stay readable.

class GlassType(str, enum.Enum):
    CLEAR = "Clear"
    TOUGHENED = "Toughened"
    REFLECTIVE = "Reflective"
    DOUBLE_GLAZED = "Double Glazed"


class Profile(str, enum.Enum):
    SERIES_45 = "Series 45"
    SERIES_60 = "Series 60"
    SERIES_75 = "Series 75"
    SLIDING_LIGHT = "Sliding Light"
    SLIDING_HEAVY = "Sliding Heavy"


class Finish(str, enum.Enum):
    POWDER_COATED = "Powder Coated"
    ANODIZED = "Anodized"


# --- Multi-item quotation catalogue ---

class ItemType(str, enum.Enum):
    WINDOW = "window"
    DOOR = "door"


class QuotationGlass(str, enum.Enum):
    CLEAR_FLOAT_5MM = "Clear Float Glass 5mm"
    TINTED_6MM = "Tinted Glass 6mm"
    LAMINATED_6_38MM = "Laminated Glass 6.38mm"
    TEMPERED_8MM = "Tempered Glass 8mm"
    DOUBLE_GLAZED_UNIT = "Double Glazed Unit"
    REFLECTIVE_6MM = "Reflective Glass 6mm"


class FrameType(str, enum.Enum):
    STANDARD = "Standard Aluminium Frame"
    HEAVY_DUTY = "Heavy Duty Frame"
    POWDER_COATED = "Powder Coated Frame"
    WOODEN = "Wooden Frame"
    UPVC = "UPVC Frame"


class Accessory(str, enum.Enum):
    STANDARD_HANDLE = "Standard Handle"
    PREMIUM_HANDLE = "Premium Handle"
    SECURITY_LOCK = "Security Lock"
    MESH_GRILL = "Mesh/Grill"
    WEATHER_STRIP = "Weather Strip"
    HINGES_PREMIUM = "Hinges Premium"
    SLIDING_MECHANISM = "Sliding Mechanism"


class QuotationStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


# --- Tables ---

class SavedProject(Base):
    """Named snapshot of the estimate form. Only the raw input is stored."""
    __tablename__ = "saved_projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    state = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class SavedQuotation(Base):
    """Customer quotation built from priced window/door items."""
    __tablename__ = "saved_quotations"

    id = Column(Integer, primary_key=True, index=True)
    quotation_id = Column(String, unique=True, nullable=False, index=True)  # VEN2025-003
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_email = Column(String, default="")
    customer_address = Column(Text, nullable=True)
    items = Column(JSON, nullable=False)      # priced line items
    pricing = Column(JSON, nullable=False)    # rates the items were priced at
    total_glass_area = Column(Float, default=0.0)
    total_frame_weight = Column(Float, default=0.0)
    subtotal = Column(Float, default=0.0)
    labor_charges = Column(Float, default=0.0)
    company_markup = Column(Float, default=0.0)
    gst = Column(Float, default=0.0)
    grand_total = Column(Float, default=0.0)
    status = Column(String, default=QuotationStatus.DRAFT.value)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
