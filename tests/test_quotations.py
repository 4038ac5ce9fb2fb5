"""
Multi-item quotation pricing and the saved quotation store.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from aluquote import quotations
from aluquote.calculators.quotation_items import ItemsQuotationCalculator, smart_recommendations
from aluquote.calculators.registry import get_calculator
from aluquote.models import Accessory, FrameType, ItemType, QuotationGlass, QuotationStatus
from aluquote.rates import FRAME_WEIGHT_PER_M, frame_weight_per_m
from aluquote.schemas import (
    CustomerDetails, ItemsQuotationRequest, QuotationItemInput, QuotationPricing,
    SavedQuotationCreate, SavedQuotationUpdate,
)


SQUARE_WINDOW = {
    "name": "Bedroom",
    "type": "window",
    "width_m": "1",
    "height_m": "1",
    "quantity": 1,
    "glass_type": "Clear Float Glass 5mm",
    "frame_type": "Standard Aluminium Frame",
    "accessories": ["Standard Handle", "Mesh/Grill"],
}

CUSTOMER = {"name": "Ravi Kumar", "phone": "98480 22338", "email": "Ravi@Example.com"}


def _create(customer=None, items=None, status=QuotationStatus.DRAFT):
    return SavedQuotationCreate(
        customer=CustomerDetails(**(customer or CUSTOMER)),
        items=[QuotationItemInput(**item) for item in (items or [SQUARE_WINDOW])],
        status=status,
    )


# ============================================================
# Pricing defaults and frame densities
# ============================================================

def test_pricing_defaults():
    pricing = QuotationPricing()
    assert pricing.glass_rate_per_m2 == 350
    assert pricing.aluminium_rate_per_kg == 280
    assert pricing.accessory_rate_per_item == 150
    assert pricing.labor_charge_percent == 15
    assert pricing.gst_percent == 18
    assert pricing.company_markup_percent == 20


def test_frame_densities():
    assert frame_weight_per_m(FrameType.STANDARD) == 2.5
    assert frame_weight_per_m("Heavy Duty Frame") == 3.5
    assert frame_weight_per_m(FrameType.POWDER_COATED) == 2.8
    assert frame_weight_per_m(FrameType.WOODEN) == 2.0
    assert frame_weight_per_m(FrameType.UPVC) == 1.8
    assert set(FRAME_WEIGHT_PER_M) == set(FrameType)


def test_unknown_frame_type_rejected():
    with pytest.raises(ValidationError):
        QuotationItemInput(frame_type="Steel Frame")


def test_duplicate_accessories_counted_once():
    item = QuotationItemInput(accessories=["Security Lock", "Security Lock", "Weather Strip"])
    assert item.accessories == [Accessory.SECURITY_LOCK, Accessory.WEATHER_STRIP]


# ============================================================
# Item pricing and totals
# ============================================================

def test_single_window_quotation():
    result = ItemsQuotationCalculator().calculate(ItemsQuotationRequest(items=[SQUARE_WINDOW]))
    item = result.items[0]
    assert item.glass_area_m2 == pytest.approx(1.0)
    assert item.frame_weight_kg == pytest.approx(10.0)
    assert item.glass_cost == pytest.approx(350)
    assert item.frame_cost == pytest.approx(2800)
    assert item.accessory_cost == pytest.approx(300)
    assert item.labor_cost == pytest.approx(517.5)
    assert item.item_total == pytest.approx(3967.5)

    assert result.subtotal == pytest.approx(3450)
    assert result.labor_charges == pytest.approx(517.5)
    assert result.company_markup == pytest.approx(690)
    assert result.total_before_gst == pytest.approx(4657.5)
    assert result.gst == pytest.approx(838.35)
    assert result.grand_total == pytest.approx(5495.85)


def test_quantity_scales_every_material_cost():
    result = ItemsQuotationCalculator().calculate(ItemsQuotationRequest(items=[
        {**SQUARE_WINDOW, "quantity": 3},
    ]))
    item = result.items[0]
    assert item.glass_area_m2 == pytest.approx(3.0)
    assert item.frame_weight_kg == pytest.approx(30.0)
    assert item.accessory_cost == pytest.approx(900)
    assert result.subtotal == pytest.approx(3 * 3450)


def test_multiple_items_and_custom_rates():
    request = ItemsQuotationRequest(
        items=[
            SQUARE_WINDOW,
            {"type": "door", "width_m": 1, "height_m": 2, "frame_type": "Heavy Duty Frame",
             "accessories": ["Security Lock"]},
        ],
        pricing={"glass_rate_per_m2": "100", "aluminium_rate_per_kg": "10",
                 "accessory_rate_per_item": "50", "labor_charge_percent": "10",
                 "gst_percent": "", "company_markup_percent": "0"},
    )
    result = get_calculator("quotation_items").calculate(request)
    window, door = result.items
    assert door.name == "Door 2"
    assert door.frame_weight_kg == pytest.approx(6 * 3.5)
    assert door.item_total == pytest.approx((200 + 210 + 50) * 1.1)

    assert result.total_glass_area_m2 == pytest.approx(3.0)
    assert result.total_frame_weight_kg == pytest.approx(10 + 21)
    assert result.subtotal == pytest.approx((100 + 100 + 100) + (200 + 210 + 50))
    assert result.company_markup == 0
    assert result.gst == 0
    assert result.grand_total == pytest.approx(result.subtotal * 1.1)


def test_blank_and_negative_quantity_price_one_piece():
    for quantity in ["", 0, -2]:
        result = ItemsQuotationCalculator().calculate(ItemsQuotationRequest(items=[
            {**SQUARE_WINDOW, "quantity": quantity},
        ]))
        assert result.items[0].quantity == 1
        assert result.subtotal == pytest.approx(3450)


def test_empty_quotation_is_zero():
    result = ItemsQuotationCalculator().calculate(ItemsQuotationRequest())
    assert result.items == []
    assert result.grand_total == 0


# ============================================================
# Smart recommendations
# ============================================================

def test_large_clear_door_gets_every_suggestion():
    item = QuotationItemInput(type=ItemType.DOOR, width_m=2.5, height_m=2.5)
    suggestions = smart_recommendations(item)
    assert len(suggestions) == 4
    assert suggestions[0].startswith("Consider tempered glass")
    assert suggestions[1] == "For 2.5m × 2.5m dimensions, sliding mechanism is recommended."
    assert "Security Lock is recommended for doors." in suggestions
    assert "Weather Strip recommended for better insulation." in suggestions


def test_fitted_accessories_silence_suggestions():
    item = QuotationItemInput(
        type=ItemType.DOOR, width_m=2.5, height_m=2.5,
        glass_type=QuotationGlass.TEMPERED_8MM,
        accessories=[Accessory.SLIDING_MECHANISM, Accessory.SECURITY_LOCK, Accessory.WEATHER_STRIP],
    )
    assert smart_recommendations(item) == []


def test_double_glazed_on_standard_frame():
    item = QuotationItemInput(width_m=1, height_m=1, glass_type=QuotationGlass.DOUBLE_GLAZED_UNIT)
    assert smart_recommendations(item) == [
        "Heavy Duty Frame is recommended for Double Glazed Units.",
    ]
    heavy = item.model_copy(update={"frame_type": FrameType.HEAVY_DUTY})
    assert smart_recommendations(heavy) == []


def test_recommendations_attached_to_priced_items():
    result = ItemsQuotationCalculator().calculate(ItemsQuotationRequest(items=[
        {"type": "door", "width_m": 0.9, "height_m": 2.1},
    ]))
    assert result.items[0].recommendations == ["Security Lock is recommended for doors."]


# ============================================================
# Quotation IDs
# ============================================================

def test_first_quotation_of_the_year(db):
    assert quotations.next_quotation_id(db, now=datetime(2025, 3, 1)) == "VEN2025-001"


def test_quotation_ids_increment_within_a_year(db):
    march = datetime(2025, 3, 1)
    first = quotations.save_quotation(db, _create(), now=march)
    second = quotations.save_quotation(db, _create(), now=march)
    assert first.quotation_id == "VEN2025-001"
    assert second.quotation_id == "VEN2025-002"


def test_sequence_restarts_each_year(db):
    quotations.save_quotation(db, _create(), now=datetime(2025, 12, 30))
    quotations.save_quotation(db, _create(), now=datetime(2025, 12, 31))
    new_year = quotations.save_quotation(db, _create(), now=datetime(2026, 1, 2))
    assert new_year.quotation_id == "VEN2026-001"


def test_sequence_follows_highest_id_not_count(db):
    march = datetime(2025, 3, 1)
    first = quotations.save_quotation(db, _create(), now=march)
    quotations.save_quotation(db, _create(), now=march)
    quotations.delete_quotation(db, first)
    assert quotations.next_quotation_id(db, now=march) == "VEN2025-003"


def test_custom_prefix(db):
    assert quotations.next_quotation_id(db, prefix="QT", now=datetime(2025, 1, 1)) == "QT2025-001"


# ============================================================
# Saved quotation store
# ============================================================

def test_saved_quotation_stores_totals(db):
    saved = quotations.save_quotation(db, _create())
    assert saved.customer_name == "Ravi Kumar"
    assert saved.status == "draft"
    assert saved.grand_total == pytest.approx(5495.85)
    assert saved.company_markup == pytest.approx(690)
    assert saved.items[0]["glass_cost"] == pytest.approx(350)
    assert saved.pricing["glass_rate_per_m2"] == 350


def test_list_by_status(db):
    quotations.save_quotation(db, _create())
    quotations.save_quotation(db, _create(status=QuotationStatus.SENT))
    sent = quotations.list_quotations(db, status=QuotationStatus.SENT)
    assert [q.status for q in sent] == ["sent"]
    assert len(quotations.list_quotations(db)) == 2


def test_search_matches_name_id_phone_and_email(db):
    ravi = quotations.save_quotation(db, _create())
    quotations.save_quotation(db, _create(customer={"name": "Anita Rao", "phone": "040-2345"}))

    assert [q.id for q in quotations.search_quotations(db, "ravi")] == [ravi.id]
    assert [q.id for q in quotations.search_quotations(db, "RAVI@example")] == [ravi.id]
    assert [q.id for q in quotations.search_quotations(db, "22338")] == [ravi.id]
    assert [q.id for q in quotations.search_quotations(db, ravi.quotation_id.lower())] == [ravi.id]
    assert quotations.search_quotations(db, "nobody") == []
    assert len(quotations.search_quotations(db, "  ")) == 2


def test_update_status_keeps_totals(db):
    saved = quotations.save_quotation(db, _create())
    updated = quotations.update_quotation(
        db, saved, SavedQuotationUpdate(status="approved", notes="Advance paid"),
    )
    assert updated.status == "approved"
    assert updated.notes == "Advance paid"
    assert updated.grand_total == pytest.approx(5495.85)


def test_update_rates_reprices_saved_items(db):
    saved = quotations.save_quotation(db, _create())
    updated = quotations.update_quotation(
        db, saved, SavedQuotationUpdate(pricing={"gst_percent": 0}),
    )
    assert updated.gst == 0
    assert updated.grand_total == pytest.approx(4657.5)
    assert updated.items[0]["name"] == "Bedroom"


def test_quotation_stats(db):
    quotations.save_quotation(db, _create(), now=datetime(2025, 2, 20))
    quotations.save_quotation(db, _create(status=QuotationStatus.SENT), now=datetime(2025, 3, 2))
    quotations.save_quotation(db, _create(status=QuotationStatus.APPROVED), now=datetime(2025, 3, 5))
    quotations.save_quotation(db, _create(status=QuotationStatus.COMPLETED), now=datetime(2025, 3, 6))
    quotations.save_quotation(db, _create(status=QuotationStatus.REJECTED), now=datetime(2025, 3, 7))

    stats = quotations.quotation_stats(db, now=datetime(2025, 3, 15))
    assert stats.total_quotations == 5
    assert stats.total_value == pytest.approx(5 * 5495.85)
    assert stats.pending_quotations == 2
    assert stats.approved_quotations == 2
    assert stats.this_month_quotations == 4
    assert stats.this_month_value == pytest.approx(4 * 5495.85)


def test_customer_name_and_phone_required():
    with pytest.raises(ValidationError):
        CustomerDetails(name="  ", phone="98480 22338")
    with pytest.raises(ValidationError):
        CustomerDetails(name="Ravi", phone="")


def test_quotation_needs_at_least_one_item():
    with pytest.raises(ValidationError):
        SavedQuotationCreate(customer=CUSTOMER, items=[])


# ============================================================
# HTTP
# ============================================================

def test_price_endpoint(client):
    response = client.post("/api/quotations/price", json={"items": [SQUARE_WINDOW]})
    assert response.status_code == 200
    data = response.json()
    assert data["grand_total"] == pytest.approx(5495.85)
    assert data["items"][0]["frame_cost"] == pytest.approx(2800)


def test_price_endpoint_unknown_frame(client):
    response = client.post("/api/quotations/price", json={
        "items": [{**SQUARE_WINDOW, "frame_type": "Steel Frame"}],
    })
    assert response.status_code == 422


def test_quotation_lifecycle_over_http(client):
    year = datetime.utcnow().year
    assert client.get("/api/quotations/next-id").json() == {"quotation_id": f"VEN{year}-001"}

    response = client.post("/api/quotations/", json={"customer": CUSTOMER, "items": [SQUARE_WINDOW]})
    assert response.status_code == 200
    created = response.json()
    quotation_id = created["quotation_id"]
    assert quotation_id == f"VEN{year}-001"
    assert created["status"] == "draft"
    assert created["items"][0]["item_total"] == pytest.approx(3967.5)

    fetched = client.get(f"/api/quotations/{quotation_id}")
    assert fetched.status_code == 200
    assert fetched.json()["grand_total"] == pytest.approx(5495.85)

    patched = client.patch(f"/api/quotations/{quotation_id}", json={"status": "sent"})
    assert patched.status_code == 200
    assert patched.json()["status"] == "sent"

    assert [q["quotation_id"] for q in client.get("/api/quotations/?status=sent").json()] == [quotation_id]
    assert client.get("/api/quotations/?status=draft").json() == []
    assert len(client.get("/api/quotations/?q=ravi").json()) == 1

    stats = client.get("/api/quotations/stats").json()
    assert stats["total_quotations"] == 1
    assert stats["pending_quotations"] == 1

    assert client.delete(f"/api/quotations/{quotation_id}").status_code == 200
    assert client.get(f"/api/quotations/{quotation_id}").status_code == 404


def test_missing_quotation_404(client):
    assert client.get("/api/quotations/VEN2025-999").status_code == 404
    assert client.patch("/api/quotations/VEN2025-999", json={"status": "sent"}).status_code == 404
    assert client.delete("/api/quotations/VEN2025-999").status_code == 404


def test_invalid_quotation_payloads(client):
    no_name = client.post("/api/quotations/", json={
        "customer": {"name": "", "phone": "123"}, "items": [SQUARE_WINDOW],
    })
    assert no_name.status_code == 422
    no_items = client.post("/api/quotations/", json={"customer": CUSTOMER, "items": []})
    assert no_items.status_code == 422
    bad_status = client.get("/api/quotations/?status=archived")
    assert bad_status.status_code == 422
