"""
Saved customer quotations.

Each row stores the customer block, the priced items and the rates they
were priced at, plus the roll-up totals so lists and stats never reprice.
Quotation IDs read like VEN2025-003: prefix, year, then a per-year
sequence one past the highest already issued that year.
"""

import logging
import re
from datetime import datetime
from typing import Optional

from sqlalchemy import extract, or_
from sqlalchemy.orm import Session

from . import models
from .calculators.registry import get_calculator
from .config import settings
from .models import QuotationStatus
from .schemas import (
    ItemsQuotation, ItemsQuotationRequest, QuotationItemInput, QuotationPricing,
    QuotationStats, SavedQuotationCreate, SavedQuotationUpdate,
)

logger = logging.getLogger(__name__)

SEQUENCE_PATTERN = re.compile(r"(\d+)$")

PENDING_STATUSES = (QuotationStatus.DRAFT.value, QuotationStatus.SENT.value)
APPROVED_STATUSES = (QuotationStatus.APPROVED.value, QuotationStatus.COMPLETED.value)


def _newest_first(query):
    return query.order_by(models.SavedQuotation.created_at.desc(), models.SavedQuotation.id.desc())


def price_items(items: list, pricing: QuotationPricing) -> ItemsQuotation:
    calculator = get_calculator("quotation_items")
    return calculator.calculate(ItemsQuotationRequest(items=items, pricing=pricing))


def _apply_totals(quotation: models.SavedQuotation, priced: ItemsQuotation,
                  pricing: QuotationPricing):
    quotation.items = [item.model_dump(mode="json") for item in priced.items]
    quotation.pricing = pricing.model_dump(mode="json")
    quotation.total_glass_area = priced.total_glass_area_m2
    quotation.total_frame_weight = priced.total_frame_weight_kg
    quotation.subtotal = priced.subtotal
    quotation.labor_charges = priced.labor_charges
    quotation.company_markup = priced.company_markup
    quotation.gst = priced.gst
    quotation.grand_total = priced.grand_total


def next_quotation_id(db: Session, prefix: str = None, now: datetime = None) -> str:
    """Next human-readable ID for the current year, e.g. VEN2025-004."""
    prefix = settings.QUOTATION_PREFIX if prefix is None else prefix
    now = now or datetime.utcnow()

    rows = db.query(models.SavedQuotation.quotation_id).filter(
        extract("year", models.SavedQuotation.created_at) == now.year
    ).all()

    max_sequence = 0
    for (quotation_id,) in rows:
        match = SEQUENCE_PATTERN.search(quotation_id)
        if match:
            max_sequence = max(max_sequence, int(match.group(1)))

    return f"{prefix}{now.year}-{max_sequence + 1:03d}"


def save_quotation(db: Session, data: SavedQuotationCreate,
                   now: datetime = None) -> models.SavedQuotation:
    now = now or datetime.utcnow()
    quotation = models.SavedQuotation(
        quotation_id=next_quotation_id(db, now=now),
        customer_name=data.customer.name,
        customer_phone=data.customer.phone,
        customer_email=data.customer.email,
        customer_address=data.customer.address,
        status=data.status.value,
        notes=data.notes,
        created_at=now,
        updated_at=now,
    )
    _apply_totals(quotation, price_items(data.items, data.pricing), data.pricing)

    db.add(quotation)
    db.commit()
    db.refresh(quotation)
    logger.info("Saved quotation %s for %s (%.2f)",
                quotation.quotation_id, quotation.customer_name, quotation.grand_total)
    return quotation


def get_quotation(db: Session, quotation_id: str) -> Optional[models.SavedQuotation]:
    return db.query(models.SavedQuotation).filter(
        models.SavedQuotation.quotation_id == quotation_id
    ).first()


def list_quotations(db: Session, status: QuotationStatus = None, limit: int = 50) -> list:
    query = db.query(models.SavedQuotation)
    if status is not None:
        query = query.filter(models.SavedQuotation.status == QuotationStatus(status).value)
    return _newest_first(query).limit(limit).all()


def search_quotations(db: Session, term: str, limit: int = 100) -> list:
    """
    Match on customer name, quotation ID or email (case-insensitive),
    or on a fragment of the phone number.
    """
    term = (term or "").strip()
    if not term:
        return list_quotations(db, limit=limit)
    pattern = f"%{term}%"
    query = db.query(models.SavedQuotation).filter(or_(
        models.SavedQuotation.customer_name.ilike(pattern),
        models.SavedQuotation.quotation_id.ilike(pattern),
        models.SavedQuotation.customer_phone.contains(term),
        models.SavedQuotation.customer_email.ilike(pattern),
    ))
    return _newest_first(query).limit(limit).all()


def update_quotation(db: Session, quotation: models.SavedQuotation,
                     changes: SavedQuotationUpdate) -> models.SavedQuotation:
    """Apply a partial update. New items or rates reprice the whole quotation."""
    if changes.customer is not None:
        quotation.customer_name = changes.customer.name
        quotation.customer_phone = changes.customer.phone
        quotation.customer_email = changes.customer.email
        quotation.customer_address = changes.customer.address
    if changes.status is not None:
        quotation.status = changes.status.value
    if changes.notes is not None:
        quotation.notes = changes.notes

    if changes.items is not None or changes.pricing is not None:
        items = changes.items
        if items is None:
            items = [QuotationItemInput(**item) for item in quotation.items]
        pricing = changes.pricing or QuotationPricing(**quotation.pricing)
        _apply_totals(quotation, price_items(items, pricing), pricing)

    quotation.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(quotation)
    logger.info("Updated quotation %s (status %s)", quotation.quotation_id, quotation.status)
    return quotation


def delete_quotation(db: Session, quotation: models.SavedQuotation):
    db.delete(quotation)
    db.commit()
    logger.info("Deleted quotation %s", quotation.quotation_id)


def quotation_stats(db: Session, now: datetime = None) -> QuotationStats:
    """Dashboard counters over every saved quotation."""
    now = now or datetime.utcnow()
    first_of_month = datetime(now.year, now.month, 1)

    stats = QuotationStats()
    for quotation in db.query(models.SavedQuotation).all():
        stats.total_quotations += 1
        stats.total_value += quotation.grand_total
        if quotation.status in PENDING_STATUSES:
            stats.pending_quotations += 1
        if quotation.status in APPROVED_STATUSES:
            stats.approved_quotations += 1
        if quotation.created_at >= first_of_month:
            stats.this_month_quotations += 1
            stats.this_month_value += quotation.grand_total
    return stats
