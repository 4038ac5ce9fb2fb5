from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import quotations, schemas
from ..calculators.registry import get_calculator
from ..database import get_db
from ..models import QuotationStatus

router = APIRouter(prefix="/quotations", tags=["quotations"])


def _get_or_404(db: Session, quotation_id: str):
    quotation = quotations.get_quotation(db, quotation_id)
    if not quotation:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return quotation


@router.post("/price", response_model=schemas.ItemsQuotation)
def price_quotation(request: schemas.ItemsQuotationRequest):
    """Price window/door items without saving them."""
    return get_calculator("quotation_items").calculate(request)


@router.get("/stats", response_model=schemas.QuotationStats)
def get_stats(db: Session = Depends(get_db)):
    return quotations.quotation_stats(db)


@router.get("/next-id")
def get_next_id(db: Session = Depends(get_db)):
    return {"quotation_id": quotations.next_quotation_id(db)}


@router.post("/", response_model=schemas.SavedQuotation)
def create_quotation(quotation: schemas.SavedQuotationCreate, db: Session = Depends(get_db)):
    return quotations.save_quotation(db, quotation)


@router.get("/", response_model=List[schemas.SavedQuotation])
def list_quotations(
    status: Optional[QuotationStatus] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db),
):
    if q:
        results = quotations.search_quotations(db, q)
        if status is not None:
            results = [r for r in results if r.status == status.value]
        return results
    return quotations.list_quotations(db, status=status)


@router.get("/{quotation_id}", response_model=schemas.SavedQuotation)
def get_quotation(quotation_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, quotation_id)


@router.patch("/{quotation_id}", response_model=schemas.SavedQuotation)
def update_quotation(quotation_id: str, changes: schemas.SavedQuotationUpdate,
                     db: Session = Depends(get_db)):
    return quotations.update_quotation(db, _get_or_404(db, quotation_id), changes)


@router.delete("/{quotation_id}")
def delete_quotation(quotation_id: str, db: Session = Depends(get_db)):
    quotations.delete_quotation(db, _get_or_404(db, quotation_id))
    return {"message": "Quotation deleted"}
