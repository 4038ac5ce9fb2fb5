"""
Estimate endpoints — stateless calculations over the posted form values.
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from .. import schemas
from ..calculators.registry import get_calculator
from ..config import settings
from ..pricing_engine import PricingEngine
from ..rates import rate_card
from ..recommendation import recommend_profile
from ..share import build_share_url, decode_share_params, encode_share_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])

engine = PricingEngine()


@router.get("/rates")
def get_rates():
    """Glass, profile, glass-type and finish tables used by the engine."""
    return rate_card()


@router.post("/", response_model=schemas.EstimateResult)
def create_estimate(estimate_input: schemas.EstimateInput):
    try:
        return engine.estimate(estimate_input)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/quotation", response_model=schemas.QuotationResponse)
def create_quotation(request: schemas.QuotationRequest):
    try:
        estimate = engine.estimate(request.input)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"estimate": estimate, "quotation": engine.quotation(estimate, request.charges)}


@router.post("/recommendation", response_model=schemas.Recommendation)
def get_recommendation(request: schemas.RecommendationRequest):
    return recommend_profile(request.width_mm, request.height_mm, request.glass_thickness_mm)


@router.post("/takeoff", response_model=schemas.TakeoffResult)
def create_takeoff(request: schemas.TakeoffRequest):
    calculator = get_calculator("multi_item")
    try:
        return calculator.calculate(request)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/share", response_model=schemas.ShareLink)
def create_share_link(estimate_input: schemas.EstimateInput):
    return {
        "query": encode_share_params(estimate_input),
        "url": build_share_url(settings.SHARE_BASE_URL, estimate_input),
    }


@router.get("/share", response_model=schemas.EstimateInput)
def open_share_link(request: Request):
    try:
        return decode_share_params(dict(request.query_params))
    except ValueError as e:
        logger.warning("Rejected share link %s: %s", request.url.query, e)
        raise HTTPException(status_code=422, detail=str(e))
