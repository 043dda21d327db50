"""
Saved calculation API routes.
Persists calculation results with their inputs and serves the user's history.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Depends, Query

from taxbuddy.api.deps import get_calculation_store, get_current_user_id
from taxbuddy.api.tax import business_input_from_request, paye_input_from_request
from taxbuddy.core.history import CalculationType, build_record, summarize_history
from taxbuddy.core.store import CalculationNotFound, CalculationStore
from taxbuddy.core.tax_rules.cit import compute_cit
from taxbuddy.core.tax_rules.paye import compute_paye
from taxbuddy.schemas.schemas import (
    CalculationRequest,
    HistorySummaryResponse,
    SavedCalculationListResponse,
    SavedCalculationResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def calculate_for_request(data: CalculationRequest):
    """Run the engine for a save/report request; returns (result, inputs)."""
    if data.calculation_type == CalculationType.BUSINESS:
        inputs = data.business.model_dump()
        if data.name and not inputs.get("company_name"):
            inputs["company_name"] = data.name
        return compute_cit(business_input_from_request(data.business)), inputs

    tax_input = paye_input_from_request(data.personal)
    inputs = data.personal.model_dump(mode="json")
    inputs["name"] = data.name
    inputs["additional_annual_income"] = tax_input.additional_annual_income
    return compute_paye(tax_input), inputs


@router.post("/", response_model=SavedCalculationResponse)
async def save_calculation(
    data: CalculationRequest,
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    """Calculate and save a personal or business tax analysis."""
    try:
        result, inputs = calculate_for_request(data)
        saved = store.save(build_record(user_id, data.calculation_type, result, inputs))
        return asdict(saved)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to save calculation for user %s: %s", user_id, e)
        raise HTTPException(status_code=500, detail="Failed to save analysis")


@router.get("/", response_model=SavedCalculationListResponse)
async def list_calculations(
    calculation_type: CalculationType | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    """List the user's saved analyses, newest first."""
    try:
        records = store.list_for_user(user_id, calculation_type)
    except Exception as e:
        logger.error("Failed to load calculations for user %s: %s", user_id, e)
        raise HTTPException(status_code=500, detail="Failed to load saved analyses")

    return {"calculations": [asdict(r) for r in records], "total": len(records)}


@router.get("/summary", response_model=HistorySummaryResponse)
async def history_summary(
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    """Dashboard totals: number of analyses, this month's count and total tax calculated."""
    try:
        records = store.list_for_user(user_id)
    except Exception as e:
        logger.error("Failed to load calculations for user %s: %s", user_id, e)
        raise HTTPException(status_code=500, detail="Failed to load saved analyses")

    return asdict(summarize_history(records))


@router.get("/{calculation_id}", response_model=SavedCalculationResponse)
async def get_calculation(
    calculation_id: str,
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    try:
        return asdict(store.get(user_id, calculation_id))
    except CalculationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: str,
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    try:
        store.delete(user_id, calculation_id)
    except CalculationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Failed to delete calculation %s: %s", calculation_id, e)
        raise HTTPException(status_code=500, detail="Failed to delete analysis")
