"""
Reports API routes.
Generates structured PAYE/CIT reports for PDF export and sharing.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Depends, Query

from taxbuddy.api.calculations import calculate_for_request
from taxbuddy.api.deps import get_calculation_store, get_current_user_id
from taxbuddy.core.history import CalculationType
from taxbuddy.core.reports import ReportGenerator
from taxbuddy.core.store import CalculationNotFound, CalculationStore
from taxbuddy.schemas.schemas import CalculationRequest

logger = logging.getLogger(__name__)
router = APIRouter()
report_gen = ReportGenerator()


def _respond(report, include_text: bool) -> dict:
    payload = asdict(report)
    if include_text:
        payload["text"] = report_gen.render_text(report)
    return payload


@router.post("/generate")
async def generate_report(data: CalculationRequest, include_text: bool = Query(default=False)):
    """Generate a report directly from calculator inputs."""
    try:
        result, inputs = calculate_for_request(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if data.calculation_type == CalculationType.BUSINESS:
        report = report_gen.generate_cit_report(result, subject=inputs.get("company_name") or "Business")
    else:
        report = report_gen.generate_paye_report(
            result,
            subject=data.name or "Personal Tax",
            additional_income=inputs["additional_annual_income"],
        )
    return _respond(report, include_text)


@router.get("/{calculation_id}")
async def saved_calculation_report(
    calculation_id: str,
    include_text: bool = Query(default=False),
    user_id: str = Depends(get_current_user_id),
    store: CalculationStore = Depends(get_calculation_store),
):
    """Generate a report from a saved analysis without recalculating it."""
    try:
        record = store.get(user_id, calculation_id)
    except CalculationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        report = report_gen.generate_from_saved(record)
    except (TypeError, KeyError) as e:
        logger.error("Saved calculation %s has an unreadable result payload: %s", calculation_id, e)
        raise HTTPException(status_code=422, detail="Saved analysis cannot be rendered as a report")

    return _respond(report, include_text)
