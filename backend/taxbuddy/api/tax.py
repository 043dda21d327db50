"""
Tax calculation API routes.
Exposes the PAYE and CIT calculators via public REST endpoints.
"""

from dataclasses import asdict, replace

from fastapi import APIRouter, HTTPException

from taxbuddy.schemas.schemas import PAYECalculateRequest, CITCalculateRequest
from taxbuddy.core.tax_rules.paye import (
    IncomeSource,
    SalaryComponents,
    TaxInput,
    build_tax_input,
    compute_paye,
)
from taxbuddy.core.tax_rules.cit import BusinessInput, compute_cit

router = APIRouter()


def paye_input_from_request(data: PAYECalculateRequest) -> TaxInput:
    components = SalaryComponents(**data.components.model_dump()) if data.components else None
    sources = [IncomeSource(name=s.name, amount=s.amount) for s in data.additional_income]

    tax_input = build_tax_input(
        monthly_gross=data.monthly_gross,
        annual_rent=data.annual_rent,
        has_pension=data.has_pension,
        has_nhf=data.has_nhf,
        income_sources=sources,
        components=components,
        nhf_basis=data.nhf_basis,
    )

    overrides = {}
    if data.pension_base is not None:
        overrides["pension_base"] = data.pension_base
    if data.nhf_base is not None:
        overrides["nhf_base"] = data.nhf_base
    if data.additional_annual_income:
        overrides["additional_annual_income"] = (
            tax_input.additional_annual_income + data.additional_annual_income
        )
    return replace(tax_input, **overrides) if overrides else tax_input


def business_input_from_request(data: CITCalculateRequest) -> BusinessInput:
    return BusinessInput(
        turnover=data.turnover,
        assets=data.assets,
        profit_before_tax=data.profit_before_tax,
        depreciation=data.depreciation,
        fines_penalties=data.fines_penalties,
        capital_allowances=data.capital_allowances,
    )


@router.post("/paye/calculate")
async def calculate_paye(data: PAYECalculateRequest):
    """Calculate PAYE personal income tax based on Nigeria Tax Act 2025."""
    try:
        result = compute_paye(paye_input_from_request(data))
        return asdict(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/cit/calculate")
async def calculate_cit(data: CITCalculateRequest):
    """Calculate Company Income Tax and Development Levy based on Nigeria Tax Act 2025."""
    result = compute_cit(business_input_from_request(data))
    return asdict(result)
