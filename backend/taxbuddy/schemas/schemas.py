"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from taxbuddy.core.history import CalculationType
from taxbuddy.core.tax_rules.paye import NHFBasis


# ── Personal Tax Schemas ──

class SalaryComponentsInput(BaseModel):
    basic: float = Field(..., ge=0)
    housing: float = Field(default=0, ge=0)
    transport: float = Field(default=0, ge=0)
    other: float = Field(default=0, ge=0)


class IncomeSourceInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    amount: float = Field(..., ge=0)


class PAYECalculateRequest(BaseModel):
    monthly_gross: float = Field(default=0, ge=0, description="Monthly gross salary")
    components: SalaryComponentsInput | None = Field(
        default=None, description="Detailed salary breakdown; overrides monthly_gross"
    )
    nhf_basis: NHFBasis = NHFBasis.GROSS
    pension_base: float | None = Field(default=None, ge=0, description="Monthly pensionable salary override")
    nhf_base: float | None = Field(default=None, ge=0, description="Monthly NHF base override")
    annual_rent: float = Field(default=0, ge=0)
    has_pension: bool = True
    has_nhf: bool = True
    additional_income: list[IncomeSourceInput] = Field(default_factory=list)
    additional_annual_income: float = Field(default=0, ge=0)

    @model_validator(mode="after")
    def require_some_income(self):
        has_salary = self.monthly_gross > 0 or (
            self.components is not None and sum(self.components.model_dump().values()) > 0
        )
        has_other = self.additional_annual_income > 0 or any(s.amount > 0 for s in self.additional_income)
        if not (has_salary or has_other):
            raise ValueError("Please enter at least your monthly salary or additional income")
        return self


# ── Business Tax Schemas ──

class CITCalculateRequest(BaseModel):
    turnover: float = Field(..., gt=0, description="Annual turnover")
    assets: float = Field(default=0, ge=0, description="Net book value of fixed assets")
    profit_before_tax: float = Field(default=0, ge=0)
    depreciation: float = Field(default=0, ge=0)
    fines_penalties: float = Field(default=0, ge=0)
    capital_allowances: float = Field(default=0, ge=0)
    company_name: str | None = Field(default=None, max_length=255)


# ── Saved Calculation / Report Schemas ──

class CalculationRequest(BaseModel):
    calculation_type: CalculationType
    name: str | None = Field(default=None, max_length=255)
    personal: PAYECalculateRequest | None = None
    business: CITCalculateRequest | None = None

    @model_validator(mode="after")
    def require_matching_inputs(self):
        if self.calculation_type == CalculationType.PERSONAL and self.personal is None:
            raise ValueError("personal inputs are required for a personal calculation")
        if self.calculation_type == CalculationType.BUSINESS and self.business is None:
            raise ValueError("business inputs are required for a business calculation")
        return self


class SavedCalculationResponse(BaseModel):
    id: str
    user_id: str
    calculation_type: CalculationType
    data: dict
    inputs: dict
    created_at: datetime

    class Config:
        from_attributes = True


class SavedCalculationListResponse(BaseModel):
    calculations: list[SavedCalculationResponse]
    total: int


class HistorySummaryResponse(BaseModel):
    total: int
    this_month: int
    total_tax_calculated: float
    by_type: dict[str, int]

    class Config:
        from_attributes = True


# ── Extraction Schemas ──

class UploadedDocumentInput(BaseModel):
    type: str = Field(..., description="auditedStatement, fixedAssetRegister, trialBalance or whtCreditNote")
    name: str
    data: str = Field(..., min_length=1, description="Base64-encoded PDF")


class ExtractionRequest(BaseModel):
    documents: list[UploadedDocumentInput] = Field(..., min_length=1)
