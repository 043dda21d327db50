"""
Pay-As-You-Earn (PAYE) Calculator
Based on Nigeria Tax Act 2025, Fourth Schedule — Individuals' Income Tax Rates

Tax Bands (applied to taxable income after deductions):
  (a) First ₦800,000 at 0%
  (b) Next ₦2,200,000 at 15%
  (c) Next ₦9,000,000 at 18%
  (d) Next ₦13,000,000 at 21%
  (e) Next ₦25,000,000 at 23%
  (f) Above ₦50,000,000 at 25%

Deductions:
  - Pension: 8% of the pensionable salary (when contributing)
  - National Housing Fund (NHF): 2.5% of basic or gross salary (when contributing)
  - Rent relief: 20% of annual rent paid (max ₦500,000), always applied
"""

import logging
from dataclasses import dataclass
from enum import Enum

from taxbuddy.core.formatting import format_currency

logger = logging.getLogger(__name__)


# (band width, rate percent)
TAX_BANDS: list[tuple[float, int]] = [
    (800_000.0, 0),
    (2_200_000.0, 15),
    (9_000_000.0, 18),
    (13_000_000.0, 21),
    (25_000_000.0, 23),
    (float("inf"), 25),
]

PENSION_RATE = 0.08
NHF_RATE = 0.025
RENT_RELIEF_RATE = 0.20
RENT_RELIEF_MAX = 500_000.0

MONTHS_IN_YEAR = 12


class NHFBasis(str, Enum):
    BASIC = "basic"
    GROSS = "gross"


@dataclass(frozen=True)
class IncomeSource:
    name: str
    amount: float


@dataclass(frozen=True)
class SalaryComponents:
    """Monthly salary split into its components (detailed mode)."""

    basic: float
    housing: float = 0.0
    transport: float = 0.0
    other: float = 0.0

    @property
    def monthly_gross(self) -> float:
        return self.basic + self.housing + self.transport + self.other

    @property
    def pension_base(self) -> float:
        # Pension Reform Act: basic, housing and transport only
        return self.basic + self.housing + self.transport

    def nhf_base(self, basis: NHFBasis = NHFBasis.GROSS) -> float:
        if basis == NHFBasis.BASIC:
            return self.basic
        return self.monthly_gross


@dataclass(frozen=True)
class TaxInput:
    """
    Inputs for one PAYE calculation. Salary figures are monthly; rent and
    additional income are annual. ``pension_base``/``nhf_base`` default to
    ``monthly_gross`` when not given.
    """

    monthly_gross: float
    pension_base: float | None = None
    nhf_base: float | None = None
    annual_rent: float = 0.0
    has_pension: bool = True
    has_nhf: bool = True
    additional_annual_income: float = 0.0


@dataclass(frozen=True)
class BandBreakdown:
    band: str
    rate: int
    amount: float
    tax: float


@dataclass(frozen=True)
class TaxResult:
    annual_gross: float
    pension: float
    nhf: float
    rent_relief: float
    total_deductions: float
    taxable_income: float
    net_tax: float
    monthly_tax: float
    net_annual: float
    net_monthly: float
    effective_rate: float
    breakdown: tuple[BandBreakdown, ...] = ()


def band_label(index: int) -> str:
    if index == 0:
        return f"First {format_currency(TAX_BANDS[0][0])}"
    width, _ = TAX_BANDS[index]
    if width == float("inf"):
        floor = sum(w for w, _ in TAX_BANDS[:index])
        return f"Above {format_currency(floor)}"
    return f"Next {format_currency(width)}"


class PAYECalculator:
    """
    Deterministic PAYE calculator for Nigerian employees.
    Inputs are assumed to be validated and non-negative.
    """

    def calculate(self, tax_input: TaxInput) -> TaxResult:
        annual_gross = tax_input.monthly_gross * MONTHS_IN_YEAR + tax_input.additional_annual_income

        pension_base = tax_input.monthly_gross if tax_input.pension_base is None else tax_input.pension_base
        nhf_base = tax_input.monthly_gross if tax_input.nhf_base is None else tax_input.nhf_base

        pension = round(pension_base * MONTHS_IN_YEAR * PENSION_RATE, 2) if tax_input.has_pension else 0.0
        nhf = round(nhf_base * MONTHS_IN_YEAR * NHF_RATE, 2) if tax_input.has_nhf else 0.0
        rent_relief = round(min(tax_input.annual_rent * RENT_RELIEF_RATE, RENT_RELIEF_MAX), 2)
        total_deductions = round(pension + nhf + rent_relief, 2)

        taxable_income = max(round(annual_gross - total_deductions, 2), 0.0)

        breakdown = self._calculate_bands(taxable_income)
        net_tax = round(sum(b.tax for b in breakdown), 2)
        net_annual = round(annual_gross - total_deductions - net_tax, 2)
        effective_rate = (net_tax / annual_gross * 100) if annual_gross > 0 else 0.0

        logger.debug(
            "PAYE computed: gross=%s deductions=%s taxable=%s tax=%s",
            annual_gross, total_deductions, taxable_income, net_tax,
        )

        return TaxResult(
            annual_gross=annual_gross,
            pension=pension,
            nhf=nhf,
            rent_relief=rent_relief,
            total_deductions=total_deductions,
            taxable_income=taxable_income,
            net_tax=net_tax,
            monthly_tax=round(net_tax / MONTHS_IN_YEAR, 2),
            net_annual=net_annual,
            net_monthly=round(net_annual / MONTHS_IN_YEAR, 2),
            effective_rate=round(effective_rate, 2),
            breakdown=breakdown,
        )

    def _calculate_bands(self, taxable_income: float) -> tuple[BandBreakdown, ...]:
        breakdown = []
        remaining = taxable_income

        for index, (band_width, rate) in enumerate(TAX_BANDS):
            if remaining <= 0:
                break

            taxable_in_band = min(remaining, band_width)
            breakdown.append(
                BandBreakdown(
                    band=band_label(index),
                    rate=rate,
                    amount=round(taxable_in_band, 2),
                    tax=round(taxable_in_band * rate / 100, 2),
                )
            )
            remaining -= taxable_in_band

        return tuple(breakdown)


_calculator = PAYECalculator()


def compute_paye(tax_input: TaxInput) -> TaxResult:
    return _calculator.calculate(tax_input)


def total_additional_income(sources: list[IncomeSource] | None) -> float:
    if not sources:
        return 0.0
    return sum(source.amount for source in sources)


def build_tax_input(
    monthly_gross: float = 0.0,
    annual_rent: float = 0.0,
    has_pension: bool = True,
    has_nhf: bool = True,
    income_sources: list[IncomeSource] | None = None,
    components: SalaryComponents | None = None,
    nhf_basis: NHFBasis = NHFBasis.GROSS,
) -> TaxInput:
    """
    Assemble a ``TaxInput`` from what a user enters on the calculator form:
    either a single monthly salary or its components, the NHF basis policy,
    and any named additional income sources. Raises ``ValueError`` for
    negative figures.
    """
    figures = {"monthly_gross": monthly_gross, "annual_rent": annual_rent}
    if components is not None:
        figures.update(
            basic=components.basic,
            housing=components.housing,
            transport=components.transport,
            other=components.other,
        )
    for source in income_sources or []:
        figures[f"income source '{source.name}'"] = source.amount

    for name, value in figures.items():
        if value < 0:
            raise ValueError(f"{name} cannot be negative")

    if components is not None:
        monthly_gross = components.monthly_gross
        pension_base = components.pension_base
        nhf_base = components.nhf_base(nhf_basis)
    else:
        pension_base = monthly_gross
        nhf_base = monthly_gross

    return TaxInput(
        monthly_gross=monthly_gross,
        pension_base=pension_base,
        nhf_base=nhf_base,
        annual_rent=annual_rent,
        has_pension=has_pension,
        has_nhf=has_nhf,
        additional_annual_income=total_additional_income(income_sources),
    )
