"""
Company Income Tax (CIT) Calculator
Based on Nigeria Tax Act 2025

Small companies (turnover ≤ ₦100M AND fixed assets ≤ ₦250M):
  - Exempt from CIT, Development Levy and VAT

All other companies:
  - CIT: 30% of assessable profit
  - Development Levy: 4% of assessable profit

Assessable profit = profit before tax + depreciation + fines/penalties
                    − capital allowances (floored at zero)
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


SMALL_COMPANY_TURNOVER_THRESHOLD = 100_000_000.0
SMALL_COMPANY_ASSETS_THRESHOLD = 250_000_000.0

CIT_RATE_STANDARD = 30
DEVELOPMENT_LEVY_RATE = 4

SMALL_BUSINESS_NOTE = (
    "Small businesses (Turnover <= ₦100M AND Assets <= ₦250M) are exempt from CIT, "
    "Development Levy, and VAT (registration optional)."
)
LARGE_BUSINESS_NOTE = (
    "Large businesses (Turnover > ₦100M OR Assets > ₦250M) pay 30% CIT and 4% Development Levy "
    "on assessable profit, not turnover. VAT registration is mandatory."
)
INVALID_TURNOVER_NOTE = "Enter a valid annual turnover to calculate company income tax."


@dataclass(frozen=True)
class BusinessInput:
    turnover: float
    assets: float = 0.0
    profit_before_tax: float = 0.0
    depreciation: float = 0.0
    fines_penalties: float = 0.0
    capital_allowances: float = 0.0


@dataclass(frozen=True)
class BusinessResult:
    is_small_business: bool
    assessable_profit: float
    cit_rate: int
    development_levy_rate: int
    cit: float
    development_levy: float
    total_tax: float
    note: str


class CITCalculator:
    """
    Deterministic Company Income Tax calculator for Nigerian companies.
    Inputs are assumed to be validated and non-negative.
    """

    def is_small_business(self, turnover: float, assets: float = 0.0) -> bool:
        return turnover <= SMALL_COMPANY_TURNOVER_THRESHOLD and assets <= SMALL_COMPANY_ASSETS_THRESHOLD

    def assessable_profit(self, business_input: BusinessInput) -> float:
        adjusted = (
            business_input.profit_before_tax
            + business_input.depreciation
            + business_input.fines_penalties
            - business_input.capital_allowances
        )
        return max(round(adjusted, 2), 0.0)

    def calculate(self, business_input: BusinessInput) -> BusinessResult:
        is_small = self.is_small_business(business_input.turnover, business_input.assets)
        assessable_profit = self.assessable_profit(business_input)

        if business_input.turnover <= 0:
            logger.debug("CIT skipped: non-positive turnover %s", business_input.turnover)
            return self._exempt_result(is_small, assessable_profit, INVALID_TURNOVER_NOTE)

        if is_small:
            return self._exempt_result(is_small, assessable_profit, SMALL_BUSINESS_NOTE)

        cit = round(assessable_profit * CIT_RATE_STANDARD / 100, 2)
        development_levy = round(assessable_profit * DEVELOPMENT_LEVY_RATE / 100, 2)

        logger.debug(
            "CIT computed: turnover=%s assessable=%s cit=%s levy=%s",
            business_input.turnover, assessable_profit, cit, development_levy,
        )

        return BusinessResult(
            is_small_business=False,
            assessable_profit=assessable_profit,
            cit_rate=CIT_RATE_STANDARD,
            development_levy_rate=DEVELOPMENT_LEVY_RATE,
            cit=cit,
            development_levy=development_levy,
            total_tax=round(cit + development_levy, 2),
            note=LARGE_BUSINESS_NOTE,
        )

    def _exempt_result(self, is_small: bool, assessable_profit: float, note: str) -> BusinessResult:
        return BusinessResult(
            is_small_business=is_small,
            assessable_profit=assessable_profit,
            cit_rate=0,
            development_levy_rate=0,
            cit=0.0,
            development_levy=0.0,
            total_tax=0.0,
            note=note,
        )


_calculator = CITCalculator()


def compute_cit(business_input: BusinessInput) -> BusinessResult:
    return _calculator.calculate(business_input)
