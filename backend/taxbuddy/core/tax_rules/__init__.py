from taxbuddy.core.tax_rules.paye import PAYECalculator, TaxInput, TaxResult, compute_paye
from taxbuddy.core.tax_rules.cit import CITCalculator, BusinessInput, BusinessResult, compute_cit

__all__ = [
    "PAYECalculator",
    "TaxInput",
    "TaxResult",
    "compute_paye",
    "CITCalculator",
    "BusinessInput",
    "BusinessResult",
    "compute_cit",
]
