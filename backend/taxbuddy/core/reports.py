"""
Report Generator
Builds structured tax reports from PAYE and CIT results.
PDF rendering is handled by the client; the report carries every figure it
needs so nothing is recalculated downstream.

Report Types:
  - Personal (PAYE) tax report
  - Business (CIT) tax report
"""

from dataclasses import dataclass, field
from datetime import datetime

from taxbuddy.core.formatting import format_currency, format_percent
from taxbuddy.core.history import CalculationType, SavedCalculation, load_result
from taxbuddy.core.tax_rules.cit import BusinessResult
from taxbuddy.core.tax_rules.paye import PENSION_RATE, NHF_RATE, TaxResult


@dataclass
class ReportLine:
    label: str
    display: str
    amount: float | None = None
    note: str = ""


@dataclass
class ReportSection:
    title: str
    lines: list[ReportLine] = field(default_factory=list)


@dataclass
class TaxReport:
    title: str
    calculation_type: CalculationType
    subject: str
    generated_at: str
    sections: list[ReportSection] = field(default_factory=list)
    total_tax: float = 0.0
    note: str = ""
    disclaimer: str = (
        "DISCLAIMER: This report is generated for educational and informational purposes only. "
        "It is based on the Nigeria Tax Act 2025 rates and does not constitute professional tax "
        "advice. Please consult a qualified tax professional for advice specific to your situation."
    )


def _money(label: str, amount: float, note: str = "") -> ReportLine:
    return ReportLine(label=label, display=format_currency(amount), amount=amount, note=note)


class ReportGenerator:
    """
    Generates structured report data from calculation results.
    The structured data can then be rendered as PDF, copied as text or
    displayed in the dashboard.
    """

    def generate_paye_report(
        self,
        result: TaxResult,
        subject: str = "Personal Tax",
        additional_income: float = 0.0,
    ) -> TaxReport:
        income = ReportSection(title="Income")
        if additional_income > 0:
            income.lines.append(_money("Additional Annual Income", additional_income))
        income.lines.append(_money("Annual Gross Income", result.annual_gross))

        deductions = ReportSection(
            title="Deductions",
            lines=[
                _money(f"Pension ({PENSION_RATE * 100:g}%)", result.pension),
                _money(f"NHF ({NHF_RATE * 100:g}%)", result.nhf),
                _money("Rent Relief (20% capped at ₦500,000)", result.rent_relief),
                _money("Total Deductions", result.total_deductions),
            ],
        )

        computation = ReportSection(
            title="Tax Computation",
            lines=[_money("Taxable Income", result.taxable_income)],
        )
        for band in result.breakdown:
            computation.lines.append(
                _money(f"{band.band} @ {band.rate}%", band.tax, note=f"on {format_currency(band.amount)}")
            )

        summary = ReportSection(
            title="Summary",
            lines=[
                _money("Net Tax Payable", result.net_tax),
                _money("Monthly Tax", result.monthly_tax),
                _money("Net Annual Income", result.net_annual),
                _money("Net Monthly Income", result.net_monthly),
                ReportLine(
                    label="Effective Tax Rate",
                    display=format_percent(result.effective_rate),
                    amount=result.effective_rate,
                ),
            ],
        )

        note = ""
        if result.net_tax == 0:
            note = "Taxable income falls within the ₦800,000 tax-free band. No PAYE is due."

        return TaxReport(
            title="Personal Income Tax (PAYE) Report",
            calculation_type=CalculationType.PERSONAL,
            subject=subject,
            generated_at=datetime.now().isoformat(),
            sections=[income, deductions, computation, summary],
            total_tax=result.net_tax,
            note=note,
        )

    def generate_cit_report(self, result: BusinessResult, subject: str = "Business") -> TaxReport:
        classification = ReportSection(
            title="Classification",
            lines=[
                ReportLine(
                    label="Business Size",
                    display="Small Business" if result.is_small_business else "Large Business",
                ),
            ],
        )

        computation = ReportSection(
            title="Tax Computation",
            lines=[
                _money("Assessable Profit", result.assessable_profit),
                _money(f"Company Income Tax ({result.cit_rate}%)", result.cit),
                _money(f"Development Levy ({result.development_levy_rate}%)", result.development_levy),
                _money("Total Tax Payable", result.total_tax),
            ],
        )

        return TaxReport(
            title="Company Income Tax (CIT) Report",
            calculation_type=CalculationType.BUSINESS,
            subject=subject,
            generated_at=datetime.now().isoformat(),
            sections=[classification, computation],
            total_tax=result.total_tax,
            note=result.note,
        )

    def generate_from_saved(self, record: SavedCalculation) -> TaxReport:
        result = load_result(record.calculation_type, record.data)

        if record.calculation_type == CalculationType.BUSINESS:
            subject = record.inputs.get("company_name") or "Business"
            return self.generate_cit_report(result, subject=subject)

        subject = record.inputs.get("name") or "Personal Tax"
        additional = float(record.inputs.get("additional_annual_income") or 0.0)
        return self.generate_paye_report(result, subject=subject, additional_income=additional)

    def render_text(self, report: TaxReport) -> str:
        lines = [report.title, report.subject, f"Generated: {report.generated_at}", ""]
        for section in report.sections:
            lines.append(section.title.upper())
            for line in section.lines:
                suffix = f" ({line.note})" if line.note else ""
                lines.append(f"{line.label}: {line.display}{suffix}")
            lines.append("")
        if report.note:
            lines.extend([report.note, ""])
        lines.append(report.disclaimer)
        return "\n".join(lines)
