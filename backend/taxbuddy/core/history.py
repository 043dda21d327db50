"""
Saved calculation records.

A saved calculation pairs a result payload with the inputs that produced it,
tagged with the calculation type and owner. Results are stored as plain
dicts so the report layer can rebuild them without re-running tax logic.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import TypeAdapter

from taxbuddy.core.tax_rules.cit import BusinessResult
from taxbuddy.core.tax_rules.paye import BandBreakdown, TaxResult

_timestamp = TypeAdapter(datetime)


class CalculationType(str, Enum):
    PERSONAL = "personal"
    BUSINESS = "business"


@dataclass
class SavedCalculation:
    id: str
    user_id: str
    calculation_type: CalculationType
    data: dict
    inputs: dict
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict) -> "SavedCalculation":
        created_at = row["created_at"]
        if isinstance(created_at, str):
            created_at = _timestamp.validate_python(created_at)
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            calculation_type=CalculationType(row["calculation_type"]),
            data=row.get("data") or {},
            inputs=row.get("inputs") or {},
            created_at=created_at,
        )

    @property
    def tax_amount(self) -> float:
        if self.calculation_type == CalculationType.BUSINESS:
            return float(self.data.get("total_tax") or 0.0)
        return float(self.data.get("net_tax") or 0.0)


@dataclass
class HistorySummary:
    total: int = 0
    this_month: int = 0
    total_tax_calculated: float = 0.0
    by_type: dict[str, int] = field(default_factory=dict)


def build_record(
    user_id: str,
    calculation_type: CalculationType,
    result: TaxResult | BusinessResult,
    inputs: dict[str, Any],
) -> dict:
    return {
        "user_id": user_id,
        "calculation_type": calculation_type.value,
        "data": asdict(result),
        "inputs": inputs,
    }


def load_result(calculation_type: CalculationType, data: dict) -> TaxResult | BusinessResult:
    """Rebuild an engine result from a stored payload."""
    if calculation_type == CalculationType.BUSINESS:
        return BusinessResult(**data)

    payload = dict(data)
    payload["breakdown"] = tuple(BandBreakdown(**band) for band in payload.get("breakdown", ()))
    return TaxResult(**payload)


def summarize_history(records: list[SavedCalculation], today: date | None = None) -> HistorySummary:
    # created_at is stored in UTC, so "this month" is judged in UTC too
    if today is None:
        today = datetime.now(timezone.utc).date()

    summary = HistorySummary()
    for record in records:
        summary.total += 1
        created_at = record.created_at
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(timezone.utc)
        if created_at.year == today.year and created_at.month == today.month:
            summary.this_month += 1
        summary.total_tax_calculated += record.tax_amount
        key = record.calculation_type.value
        summary.by_type[key] = summary.by_type.get(key, 0) + 1

    summary.total_tax_calculated = round(summary.total_tax_calculated, 2)
    return summary
