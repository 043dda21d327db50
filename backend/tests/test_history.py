"""
Tests for saved calculation records, history summaries and the Supabase store.
"""

from dataclasses import asdict
from datetime import date, datetime, timedelta, timezone

import pytest
from taxbuddy.core.history import (
    CalculationType,
    SavedCalculation,
    build_record,
    load_result,
    summarize_history,
)
from taxbuddy.core.store import CalculationNotFound, CalculationStore
from taxbuddy.core.tax_rules.cit import BusinessInput, compute_cit
from taxbuddy.core.tax_rules.paye import TaxInput, compute_paye


@pytest.fixture
def paye_result():
    return compute_paye(TaxInput(monthly_gross=500_000, annual_rent=1_200_000))


@pytest.fixture
def cit_result():
    return compute_cit(BusinessInput(turnover=150_000_000, profit_before_tax=30_000_000))


def saved(calculation_type, data, created_at, user_id="user-1"):
    return SavedCalculation(
        id="calc",
        user_id=user_id,
        calculation_type=calculation_type,
        data=data,
        inputs={},
        created_at=created_at,
    )


class TestRecords:
    def test_build_record(self, paye_result):
        record = build_record("user-1", CalculationType.PERSONAL, paye_result, {"monthly_gross": 500_000})
        assert record["user_id"] == "user-1"
        assert record["calculation_type"] == "personal"
        assert record["data"]["net_tax"] == 713_400
        assert record["data"]["breakdown"][1] == {
            "band": "Next ₦2,200,000",
            "rate": 15,
            "amount": 2_200_000,
            "tax": 330_000,
        }
        assert record["inputs"] == {"monthly_gross": 500_000}

    def test_load_personal_result(self, paye_result):
        assert load_result(CalculationType.PERSONAL, asdict(paye_result)) == paye_result

    def test_load_business_result(self, cit_result):
        assert load_result(CalculationType.BUSINESS, asdict(cit_result)) == cit_result

    def test_from_row_parses_timestamp(self):
        record = SavedCalculation.from_row({
            "id": 7,
            "user_id": "user-1",
            "calculation_type": "business",
            "data": {"total_tax": 10_710_000},
            "inputs": None,
            "created_at": "2026-10-19T09:30:00Z",
        })
        assert record.id == "7"
        assert record.calculation_type == CalculationType.BUSINESS
        assert record.inputs == {}
        assert record.created_at == datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
        assert record.tax_amount == 10_710_000

    def test_from_row_parses_short_fraction(self):
        record = SavedCalculation.from_row({
            "id": "8",
            "user_id": "user-1",
            "calculation_type": "personal",
            "data": {"net_tax": 713_400},
            "inputs": {},
            "created_at": "2025-01-15T10:20:30.12345+00:00",
        })
        assert record.created_at == datetime(2025, 1, 15, 10, 20, 30, 123450, tzinfo=timezone.utc)

    def test_loaded_breakdown_is_tuple(self, paye_result):
        loaded = load_result(CalculationType.PERSONAL, asdict(paye_result))
        assert isinstance(loaded.breakdown, tuple)
        assert loaded.breakdown[2].rate == 18


class TestSummary:
    def test_summarize_history(self, paye_result, cit_result):
        records = [
            saved(CalculationType.PERSONAL, asdict(paye_result), datetime(2026, 10, 2)),
            saved(CalculationType.BUSINESS, asdict(cit_result), datetime(2026, 10, 15)),
            saved(CalculationType.PERSONAL, {"net_tax": 1_000}, datetime(2026, 9, 30)),
        ]
        summary = summarize_history(records, today=date(2026, 10, 19))
        assert summary.total == 3
        assert summary.this_month == 2
        assert summary.total_tax_calculated == 713_400 + cit_result.total_tax + 1_000
        assert summary.by_type == {"personal": 2, "business": 1}

    def test_this_month_judged_in_utc(self, paye_result):
        # 00:30 on 1 Nov in Lagos is 23:30 UTC on 31 Oct
        lagos = timezone(timedelta(hours=1))
        records = [
            saved(CalculationType.PERSONAL, asdict(paye_result), datetime(2026, 11, 1, 0, 30, tzinfo=lagos)),
            saved(CalculationType.PERSONAL, asdict(paye_result), datetime(2026, 10, 31, 23, 30, tzinfo=timezone.utc)),
        ]
        summary = summarize_history(records, today=date(2026, 10, 19))
        assert summary.this_month == 2

    def test_empty_history(self):
        summary = summarize_history([], today=date(2026, 10, 19))
        assert summary.total == 0
        assert summary.total_tax_calculated == 0


class TestCalculationStore:
    def test_save_and_get(self, supabase, paye_result):
        store = CalculationStore(supabase)
        record = build_record("user-1", CalculationType.PERSONAL, paye_result, {"name": "October"})

        saved_calc = store.save(record)
        assert saved_calc.user_id == "user-1"
        assert saved_calc.data["net_tax"] == 713_400

        fetched = store.get("user-1", saved_calc.id)
        assert fetched.id == saved_calc.id
        assert fetched.inputs == {"name": "October"}

    def test_get_is_owner_scoped(self, supabase, paye_result):
        store = CalculationStore(supabase)
        saved_calc = store.save(build_record("user-1", CalculationType.PERSONAL, paye_result, {}))

        with pytest.raises(CalculationNotFound):
            store.get("user-2", saved_calc.id)

    def test_list_newest_first(self, supabase, paye_result, cit_result):
        store = CalculationStore(supabase)
        older = build_record("user-1", CalculationType.PERSONAL, paye_result, {})
        older["created_at"] = "2026-09-01T08:00:00+00:00"
        newer = build_record("user-1", CalculationType.BUSINESS, cit_result, {})
        newer["created_at"] = "2026-10-01T08:00:00+00:00"
        store.save(older)
        store.save(newer)
        store.save(build_record("user-2", CalculationType.PERSONAL, paye_result, {}))

        records = store.list_for_user("user-1")
        assert [r.calculation_type for r in records] == [CalculationType.BUSINESS, CalculationType.PERSONAL]

        business_only = store.list_for_user("user-1", CalculationType.BUSINESS)
        assert len(business_only) == 1

    def test_delete(self, supabase, paye_result):
        store = CalculationStore(supabase)
        saved_calc = store.save(build_record("user-1", CalculationType.PERSONAL, paye_result, {}))

        store.delete("user-1", saved_calc.id)
        assert store.list_for_user("user-1") == []

        with pytest.raises(CalculationNotFound):
            store.delete("user-1", saved_calc.id)

    def test_uses_configured_table(self, supabase, paye_result):
        store = CalculationStore(supabase, table="calculations_archive")
        store.save(build_record("user-1", CalculationType.PERSONAL, paye_result, {}))
        assert len(supabase.tables["calculations_archive"].rows) == 1
