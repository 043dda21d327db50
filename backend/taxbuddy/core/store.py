"""
Saved calculation storage backed by the Supabase ``saved_calculations`` table.
"""

import logging

from taxbuddy.core.history import CalculationType, SavedCalculation

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "saved_calculations"


class CalculationNotFound(Exception):
    def __init__(self, calculation_id: str):
        self.calculation_id = calculation_id
        super().__init__(f"Calculation {calculation_id} not found")


class CalculationStore:
    """
    Thin repository over a Supabase client. Every read and delete is scoped
    to the owning user.
    """

    def __init__(self, client, table: str = DEFAULT_TABLE):
        self.client = client
        self.table = table

    def save(self, record: dict) -> SavedCalculation:
        result = self.client.table(self.table).insert(record).execute()
        if not result.data:
            raise RuntimeError("Failed to save calculation")

        saved = SavedCalculation.from_row(result.data[0])
        logger.info(
            "Saved %s calculation %s for user %s",
            saved.calculation_type.value, saved.id, saved.user_id,
        )
        return saved

    def list_for_user(
        self,
        user_id: str,
        calculation_type: CalculationType | None = None,
    ) -> list[SavedCalculation]:
        query = self.client.table(self.table).select("*").eq("user_id", user_id)
        if calculation_type is not None:
            query = query.eq("calculation_type", calculation_type.value)

        result = query.order("created_at", desc=True).execute()
        return [SavedCalculation.from_row(row) for row in (result.data or [])]

    def get(self, user_id: str, calculation_id: str) -> SavedCalculation:
        result = (
            self.client.table(self.table)
            .select("*")
            .eq("id", calculation_id)
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
        if not result or not result.data:
            raise CalculationNotFound(calculation_id)
        return SavedCalculation.from_row(result.data)

    def delete(self, user_id: str, calculation_id: str) -> None:
        result = (
            self.client.table(self.table)
            .delete()
            .eq("id", calculation_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not result.data:
            raise CalculationNotFound(calculation_id)
        logger.info("Deleted calculation %s for user %s", calculation_id, user_id)
