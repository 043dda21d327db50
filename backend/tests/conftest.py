"""
Shared fixtures. ``FakeSupabase`` mimics the slice of the supabase-py query
builder used by ``CalculationStore``.
"""

from collections import defaultdict
from uuid import uuid4

import pytest


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, table, action, payload=None):
        self.table = table
        self.action = action
        self.payload = payload
        self.filters = []
        self.order_by = None
        self.single = False

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def maybe_single(self):
        self.single = True
        return self

    def execute(self):
        if self.action == "insert":
            row = {"id": str(uuid4()), "created_at": "2026-10-19T09:30:00+00:00", **self.payload}
            self.table.rows.append(row)
            return FakeResponse([row])

        matched = [
            row for row in self.table.rows
            if all(row.get(column) == value for column, value in self.filters)
        ]

        if self.action == "delete":
            self.table.rows = [row for row in self.table.rows if row not in matched]
            return FakeResponse(matched)

        if self.order_by:
            column, desc = self.order_by
            matched.sort(key=lambda row: row[column], reverse=desc)

        if self.single:
            # supabase-py returns None rather than an empty response here
            return FakeResponse(matched[0]) if matched else None
        return FakeResponse(matched)


class FakeTable:
    def __init__(self):
        self.rows = []

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def select(self, *columns):
        return FakeQuery(self, "select")

    def delete(self):
        return FakeQuery(self, "delete")


class FakeSupabase:
    def __init__(self):
        self.tables = defaultdict(FakeTable)

    def table(self, name):
        return self.tables[name]


@pytest.fixture
def supabase():
    return FakeSupabase()
