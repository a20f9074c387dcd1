"""In-memory fake Supabase client for unit tests.

Supports: select, insert, upsert (composite on_conflict), update, delete,
eq, order, limit. Tables listed in ``failing_tables`` raise on execute for
the listed actions, to exercise per-op error reporting.
"""

from __future__ import annotations


class FakeSupabaseError(Exception):
    pass


class FakeSupabaseResponse:
    def __init__(self, data: list[dict]):
        self.data = data


class FakeSupabaseQuery:
    def __init__(self, client: FakeSupabaseClient, table_name: str):
        self._client = client
        self._table_name = table_name
        self._filters: list[tuple[str, object]] = []
        self._order_by: tuple[str, bool] | None = None
        self._limit_value: int | None = None
        self._action = "select"
        self._payload: dict | None = None
        self._conflict: tuple[str, ...] = ("id",)

    def select(self, _columns: str):
        self._action = "select"
        return self

    def insert(self, payload: dict):
        self._action = "insert"
        self._payload = dict(payload)
        return self

    def upsert(self, payload: dict, *, on_conflict: str = "id"):
        self._action = "upsert"
        self._payload = dict(payload)
        self._conflict = tuple(c.strip() for c in on_conflict.split(",") if c.strip())
        return self

    def update(self, payload: dict):
        self._action = "update"
        self._payload = dict(payload)
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column: str, value: object):
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self._order_by = (column, desc)
        return self

    def limit(self, value: int):
        self._limit_value = value
        return self

    def _match(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> FakeSupabaseResponse:
        self._client.calls.append((self._table_name, self._action))
        if self._action in self._client.failing_tables.get(self._table_name, set()):
            raise FakeSupabaseError(f"{self._action} on {self._table_name} rejected")

        table = self._client.tables.setdefault(self._table_name, [])

        if self._action == "insert":
            row = dict(self._payload or {})
            table.append(row)
            return FakeSupabaseResponse([dict(row)])

        if self._action == "upsert":
            payload = self._payload or {}
            for row in table:
                if all(row.get(c) == payload.get(c) for c in self._conflict):
                    row.update(payload)
                    return FakeSupabaseResponse([dict(row)])
            table.append(dict(payload))
            return FakeSupabaseResponse([dict(payload)])

        if self._action == "update":
            updated = []
            for row in table:
                if self._match(row):
                    row.update(self._payload or {})
                    updated.append(dict(row))
            return FakeSupabaseResponse(updated)

        if self._action == "delete":
            removed = [dict(r) for r in table if self._match(r)]
            self._client.tables[self._table_name] = [r for r in table if not self._match(r)]
            return FakeSupabaseResponse(removed)

        matching = [r for r in table if self._match(r)]
        if self._order_by is not None:
            column, desc = self._order_by
            matching = sorted(matching, key=lambda r: r.get(column), reverse=desc)
        if self._limit_value is not None:
            matching = matching[: self._limit_value]
        return FakeSupabaseResponse([dict(r) for r in matching])


class FakeSupabaseClient:
    """In-memory Supabase client for tests.

    Args:
        tables: shared mutable dict of table_name -> list[dict].
        failing_tables: table_name -> set of actions that raise on execute.
    """

    def __init__(
        self,
        tables: dict[str, list[dict]] | None = None,
        failing_tables: dict[str, set[str]] | None = None,
    ):
        self.tables = tables if tables is not None else {}
        self.failing_tables = failing_tables or {}
        self.calls: list[tuple[str, str]] = []

    def table(self, table_name: str) -> FakeSupabaseQuery:
        return FakeSupabaseQuery(self, table_name)
