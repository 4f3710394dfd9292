"""
Pytest configuration and shared fixtures.

FakeSupabase mimics the slice of the supabase-py async client used by the
services: table().select/insert/update/upsert, eq/gte/order/single filters,
rpc() and an awaitable execute(). Errors are raised as postgrest APIError,
exactly like the real client.
"""
import itertools
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest
from postgrest.exceptions import APIError

from rewards.client import RewardsClient
from rewards.security.client_ip import ClientIpResolver
from rewards.settings import Settings
from rewards.storage.client import BackendClient

PUBLIC_IP = "203.0.113.7"


def no_rows_error() -> APIError:
    return APIError({
        "code": "PGRST116",
        "message": "JSON object requested, multiple (or no) rows returned",
        "details": "The result contains 0 rows",
        "hint": None,
    })


def _parse(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


class FakeResponse:
    def __init__(self, data: Any):
        self.data = data


class FakeQuery:
    """Records one chained query and applies it to the in-memory tables."""

    def __init__(self, fake: "FakeSupabase", table: str):
        self.fake = fake
        self.table = table
        self.action = None
        self.columns = None
        self.payload = None
        self.on_conflict = None
        self.filters: list[tuple[str, str, Any]] = []
        self.ordering: tuple[str, bool] | None = None
        self.is_single = False

    def select(self, columns: str = "*"):
        self.action, self.columns = "select", columns
        return self

    def insert(self, rows):
        self.action, self.payload = "insert", rows
        return self

    def update(self, values):
        self.action, self.payload = "update", values
        return self

    def upsert(self, values, on_conflict: str = ""):
        self.action, self.payload, self.on_conflict = "upsert", values, on_conflict
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value: Any):
        self.filters.append(("gte", column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.ordering = (column, desc)
        return self

    def single(self):
        self.is_single = True
        return self

    def _matches(self, row: dict) -> bool:
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "gte" and not _parse(row.get(column)) >= _parse(value):
                return False
        return True

    async def execute(self) -> FakeResponse:
        self.fake.queries.append(self)
        error = self.fake.errors.pop(self.table, None)
        if error is not None:
            raise error

        rows = self.fake.tables.setdefault(self.table, [])

        if self.action == "insert":
            inserted = [self.fake.stamp(dict(row)) for row in self.payload]
            rows.extend(inserted)
            return FakeResponse([dict(r) for r in inserted])

        if self.action == "upsert":
            record = dict(self.payload)
            for row in rows:
                if row.get(self.on_conflict) == record.get(self.on_conflict):
                    row.update(record)
                    return FakeResponse([dict(row)])
            rows.append(self.fake.stamp(record))
            return FakeResponse([dict(rows[-1])])

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(r) for r in matched])

        if self.columns and self.columns != "*" and "(" not in self.columns:
            wanted = [c.strip() for c in self.columns.split(",")]
            matched = [{c: row.get(c) for c in wanted} for row in matched]
        else:
            matched = [dict(row) for row in matched]

        if self.ordering:
            column, desc = self.ordering
            matched.sort(key=lambda r: _parse(r.get(column)), reverse=desc)

        if self.is_single:
            if len(matched) != 1:
                raise no_rows_error()
            return FakeResponse(matched[0])
        return FakeResponse(matched)


class FakeRpc:
    def __init__(self, fake: "FakeSupabase", function: str, params: dict):
        self.fake = fake
        self.function = function
        self.params = params

    async def execute(self) -> FakeResponse:
        self.fake.rpc_calls.append((self.function, self.params))
        error = self.fake.errors.pop(self.function, None)
        if error is not None:
            raise error
        return FakeResponse(self.fake.rpc_results.get(self.function))


class FakeSupabase:
    """In-memory stand-in for supabase.AsyncClient."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.queries: list[FakeQuery] = []
        self.rpc_calls: list[tuple[str, dict]] = []
        self.rpc_results: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}
        self._ids = itertools.count(1)

    def stamp(self, row: dict) -> dict:
        row.setdefault("id", next(self._ids))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        return row

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, function: str, params: dict) -> FakeRpc:
        return FakeRpc(self, function, params)

    def fail(self, name: str, error: Exception) -> None:
        """Make the next call against a table or RPC raise ``error``."""
        self.errors[name] = error


def ip_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def backend(fake_supabase):
    return BackendClient(fake_supabase)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        supabase_url="https://project.supabase.co",
        supabase_anon_key="anon-key",
        user_agent="rewards-tests/1.0",
    )


@pytest.fixture
def ip_resolver():
    """Resolver whose lookup endpoint answers with PUBLIC_IP."""
    return ClientIpResolver(
        lookup_url="https://ip.example.com/?format=json",
        transport=ip_transport(lambda request: httpx.Response(200, json={"ip": PUBLIC_IP})),
    )


@pytest.fixture
def failing_ip_resolver():
    """Resolver whose lookup endpoint is unreachable."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return ClientIpResolver(
        lookup_url="https://ip.example.com/?format=json",
        transport=ip_transport(handler),
    )


@pytest.fixture
def rewards_client(backend, test_settings, ip_resolver):
    return RewardsClient(backend, settings=test_settings, ip_resolver=ip_resolver)
