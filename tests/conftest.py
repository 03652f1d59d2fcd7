"""Shared fixtures: an in-memory Supabase stand-in and wired-up services."""

from __future__ import annotations

import copy
import itertools
import logging
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from boardz.services import build_services

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeQuery:
    """Records a PostgREST-style chain and runs it against FakeSupabase.tables"""

    def __init__(self, db: "FakeSupabase", table_name: str):
        self.db = db
        self.table_name = table_name
        self.action = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_count = None

    # builders

    def select(self, columns="*"):
        self.action = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, changes):
        self.action = "update"
        self.payload = changes
        return self

    def delete(self):
        self.action = "delete"
        return self

    def upsert(self, payload, on_conflict=None):
        self.action = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    # execution

    def _matching(self, rows):
        return [row for row in rows if all(check(row) for check in self.filters)]

    def execute(self):
        self.db.calls.append((self.table_name, self.action))
        if self.table_name in self.db.failing_tables:
            raise RuntimeError(f"connection reset while querying {self.table_name}")

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action == "select":
            result = self._matching(rows)
            if self.order_by:
                column, desc = self.order_by
                result = sorted(result, key=lambda row: row.get(column) or "", reverse=desc)
            if self.limit_count is not None:
                result = result[: self.limit_count]
            result = [copy.deepcopy(row) for row in result]
            if "users(email)" in self.columns:
                for row in result:
                    owner = self.db.find("users", "id", row.get("user_id"))
                    row["users"] = {"email": owner["email"]} if owner else None
            return SimpleNamespace(data=result)

        if self.action == "insert":
            records = self.payload if isinstance(self.payload, list) else [self.payload]
            return SimpleNamespace(data=[self.db.insert(self.table_name, record) for record in records])

        if self.action == "update":
            updated = []
            for row in self._matching(rows):
                row.update(copy.deepcopy(self.payload))
                updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)

        if self.action == "delete":
            doomed = self._matching(rows)
            self.db.tables[self.table_name] = [row for row in rows if row not in doomed]
            return SimpleNamespace(data=copy.deepcopy(doomed))

        if self.action == "upsert":
            written = []
            for record in self.payload:
                existing = self.db.find(self.table_name, self.on_conflict, record.get(self.on_conflict))
                if existing is None:
                    written.append(self.db.insert(self.table_name, record))
                else:
                    existing.update(copy.deepcopy(record))
                    written.append(copy.deepcopy(existing))
            return SimpleNamespace(data=written)

        raise AssertionError(f"unexpected action {self.action}")


class FakeAuth:
    """Just enough of supabase.auth for sign-up, sign-in and token lookups"""

    def __init__(self):
        self.accounts = {}
        self.tokens = {}
        self._ids = itertools.count(1)

    def _response(self, email):
        account = self.accounts[email]
        token = f"token-{account['id']}"
        self.tokens[token] = email
        return SimpleNamespace(
            user=SimpleNamespace(id=account["id"], email=email),
            session=SimpleNamespace(access_token=token),
        )

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.accounts:
            raise Exception("User already registered")
        self.accounts[email] = {"id": f"auth-{next(self._ids)}", "password": credentials["password"]}
        return self._response(email)

    def sign_in_with_password(self, credentials):
        account = self.accounts.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")
        return self._response(credentials["email"])

    def get_user(self, token):
        email = self.tokens.get(token)
        if email is None:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=self.accounts[email]["id"], email=email))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.failing_tables = set()
        self.calls = []
        self.auth = FakeAuth()
        self._ids = itertools.count(1)

    def table(self, name):
        return FakeQuery(self, name)

    def find(self, table_name, column, value):
        for row in self.tables.get(table_name, []):
            if row.get(column) == value:
                return row
        return None

    def insert(self, table_name, record):
        """Store a row with generated id and created_at; returns a copy"""
        row_number = next(self._ids)
        row = {
            "id": str(row_number),
            "created_at": (_BASE_TIME + timedelta(seconds=row_number)).isoformat(),
        }
        row.update(copy.deepcopy(record))
        self.tables.setdefault(table_name, []).append(row)
        return copy.deepcopy(row)

    def writes(self, table_name):
        return [action for table, action in self.calls if table == table_name and action != "select"]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def component_row(name, type_="text", required=False, label=None, **extra):
    row = {
        "name": name,
        "label": label or name.replace("_", " ").title(),
        "type": type_,
        "required": required,
        "placeholder": "",
        "options": None,
    }
    row.update(extra)
    return row


@pytest.fixture()
def fake_supabase():
    return FakeSupabase()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def logger():
    return logging.getLogger("boardz.tests")


@pytest.fixture()
def services(fake_supabase, clock, logger):
    return build_services(supabase=fake_supabase, logger=logger, cache_seconds=10, clock=clock)


@pytest.fixture()
def add_component(fake_supabase):
    """Insert a component row straight into the fake store"""
    def _add(name, type_="text", required=False, **extra):
        return fake_supabase.insert("custom_components", component_row(name, type_, required, **extra))
    return _add


@pytest.fixture()
def set_page(fake_supabase):
    def _set(page, components):
        existing = fake_supabase.find("page_components", "page", page)
        if existing is not None:
            existing["components"] = list(components)
            return copy.deepcopy(existing)
        return fake_supabase.insert("page_components", {"page": page, "components": list(components)})
    return _set


@pytest.fixture()
def add_user(fake_supabase):
    def _add(email, profile_data=None):
        user = fake_supabase.insert("users", {"email": email})
        if profile_data is not None:
            fake_supabase.insert("user_profiles", {"user_id": user["id"], "profile_data": profile_data})
        return user
    return _add
