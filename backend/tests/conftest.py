# conftest.py - Fixtures compartidas: entorno de pruebas y dobles de Supabase

import os

# Antes de importar app.*: Settings() se instancia al importar
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef-xyz")

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.models.client import Client
from app.utils.errors import BackendError

USER_ID = "2fa93550-c87f-415d-9beb-bcb3a2307bc0"

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_client(**overrides) -> Client:
    data = {
        "id": str(uuid.uuid4()),
        "full_name": "Cliente Prueba",
        "email": None,
        "phone": "999888777",
        "document_type": "DNI",
        "document_number": "12345678",
        "address": None,
        "service_type": "Móvil",
        "plan": None,
        "status": "Active",
        "registration_date": "2024-01-01T00:00:00+00:00",
        "last_contact": None,
        "notes": "",
        "created_by": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    data.update(overrides)
    return Client.model_validate(data)


class InMemoryRepository:
    """Doble de ClientRepository: tabla en memoria con fallos inyectables."""

    def __init__(self, clients=None):
        self.rows = {c.id: c for c in (clients or [])}
        self.calls = []
        self.fail_on = set()
        self._tick = 0

    def _maybe_fail(self, operation):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise BackendError(f"simulated {operation} failure", operation)

    def _now(self):
        self._tick += 1
        return (_BASE_TIME + timedelta(days=365, seconds=self._tick)).isoformat()

    def calls_to(self, operation):
        return self.calls.count(operation)

    def list_all(self):
        self._maybe_fail("list")
        return sorted(self.rows.values(), key=lambda c: c.created_at or "", reverse=True)

    def create(self, data, actor):
        self._maybe_fail("create")
        now = self._now()
        row = data.to_record()
        row.update({
            "id": str(uuid.uuid4()),
            "created_by": actor,
            "registration_date": now,
            "created_at": now,
            "updated_at": now,
        })
        client = Client.model_validate(row)
        self.rows[client.id] = client
        return client

    def update(self, client_id, data):
        self._maybe_fail("update")
        if client_id not in self.rows:
            raise BackendError("Cliente no encontrado", "update")
        current = self.rows[client_id]
        merged = current.model_dump()
        merged.update(data.to_record())
        merged["updated_at"] = self._now()
        self.rows[client_id] = Client.model_validate(merged)

    def delete(self, client_id):
        self._maybe_fail("delete")
        self.rows.pop(client_id, None)


class FakeQuery:
    """Imita el query builder encadenable de supabase-py."""

    def __init__(self, supabase, table):
        self.supabase = supabase
        self.table = table
        self.ops = []

    def __getattr__(self, name):
        if name not in ("select", "order", "insert", "update", "delete", "eq", "upsert"):
            raise AttributeError(name)

        def method(*args, **kwargs):
            self.ops.append((name, args, kwargs))
            return self

        return method

    def execute(self):
        self.supabase.executed.append(self)
        if self.supabase.error is not None:
            raise self.supabase.error
        return SimpleNamespace(data=self.supabase.data)


class FakeSupabase:
    def __init__(self, data=None, error=None):
        self.data = data if data is not None else []
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeQuery(self, name)

    @property
    def last(self):
        return self.executed[-1]


@pytest.fixture
def repository():
    return InMemoryRepository([
        make_client(full_name="Ana Ruiz", status="Active", service_type="Móvil",
                    created_at="2024-02-01T00:00:00+00:00"),
        make_client(full_name="Beto Lopez", status="Suspended", service_type="TV Cable",
                    created_at="2024-01-15T00:00:00+00:00"),
    ])


@pytest.fixture
def api(repository):
    from fastapi.testclient import TestClient

    from app.api.clients import get_repository
    from app.main import app
    from app.utils.auth import require_user

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[require_user] = lambda: USER_ID
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
