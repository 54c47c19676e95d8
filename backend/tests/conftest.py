"""
ProFast Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment overrides are applied before any profast module is
       imported, so the settings singleton never sees real credentials.

Fixtures:
    fake_db:       in-memory stand-in for the MongoDB database handle,
                   supporting exactly the collection calls the services make
    stub_gateway:  PaymentGateway returning a canned client secret
    test_client:   HTTPX AsyncClient wired to the app with both overridden
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

os.environ["MONGODB_URI"] = "mongodb://localhost:27017/?serverSelectionTimeoutMS=100"
os.environ["DB_NAME"] = "profast_test"
os.environ["PAYMENT_GATEWAY_KEY"] = "sk_test_not_real"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from profast.exceptions import PaymentGatewayError
from profast.services.gateway_base import PaymentGateway


# ══════════════════════════════════════════════════════════════════════════
# In-memory database
# ══════════════════════════════════════════════════════════════════════════

def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, key: str, direction: int) -> "FakeCursor":
        # Missing values sort lowest, as in MongoDB
        present = [d for d in self._docs if d.get(key) is not None]
        missing = [d for d in self._docs if d.get(key) is None]
        present.sort(key=lambda d: d[key], reverse=direction < 0)
        self._docs = present + missing if direction < 0 else missing + present
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return [copy.deepcopy(d) for d in self._docs[:length]]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        self.sessions: List[Any] = []

    async def insert_one(self, document: Dict[str, Any], session=None):
        document.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(document))
        self.sessions.append(session)
        return SimpleNamespace(acknowledged=True, inserted_id=document["_id"])

    async def find_one(self, query: Dict[str, Any]):
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([d for d in self.docs if _matches(d, query)])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any], session=None):
        self.sessions.append(session)
        for doc in self.docs:
            if _matches(doc, query):
                changes = update.get("$set", {})
                modified = any(doc.get(k) != v for k, v in changes.items())
                doc.update(changes)
                return SimpleNamespace(
                    acknowledged=True, matched_count=1, modified_count=int(modified)
                )
        return SimpleNamespace(acknowledged=True, matched_count=0, modified_count=0)

    async def delete_one(self, query: Dict[str, Any]):
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return kwargs.get("name")


class FakeSession:
    """Runs the transaction callback once; enough to check the writes share a session."""

    def __init__(self):
        self.transactions = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def with_transaction(self, callback):
        self.transactions += 1
        return await callback(self)


class FakeClient:
    def __init__(self):
        self.sessions: List[FakeSession] = []

    def start_session(self) -> FakeSession:
        session = FakeSession()
        self.sessions.append(session)
        return session


class FakeDatabase:
    def __init__(self, name: str = "profast_test"):
        self.name = name
        self.client = FakeClient()
        self._collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


# ══════════════════════════════════════════════════════════════════════════
# Payment gateway stub
# ══════════════════════════════════════════════════════════════════════════

class StubGateway(PaymentGateway):
    def __init__(self):
        self.client_secret = "pi_test_secret_123"
        self.error: Optional[Exception] = None
        self.calls: List[Dict[str, Any]] = []

    async def create_payment_intent(self, amount: int, currency: str) -> str:
        self.calls.append({"amount": amount, "currency": currency})
        if self.error:
            raise self.error
        return self.client_secret

    async def health_check(self) -> bool:
        return True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def stub_gateway():
    return StubGateway()


@pytest.fixture
def gateway_error():
    """Factory for the error the stub gateway should raise."""
    return lambda message: PaymentGatewayError(message=message)


@pytest.fixture
def sample_parcel():
    return {
        "type": "document",
        "title": "Contract papers",
        "sender_name": "Rahim",
        "receiver_name": "Karim",
        "receiver_region": "Dhaka",
        "created_by": "rahim@example.com",
        "creation_date": "2025-06-01T10:00:00.000Z",
        "payment_status": "unpaid",
        "delivery_status": "not_collected",
        "cost": 150,
    }


@pytest_asyncio.fixture
async def test_client(fake_db, stub_gateway):
    """
    HTTPX client talking to the app in-process.

    ASGITransport does not run the lifespan, so no MongoDB ping happens.
    """
    from profast.database import get_database
    from profast.main import app
    from profast.services.stripe_gateway import get_payment_gateway

    app.dependency_overrides[get_database] = lambda: fake_db
    app.dependency_overrides[get_payment_gateway] = lambda: stub_gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
