"""Service test fixtures — fakes for the action collaborators, FastAPI test client.

Invariants:
    - get_db dependency overridden to use the test DB session factory
    - Page cache emptied around every test (it lives on the app)
    - signed_in_client carries a valid session cookie; client carries none

Design Decisions:
    - Fakes over mocks for the store: they keep rows, so effects can be asserted
      (e.g. a failed insert leaves zero rows)
    - Cookie sent as a raw header: no dependence on cookie-jar domain matching
"""

from dataclasses import replace

import pytest
from httpx import ASGITransport, AsyncClient

from acme_dashboard.config import get_settings
from acme_dashboard.core.domain_types import InvoiceId, UserId
from acme_dashboard.infrastructure.credentials_provider import hash_password
from acme_dashboard.infrastructure.database import get_db
from acme_dashboard.infrastructure.session_tokens import SignedInUser, mint_session_token
from acme_dashboard.main import app
from acme_dashboard.models.customer import Customer
from acme_dashboard.models.user import User


class FakeInvoiceStore:
    """In-memory InvoiceStore; set fail_with to make every call raise."""

    def __init__(self):
        self.rows = {}
        self.calls = []
        self.fail_with = None
        self._next_id = 0

    async def insert(self, invoice):
        self.calls.append(("insert", invoice))
        if self.fail_with:
            raise self.fail_with
        self._next_id += 1
        invoice_id = InvoiceId(f"inv-{self._next_id}")
        self.rows[invoice_id] = invoice
        return invoice_id

    async def update(self, invoice_id, changes):
        self.calls.append(("update", invoice_id, changes))
        if self.fail_with:
            raise self.fail_with
        if invoice_id not in self.rows:
            return 0
        self.rows[invoice_id] = replace(
            self.rows[invoice_id],
            customer_id=changes.customer_id,
            amount=changes.amount,
            status=changes.status,
        )
        return 1

    async def delete(self, invoice_id):
        self.calls.append(("delete", invoice_id))
        if self.fail_with:
            raise self.fail_with
        return 1 if self.rows.pop(invoice_id, None) is not None else 0


class FakeCache:
    def __init__(self):
        self.invalidated = []
        self.exact = []

    def invalidate(self, path, nested=True):
        self.invalidated.append(path)
        self.exact.append(not nested)


@pytest.fixture
def fake_store():
    return FakeInvoiceStore()


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.page_cache.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.page_cache.clear()


@pytest.fixture
def session_cookie():
    settings = get_settings()
    token = mint_session_token(
        SignedInUser(id=UserId("u1"), email="user@nextmail.com", name="User"),
        settings.auth_secret, 60,
    )
    return f"{settings.session_cookie_name}={token}"


@pytest.fixture
async def signed_in_client(client, session_cookie):
    client.headers["Cookie"] = session_cookie
    return client


@pytest.fixture
async def seed_customers(test_session_factory):
    """Two customers: Delba (c1) and Lee (c2)."""
    async with test_session_factory() as db:
        db.add_all([
            Customer(id="c1", name="Delba de Oliveira", email="delba@oliveira.com",
                     image_url="/customers/delba-de-oliveira.png"),
            Customer(id="c2", name="Lee Robinson", email="lee@robinson.com",
                     image_url="/customers/lee-robinson.png"),
        ])
        await db.commit()


@pytest.fixture
async def seed_user(test_session_factory):
    async with test_session_factory() as db:
        db.add(User(
            id="u1", name="User", email="user@nextmail.com",
            password=hash_password("123456"),
        ))
        await db.commit()
