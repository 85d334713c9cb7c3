from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.persistence.pg as pg
from app.core.config import get_settings
from app.domain.orders.commands import CreateOrderCommand
from app.domain.orders.ports import UserSummary
from app.persistence.models import Base


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite"


@pytest.fixture(scope="session", autouse=True)
def configure_test_engine(test_db_path: Path):
    settings = get_settings()
    settings.user_enrichment_enabled = False

    engine = create_engine(
        f"sqlite+pysqlite:///{test_db_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    pg.engine = engine
    pg.SessionLocal = TestSessionLocal

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


class FakeUserClient:
    def __init__(self, users: dict[int, UserSummary] | None = None, fail: bool = False):
        self.users = users or {}
        self.fail = fail
        self.calls: list[int] = []

    def lookup(self, customer_ref: int) -> UserSummary | None:
        self.calls.append(customer_ref)
        if self.fail:
            raise RuntimeError("user service exploded")
        return self.users.get(customer_ref)


@pytest.fixture()
def alice() -> UserSummary:
    return UserSummary(id=1, username="alice", email="alice@example.com", first_name="Alice", last_name="Martin")


@pytest.fixture()
def fake_users(alice) -> FakeUserClient:
    return FakeUserClient({1: alice})


@pytest.fixture()
def failing_users() -> FakeUserClient:
    return FakeUserClient(fail=True)


@pytest.fixture()
def client(configure_test_engine, fake_users):
    from app.api.routes_orders import get_user_client
    from app.main import app

    app.dependency_overrides[get_user_client] = lambda: fake_users
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def session(configure_test_engine):
    with pg.session_scope() as s:
        yield s


@pytest.fixture()
def memory_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    s = factory()
    try:
        yield s
    finally:
        s.close()
        engine.dispose()


@pytest.fixture()
def order_payload() -> dict:
    return {
        "userId": 1,
        "shippingAddress": "123 Main St, Springfield, 12345",
        "notes": "Leave at door",
        "items": [
            {"productId": 10, "productName": "Notebook", "productSku": "NB-A5", "quantity": 2, "unitPrice": "10.00"},
            {"productId": 11, "productName": "Pen", "productSku": "PEN-BLK", "quantity": 1, "unitPrice": "5.00"},
        ],
    }


@pytest.fixture()
def create_command(order_payload) -> CreateOrderCommand:
    return CreateOrderCommand.model_validate(order_payload)
