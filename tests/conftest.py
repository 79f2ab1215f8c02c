"""
Shared fixtures: a throwaway SQLite database per test, a FastAPI TestClient
wired to it, and small factories for stock items and families.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ration_store.config.database import build_engine, create_tables, get_db
from ration_store.main import app
from ration_store.shared.database.models import Family, StockItem


@pytest.fixture
def engine(tmp_path):
    """File-backed so that several threads can open their own connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'ration_store_test.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    """TestClient carrying a valid bearer token."""
    response = client.post(
        "/api/auth/register",
        json={"username": "operator", "password": "secret", "confirmPassword": "secret"},
    )
    assert response.status_code == 201, response.text
    client.headers.update({"Authorization": f"Bearer {response.json()['accessToken']}"})
    return client


@pytest.fixture
def make_item(db):
    def _make_item(**overrides):
        data = {
            "item_name": "Rice",
            "category": "Grain",
            "total_stock": 100,
            "current_stock": 50,
            "threshold": 10,
        }
        data.update(overrides)
        item = StockItem(**data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def make_family(db):
    def _make_family(**overrides):
        data = {
            "family_id": "RC1001",
            "head_of_family": "Ramesh Kumar",
            "num_members": 2,
            "member_list": ["Ramesh Kumar", "Sita Devi"],
            "address": "12 Gandhi Road",
            "phone": "9876543210",
        }
        data.update(overrides)
        family = Family(**data)
        db.add(family)
        db.commit()
        db.refresh(family)
        return family

    return _make_family
