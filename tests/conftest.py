import os

os.environ.setdefault("SALON_SEED_SERVICES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from salon_api.db import get_session
from salon_api.main import app
from salon_api.models import Service, User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _add(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


@pytest.fixture
def staff(session):
    return _add(session, User(
        email="nina@salon.test", password_hash="x",
        first_name="Nina", last_name="Park", role="STAFF",
    ))


@pytest.fixture
def other_staff(session):
    return _add(session, User(
        email="omar@salon.test", password_hash="x",
        first_name="Omar", last_name="Diaz", role="STAFF",
    ))


@pytest.fixture
def customer(session):
    return _add(session, User(
        email="cleo@example.test", password_hash="x",
        first_name="Cleo", last_name="Hart", role="CUSTOMER",
    ))


@pytest.fixture
def manicure(session):
    return _add(session, Service(
        name="Classic Manicure", price=25.0, duration_minutes=30, category="MANICURE",
    ))


@pytest.fixture
def pedicure(session):
    return _add(session, Service(
        name="Spa Pedicure", price=45.0, duration_minutes=60, category="PEDICURE",
    ))
