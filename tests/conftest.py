import os
import sys

# Ensure the repository root is on sys.path so `import recruit_crm` works
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Settings are read at import time
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from recruit_crm.api.app import app  # noqa: E402
from recruit_crm.db import Base, get_db  # noqa: E402
from recruit_crm.schemas import CompanyCreate, ContactCreate  # noqa: E402
from recruit_crm.stores import CompanyStore, ContactStore  # noqa: E402


@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared by every session."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


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
def make_company(db):
    def _make(name="Acme Inc", **fields):
        return CompanyStore(db).create(CompanyCreate.model_validate({"name": name, **fields}))

    return _make


@pytest.fixture
def make_contact(db):
    def _make(first_name="Ada", last_name="Lovelace", **fields):
        data = {"firstName": first_name, "lastName": last_name, **fields}
        return ContactStore(db).create(ContactCreate.model_validate(data))

    return _make
