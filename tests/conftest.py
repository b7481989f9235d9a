import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from splitledger.auth import hash_password, issue_token
from splitledger.config import config
from splitledger.db import get_session, init_db
from splitledger.main import app
from splitledger.models.group import Group
from splitledger.models.user import User
from splitledger.repository import Repository


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    with Session(engine) as s:
        yield s


@pytest.fixture
def repo(session):
    return Repository(session)


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(repo):
    def _make(name, email=None, password="secret"):
        user = User(name=name, email=email or f"{name.lower()}@example.com", password_hash=hash_password(password))
        return repo.save(user)
    return _make


@pytest.fixture
def trio(repo, make_user):
    """Group G with members A, B, C."""
    a, b, c = make_user("A"), make_user("B"), make_user("C")
    group = repo.save(Group(name="G", creator_id=a.id, members=[a, b, c]))
    return group, a, b, c


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user.id)}"}
    return _headers
