import os

os.environ["PUBLIC_SUPABASE_URL"] = "http://supabase.test"
os.environ["SECRET_API_KEY"] = "service-role-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret-that-is-long-enough-for-hs256"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.supabase_client import get_supabase
from app.friendship.service import FriendService
from app.secret.service import SecretService

from fakes import FakeSupabase


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def alice(db):
    return db.add_user("alice@example.com")


@pytest.fixture
def bob(db):
    return db.add_user("bob@example.com")


@pytest.fixture
def carol(db):
    return db.add_user("carol@example.com")


@pytest.fixture
def friends(db):
    return FriendService(db)


@pytest.fixture
def secrets(db, friends):
    return SecretService(db, friends)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
