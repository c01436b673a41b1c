import pytest
from fastapi.testclient import TestClient

from barangay.core.config import Settings
from barangay.db import DocumentStore
from barangay.main import create_app
from barangay.services.approvals import ApprovalStateMachine
from barangay.services.auth_service import AuthService
from barangay.services.credential_store import CredentialStore
from barangay.services.passwords import PasswordHasher

# Lowest cost bcrypt accepts, keeps the suite fast
TEST_ROUNDS = 4


@pytest.fixture
def config():
    cfg = Settings()
    cfg.BCRYPT_ROUNDS = TEST_ROUNDS
    cfg.DATA_FILE = ""
    cfg.SEED_DEFAULT_ADMIN = False
    cfg.ADMIN_AUTH_REQUIRED = False
    cfg.RATE_LIMIT_ENABLED = False
    cfg.JWT_SECRET = "test-secret"
    return cfg


@pytest.fixture
def db():
    store = DocumentStore()
    store.open()
    yield store
    store.close()


@pytest.fixture
def credential_store(db):
    return CredentialStore(db)


@pytest.fixture
def auth(credential_store):
    return AuthService(
        store=credential_store,
        hasher=PasswordHasher(rounds=TEST_ROUNDS),
        approvals=ApprovalStateMachine(credential_store),
    )


@pytest.fixture
def client(config):
    app = create_app(config, DocumentStore())
    with TestClient(app) as c:
        yield c


def register(client, identity, secret="pw123", role="standard"):
    return client.post("/auth/register", json={"identity": identity, "secret": secret, "role": role})
