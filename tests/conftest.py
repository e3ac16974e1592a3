import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from training_log.core.config import Settings
from training_log.db.storage import InMemoryStorageAdapter
from training_log.main import create_application
from training_log.repositories import MenuRepository, RecordRepository, UserRepository

TEST_JWT_SECRET = "test-secret-for-the-training-log-suite-0123456789"


@pytest_asyncio.fixture
async def storage():
    store = InMemoryStorageAdapter()
    await store.initialize()
    yield store
    await store.dispose()


@pytest.fixture
def menus(storage):
    return MenuRepository(storage)


@pytest.fixture
def records(storage):
    return RecordRepository(storage)


@pytest.fixture
def users(storage):
    return UserRepository(storage)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        storage_backend="memory",
        jwt_secret=TEST_JWT_SECRET,
        password_hash_rounds=4,
        environment="test",
    )


@pytest.fixture
def client(settings):
    # Entering the context runs the lifespan, which builds the in-memory storage
    with TestClient(create_application(settings)) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(email="lifter@example.com", name="Lifter", password="correct-horse"):
        return client.post("/api/auth/register", json={"email": email, "name": name, "password": password})

    return _register


@pytest.fixture
def auth_headers(register):
    token = register().json()["token"]
    return {"Authorization": f"Bearer {token}"}
