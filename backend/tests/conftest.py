import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("DB_URL", "mongodb://localhost:27017")

import mongomock  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from inner_circle.db import DocumentStore  # noqa: E402
from inner_circle.dependencies import get_store  # noqa: E402
from inner_circle.main import app  # noqa: E402
from inner_circle.repositories import (  # noqa: E402
    LessonRepository,
    ReportRepository,
    UserRepository,
)


@pytest.fixture(scope="module")
def anyio_backend():
    # Limit tests to asyncio backend so local runs do not require the Trio extra.
    return "asyncio"


@pytest.fixture
def store():
    client = mongomock.MongoClient(tz_aware=True)
    document_store = DocumentStore(client, "inner_circle_test")
    document_store.ensure_indexes()
    try:
        yield document_store
    finally:
        client.close()


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def lessons(store):
    return LessonRepository(store)


@pytest.fixture
def reports(store):
    return ReportRepository(store)


@pytest.fixture
async def async_client(anyio_backend, store) -> AsyncClient:
    if anyio_backend != "asyncio":
        pytest.skip("Backend tests require asyncio")

    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(
            transport=transport, base_url="http://testserver"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_store, None)
