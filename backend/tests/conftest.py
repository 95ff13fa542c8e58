import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import Settings, get_settings
from app.main import create_app
from app.services import storage as storage_service

TEST_ENV = {
    "MINIO_ENDPOINT": "localhost:9000",
    "MINIO_ACCESS_KEY": "minio",
    "MINIO_SECRET_KEY": "minio123",
    "MINIO_USE_SSL": "false",
    "MINIO_BUCKET": "uploads",
    "MINIO_PUBLIC_URL": "http://localhost:9000",
}


class DummyStorage(storage_service.StorageService):
    def __init__(self, settings: Settings) -> None:  # type: ignore[super-init-not-called]
        self.settings = settings
        self.bucket = settings.minio_bucket
        self.public_base_url = settings.minio_public_url
        self.calls: list[tuple[str, int]] = []

    def presign_put(self, key: str, expires_in: int = storage_service.PRESIGN_TTL) -> str:  # type: ignore[override]
        self.calls.append((key, expires_in))
        return f"http://localhost:9000/{self.bucket}/{key}?X-Amz-Expires={expires_in}&n={len(self.calls)}"


class FailingStorage(DummyStorage):
    def presign_put(self, key: str, expires_in: int = storage_service.PRESIGN_TTL) -> str:  # type: ignore[override]
        self.calls.append((key, expires_in))
        raise storage_service.PresignError("dial tcp 127.0.0.1:9000: connect: connection refused")


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    for name, value in TEST_ENV.items():
        os.environ[name] = value
    os.environ.pop("MIRAIO_ENV", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(configure_environment) -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def dummy_storage(settings) -> DummyStorage:
    return DummyStorage(settings)


@pytest.fixture
def app_instance(settings, dummy_storage):
    return create_app(settings, storage=dummy_storage)


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def failing_storage(settings) -> FailingStorage:
    return FailingStorage(settings)


@pytest_asyncio.fixture
async def failing_client(settings, failing_storage):
    app = create_app(settings, storage=failing_storage)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
