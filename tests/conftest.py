from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from filedrop.config import Settings
from filedrop.main import create_app


TEST_API_KEY = "secret123"
TEST_PUBLIC_URL = "https://cdn.example.com/"


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    d = tmp_path / "uploads"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture()
def settings(upload_dir: Path) -> Settings:
    return Settings(
        upload_path=str(upload_dir),
        public_url=TEST_PUBLIC_URL,
        api_key=TEST_API_KEY,
        port="8080",
    )


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture()
def anyio_backend():
    return "asyncio"
