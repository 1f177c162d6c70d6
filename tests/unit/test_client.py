"""Unit tests for AsyncClient class"""

import pytest
from pytest_httpx import HTTPXMock

from contextanchor import (
    AsyncClient,
    ClientSettings,
    FileCredentialStore,
    InMemoryCredentialStore,
    __version__,
    settings,
)
from contextanchor._base_client import BaseClient


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_initialization():
    """Test client initialization with defaults"""
    async with AsyncClient() as client:
        assert client.base_url == "http://localhost:8080/api/v1"
        assert client.timeout == 60.0
        assert client.api_key is None
        assert client.poll_interval == 3.0
        assert client.uploads.chunk_size == 64 * 1024
        assert isinstance(client.credentials, InMemoryCredentialStore)
        assert client.auth.store is client.credentials


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_initialization_custom(store):
    """Test client initialization with custom settings"""
    async with AsyncClient(
        base_url="https://rag.example.com/api/v1/",
        api_key="ctx_abc",
        timeout=120.0,
        credential_store=store,
        poll_interval=1.5,
        upload_chunk_size=4096,
    ) as client:
        assert client.base_url == "https://rag.example.com/api/v1"
        assert client.timeout == 120.0
        assert client.api_key == "ctx_abc"
        assert client.gateway.uses_api_key
        assert client.credentials is store
        assert client.poll_interval == 1.5
        assert client.uploads.chunk_size == 4096


@pytest.mark.unit
def test_base_client_requires_base_url():
    """Test that a base URL is required"""
    with pytest.raises(ValueError, match="base_url is required"):
        BaseClient("")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_session_file_setting(tmp_path, monkeypatch):
    """Test a configured session file selects the file store"""
    path = tmp_path / "session.json"
    monkeypatch.setattr(settings, "SESSION_FILE", str(path))

    async with AsyncClient() as client:
        assert isinstance(client.credentials, FileCredentialStore)
        assert client.credentials.path == path


@pytest.mark.unit
def test_settings_from_environment(monkeypatch):
    """Test settings are read from CONTEXTANCHOR_* variables"""
    monkeypatch.setenv("CONTEXTANCHOR_BASE_URL", "https://rag.example.com/api/v1")
    monkeypatch.setenv("CONTEXTANCHOR_POLL_INTERVAL", "0.5")
    monkeypatch.setenv("CONTEXTANCHOR_API_KEY", "ctx_env")

    env_settings = ClientSettings()

    assert env_settings.BASE_URL == "https://rag.example.com/api/v1"
    assert env_settings.POLL_INTERVAL == 0.5
    assert env_settings.API_KEY == "ctx_env"
    assert env_settings.session_file is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_default_headers(client, httpx_mock: HTTPXMock, api_url):
    """Test every request identifies the client"""
    httpx_mock.add_response(method="GET", url=api_url("/health"), json={"status": "UP"})

    await client.request("GET", "/health")

    request = httpx_mock.get_request()
    assert request.headers["User-Agent"] == f"contextanchor-python/{__version__}"
    assert request.headers["Accept"] == "application/json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_passes_params(client, httpx_mock: HTTPXMock, api_url):
    """Test the generic request helper forwards httpx arguments"""
    httpx_mock.add_response(method="GET", url=api_url("/audit?page=2&size=5"), json={"content": []})

    data = await client.request("GET", "/audit", params={"page": 2, "size": 5})

    assert data == {"content": []}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_context_manager(base_url):
    """Test client closes its HTTP connection on exit"""
    async with AsyncClient(base_url=base_url) as client:
        assert client._http_client is not None
    assert client._http_client.is_closed
