"""
Pytest configuration and shared fixtures for ContextAnchor client tests

Provides:
- Session payloads and credential stores (signed in / signed out)
- An AsyncClient wired to a recording session-expiry hook
- Sample document, chat and conversation payloads
"""

import pytest
import pytest_asyncio
from uuid import uuid4

from contextanchor import AsyncClient, InMemoryCredentialStore
from contextanchor.types.session import Session

BASE_URL = "http://localhost:8080/api/v1"


def url(path: str) -> str:
    """Absolute URL of an API path"""
    return f"{BASE_URL}{path}"


def make_session_payload(
    access_token: str = "access-1",
    refresh_token: str = "refresh-1",
    email: str = "a@b.com",
) -> dict:
    """Wire payload returned by login / register / refresh"""
    return {
        "accessToken": access_token,
        "refreshToken": refresh_token,
        "tokenType": "Bearer",
        "expiresIn": 900,
        "user": {
            "id": "11111111-1111-1111-1111-111111111111",
            "fullName": "Ada Lovelace",
            "email": email,
            "role": "ADMIN",
            "tenantId": "22222222-2222-2222-2222-222222222222",
            "tenantName": "Analytical Engines",
        },
    }


def make_document_payload(document_id: str = "d1", status: str = "UPLOADED", **overrides) -> dict:
    """Wire payload of a document"""
    payload = {
        "id": document_id,
        "originalName": "report.pdf",
        "contentType": "application/pdf",
        "fileSize": 10240,
        "pageCount": 3,
        "status": status,
        "errorMessage": None,
        "chunkCount": 0 if status != "READY" else 12,
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": None,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def api_url():
    """Builds absolute API URLs"""
    return url


@pytest.fixture
def session_factory():
    """Builds login / refresh payloads"""
    return make_session_payload


@pytest.fixture
def document_factory():
    """Builds document payloads"""
    return make_document_payload


@pytest.fixture
def base_url():
    """Test base URL"""
    return BASE_URL


@pytest.fixture
def session_payload():
    """Login response payload"""
    return make_session_payload()


@pytest.fixture
def session(session_payload):
    """Session parsed from the login payload"""
    return Session.model_validate(session_payload)


@pytest.fixture
def store():
    """Empty in-memory credential store"""
    return InMemoryCredentialStore()


@pytest.fixture
def signed_in_store(session):
    """Credential store holding a session with access-1 / refresh-1"""
    return InMemoryCredentialStore(session)


@pytest.fixture
def expired_calls():
    """Records every invocation of the session-expiry hook"""
    return []


@pytest_asyncio.fixture
async def client(base_url, signed_in_store, expired_calls):
    """Signed-in async client"""
    client = AsyncClient(
        base_url=base_url,
        credential_store=signed_in_store,
        on_session_expired=lambda: expired_calls.append(True),
        poll_interval=0.01,
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def anonymous_client(base_url, store, expired_calls):
    """Async client without a session"""
    client = AsyncClient(
        base_url=base_url,
        credential_store=store,
        on_session_expired=lambda: expired_calls.append(True),
        poll_interval=0.01,
    )
    yield client
    await client.close()


@pytest.fixture
def document_id():
    """Test document id"""
    return str(uuid4())


@pytest.fixture
def mock_chat_response():
    """Chat answer payload with one citation"""
    return {
        "conversationId": "c1",
        "answer": "X is the answer.",
        "sources": [
            {
                "documentId": "d1",
                "documentName": "report.pdf",
                "chunkContent": "X is defined as the answer.",
                "chunkIndex": 4,
                "pageNumber": 2,
                "similarityScore": 0.91,
            }
        ],
        "timestamp": "2024-01-01T00:00:05",
    }


@pytest.fixture
def mock_conversation_response():
    """Conversation payload with one exchange"""
    return {
        "id": "c1",
        "title": "What is X?",
        "messages": [
            {"id": "m1", "role": "user", "content": "What is X?", "createdAt": "2024-01-01T00:00:00"},
            {"id": "m2", "role": "assistant", "content": "X is the answer.", "createdAt": "2024-01-01T00:00:05"},
        ],
        "documentIds": ["d1"],
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:05",
    }
