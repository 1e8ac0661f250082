"""API test fixtures — FastAPI test client over an in-memory SQLite database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - Bearer tokens are signed with the configured test secret

Design Decisions:
    - ASGITransport does not run the lifespan, so no real database is initialized
"""

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from court.config import get_settings
from court.core.domain_types import Principal
from court.infrastructure.database import get_db
from court.main import app


def auth_headers(principal: Principal) -> dict:
    settings = get_settings()
    token = jwt.encode(
        {"sub": principal.id, "role": principal.role.value, "name": principal.name},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def approved_case_id(client, plaintiff, judge) -> int:
    res = await client.post(
        "/api/v1/cases",
        json={"title": "Soggy bottom", "argument": "Underbaked", "evidence_text": "Photo"},
        headers=auth_headers(plaintiff),
    )
    case_id = res.json()["case"]["id"]
    await client.post(f"/api/v1/cases/{case_id}/approve", headers=auth_headers(judge))
    return case_id
