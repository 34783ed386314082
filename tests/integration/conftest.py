"""
Integration Test Fixtures.

Fixtures for integration tests - uses real database and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from notebook.core.config import get_app_config, get_settings
from notebook.core.database import get_db_session

TEST_TOKEN = "test-token"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def make_client(
    db_session: AsyncSession,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., Any]:
    """
    Build test clients for an app created with the given secrets.

    Secrets are passed through the environment, so the real config loader
    and middleware wiring are exercised.

    Usage:
        async with make_client(ip_whitelist="10.0.0.1") as client:
            response = await client.post("/api/notes", json={})
    """

    @asynccontextmanager
    async def _make_client(
        api_authtoken: str = TEST_TOKEN,
        ip_whitelist: str = "",
    ) -> AsyncGenerator[AsyncClient, None]:
        monkeypatch.setenv("API_AUTHTOKEN", api_authtoken)
        monkeypatch.setenv("IP_WHITELIST", ip_whitelist)
        get_settings.cache_clear()
        get_app_config.cache_clear()

        async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
            yield db_session

        from notebook.main import create_app

        app = create_app()
        app.dependency_overrides[get_db_session] = override_get_db_session

        try:
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as test_client:
                yield test_client
        finally:
            app.dependency_overrides.clear()
            get_settings.cache_clear()
            get_app_config.cache_clear()

    return _make_client


@pytest.fixture
async def client(make_client: Callable[..., Any]) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with make_client() as test_client:
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_ok(response: Any, expected_status: int = 200) -> Any:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error envelope.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_unauthorised(response: Any) -> None:
        """Assert the request was turned away by access control."""
        assert response.status_code == 403, response.text
        assert response.text == "Unauthorised"


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header accepted by token-protected paths."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
