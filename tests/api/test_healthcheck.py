import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

pytestmark = pytest.mark.asyncio


async def test_health_check_returns_ok(test_client: AsyncClient):
    """Проверяет, что /healthcheck возвращает 200 OK, доступность БД и часовой пояс календаря."""
    response = await test_client.get("/healthcheck")

    assert response.status_code == status.HTTP_200_OK

    response_json = response.json()
    assert response_json["api_status"] == "ok"
    assert response_json["calendar_timezone"] == "UTC"
    assert response_json["dependencies"]["database"] == "ok"


async def test_health_check_reports_database_failure(
    test_client: AsyncClient, db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
):
    """При недоступной БД сервис отвечает 503."""

    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db_session, "execute", failing_execute)

    response = await test_client.get("/healthcheck")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["dependencies"]["database"] == "error"
