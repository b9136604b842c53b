from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.database import get_db_session
from src.tracker.core.dependencies import get_entry_ledger
from src.tracker.main import app
from src.tracker.services import EntryLedger

# --- ФИКСТУРЫ, СПЕЦИФИЧНЫЕ ДЛЯ ТЕСТИРОВАНИЯ API ---


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession, entry_ledger: EntryLedger) -> AsyncGenerator[AsyncClient, None]:
    """
    Создает и предоставляет тестовый клиент FastAPI для каждого API-теста.

    Зависит от фикстур `db_session` и `entry_ledger` (в корневом conftest.py):
    сессия подменяет get_db_session, а журнал записей создается заново на каждый тест,
    чтобы блокировки привычек не переживали цикл событий теста.
    """

    # Функция для переопределения зависимости `get_db_session` в приложении
    def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:  # type: ignore
        yield db_session

    # Применяем переопределения
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_entry_ledger] = lambda: entry_ledger

    # Создаем транспорт для ASGI приложения
    transport = ASGITransport(app=app)

    # Создаем асинхронный HTTP-клиент с транспортом для взаимодействия с приложением
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    # Очищаем переопределения после теста
    app.dependency_overrides.clear()
