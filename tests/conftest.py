from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.tracker.core.config import settings
from src.tracker.models import Base, Habit, HabitEntry, HabitMode
from src.tracker.repositories import HabitEntryRepository, HabitRepository
from src.tracker.services import EntryLedger, StreakCalculator
from src.tracker.utils.date_utils import DayCalendar

# In-memory SQLite: одна БД на тест, Postgres для тестов не нужен
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- ФИКСТУРА БЕЗОПАСНОСТИ ---


@pytest.fixture(scope="session", autouse=True)
def verify_test_environment() -> None:
    """Проверяет, что тесты запускаются с настройками из [tool.pytest.ini_options] в pyproject.toml."""
    assert settings.DEVELOPMENT is True, (
        "❌ ОШИБКА КОНФИГУРАЦИИ: Тесты должны запускаться в режиме разработки (DEVELOPMENT=True)."
    )
    assert "test" in settings.DB_NAME, f"❌ ОПАСНОСТЬ: Тесты настроены на базу '{settings.DB_NAME}'."


# --- БАЗА ДАННЫХ ---


@pytest_asyncio.fixture(scope="function")
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Создает движок на in-memory SQLite и схему из метаданных моделей."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Одно соединение, иначе у каждого соединения своя in-memory БД
    )

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def db_session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """Предоставляет сессию БД для теста."""
    async with db_session_factory() as session:
        yield session


# --- КАЛЕНДАРЬ И СЕРВИСЫ ---


@pytest.fixture
def calendar() -> DayCalendar:
    return DayCalendar("UTC")


@pytest.fixture
def streak_calculator(calendar: DayCalendar) -> StreakCalculator:
    return StreakCalculator(calendar=calendar)


@pytest.fixture
def entry_ledger(calendar: DayCalendar) -> EntryLedger:
    return EntryLedger(
        entry_repository=HabitEntryRepository(HabitEntry),
        habit_repository=HabitRepository(Habit),
        calendar=calendar,
    )


@pytest_asyncio.fixture
async def habit(db_session: AsyncSession) -> Habit:
    """Сохраненная negative-привычка "Smoking"."""
    habit = Habit(name="Smoking", mode=HabitMode.NEGATIVE)
    db_session.add(habit)
    await db_session.commit()
    await db_session.refresh(habit)
    return habit
