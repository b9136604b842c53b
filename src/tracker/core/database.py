"""Подключение к базе данных трекера (SQLAlchemy, asyncio)."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings
from .logging import tracker_log as log


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Параметры движка в зависимости от диалекта.

    PostgreSQL работает через пул с проверкой соединений, SQLite (локальный запуск, тесты)
    - через одно соединение без проверки потока.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_pre_ping": True,  # Проверять соединение перед использованием
        "pool_recycle": 3600,  # Переподключение каждый час
    }


class Database:
    """
    Менеджер подключения к базе данных.

    Держит движок и фабрику сессий. До вызова `connect` сессии недоступны.
    """

    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self, database_url: str | None = None, **engine_kwargs: Any) -> None:
        """
        Создает движок, фабрику сессий и проверяет подключение.

        Args:
            database_url: URL базы данных. По умолчанию `DATABASE_URL` из настроек.
            **engine_kwargs: Параметры create_async_engine поверх параметров диалекта.

        Raises:
            RuntimeError: Если база данных недоступна.
        """
        url = database_url or str(settings.DATABASE_URL)
        options = engine_options(url) | engine_kwargs

        self.engine = create_async_engine(url, echo=settings.DEVELOPMENT, **options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            # Записи и привычки читаются после commit (ответы API, пересчет стриков)
            expire_on_commit=False,
            autoflush=False,
        )

        try:
            async with self.engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except Exception as exc:
            log.critical(f"Ошибка подключения к базе данных ({self.engine.url.get_backend_name()}): {exc}")
            await self.disconnect()
            raise RuntimeError("Не удалось подключиться к базе данных.") from exc

        log.success(f"Подключение к базе данных установлено ({self.engine.url.render_as_string(hide_password=True)}).")

    async def disconnect(self) -> None:
        """Закрывает пул соединений. Повторный вызов ничего не делает."""
        if self.engine is None:
            return

        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        log.info("Подключение к базе данных закрыто.")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Открывает сессию БД; при исключении откатывает незафиксированные изменения.

        Raises:
            RuntimeError: При вызове до `db.connect()`.
        """
        if self.session_factory is None:
            raise RuntimeError("База данных не инициализирована. Вызовите `await db.connect()`.")

        async with self.session_factory() as session:
            try:
                yield session
            except Exception as exc:
                log.error(f"Ошибка во время сессии БД, выполняется откат: {exc}")
                await session.rollback()
                raise


# Глобальный экземпляр менеджера БД
db = Database()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Зависимость FastAPI: сессия БД на время запроса."""
    async with db.session() as session:
        yield session
