"""Основной файл приложения FastAPI трекера привычек.

Отвечает за:
- Создание и конфигурацию экземпляра FastAPI.
- Управление жизненным циклом приложения (подключение к БД, привычка по умолчанию).
- Регистрацию роутеров и обработчиков исключений.
- Эндпоинт проверки работоспособности (health check).
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.core_shared.sentry_sdk_setup import setup_sentry
from src.tracker.core.config import settings
from src.tracker.core.database import db
from src.tracker.core.dependencies import DBSession, get_calendar, get_habit_repository
from src.tracker.core.exceptions import NotFoundException, setup_exception_handlers
from src.tracker.core.logging import tracker_log as log
from src.tracker.routes import api_router
from src.tracker.services import HabitService

# Sentry инициализируется только при заданном DSN; 404 - штатный ответ, не ошибка
setup_sentry(settings, log, ignore_errors=(NotFoundException,))


async def ensure_default_habit() -> None:
    """Создает привычку по умолчанию, если ее еще нет в БД."""
    async with db.session() as session:
        habit_service = HabitService(habit_repository=get_habit_repository())
        habit = await habit_service.get_or_create_default_habit(session)

    log.info(f"Привычка по умолчанию: '{habit.name}' (ID: {habit.id}, режим: {habit.mode.value}).")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # pragma: no cover
    """
    Контекстный менеджер для управления жизненным циклом приложения.

    При старте подключается к БД и гарантирует существование привычки по умолчанию,
    при остановке закрывает подключение.

    Args:
        app (FastAPI): Экземпляр приложения FastAPI.
    """
    log.info("Инициализация приложения...")
    try:
        await db.connect()
        await ensure_default_habit()
        yield
    except Exception as exc:
        log.critical(f"Критическая ошибка при старте приложения: {exc}")
        raise
    finally:
        log.info("Остановка приложения...")
        await db.disconnect()
        log.info("Приложение остановлено.")


def create_app() -> FastAPI:
    """
    Создает и конфигурирует экземпляр приложения FastAPI.

    Returns:
        FastAPI: Сконфигурированный экземпляр приложения.
    """
    log.info(f"Создание экземпляра FastAPI для '{settings.PROJECT_NAME}@{settings.API_VERSION}'")
    log.info(f"Режим разработки: {settings.DEVELOPMENT}, часовой пояс календаря: {settings.TIMEZONE}")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.API_VERSION,
        debug=settings.DEVELOPMENT,
        lifespan=lifespan,
        description="API трекера привычек: дневные записи и стрики",
    )

    setup_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    log.info(f"Приложение '{settings.PROJECT_NAME} {settings.API_VERSION}' сконфигурировано.")
    return app


app = create_app()


@app.get(
    "/healthcheck",
    tags=["Health Check"],
    summary="Проверка работоспособности сервиса и его зависимостей",
    description="Проверяет доступ к базе данных. При недоступности БД возвращает HTTP 503.",
)
async def health_check(response: Response, db_session: DBSession) -> dict[str, Any]:
    """
    Эндпоинт для проверки работоспособности сервиса.

    Returns:
        dict: Статус API, часовой пояс календаря и статус зависимостей.
    """
    try:
        await db_session.execute(text("SELECT 1"))
        is_db_ok = True
    except SQLAlchemyError as exc:
        log.warning(f"Health check провален: нет подключения к базе данных ({exc}).")
        is_db_ok = False

    if not is_db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "api_status": "ok",
        "calendar_timezone": str(get_calendar().tz),
        "dependencies": {"database": "ok" if is_db_ok else "error"},
    }
