"""
Иерархия исключений трекера и их обработчики для FastAPI.

Каждое исключение несет машинно-читаемый `error_type`.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .logging import tracker_log as log


class AppException(Exception):
    """Базовое исключение приложения."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_type: str = "internal_error"

    def __init__(self, message: str, error_type: str | None = None):
        self.message = message
        self.error_type = error_type or self.default_error_type
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "error_type": self.error_type}


class NotFoundException(AppException):
    """Запрошенный объект не найден."""

    status_code = status.HTTP_404_NOT_FOUND
    default_error_type = "not_found"


class PersistenceError(AppException):
    """
    Ошибка чтения или записи в хранилище.

    Журнал записей не повторяет операцию сам: решение о повторе и о перечитывании
    состояния остается за вызывающим кодом.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_error_type = "persistence_error"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Преобразует AppException в JSON-ответ с соответствующим статусом."""
    log.warning(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.error_type}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Регистрирует обработчики исключений приложения.

    Args:
        app (FastAPI): Экземпляр приложения FastAPI.
    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]


__all__ = [
    "AppException",
    "NotFoundException",
    "PersistenceError",
    "setup_exception_handlers",
]
