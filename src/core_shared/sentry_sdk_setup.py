"""Мониторинг ошибок через Sentry."""

from logging import ERROR, INFO
from typing import TYPE_CHECKING, Protocol

from sentry_sdk import init as sentry_init
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

if TYPE_CHECKING:
    from loguru import Logger


class SentrySettingsProtocol(Protocol):
    SENTRY_DSN: str | None
    PRODUCTION: bool
    PROJECT_NAME: str
    API_VERSION: str


def setup_sentry(
    settings: SentrySettingsProtocol,
    log: "Logger",
    ignore_errors: tuple[type[BaseException], ...] = (),
) -> bool:
    """
    Включает Sentry, если в настройках задан DSN.

    В продакшене трассируется 10% запросов, в разработке - все.

    Args:
        settings (SentrySettingsProtocol): Настройки сервиса.
        log (Logger): Логгер сервиса.
        ignore_errors (tuple[type[BaseException], ...]): Исключения, которые являются
            ожидаемым результатом (например, "привычка не найдена") и не отправляются в Sentry.

    Returns:
        bool: True, если Sentry SDK инициализирован.
    """
    if not settings.SENTRY_DSN:
        log.info("SENTRY_DSN не задан, мониторинг Sentry отключен.")
        return False

    environment = "production" if settings.PRODUCTION else "development"
    traces_sample_rate = 0.1 if settings.PRODUCTION else 1.0

    try:
        sentry_init(
            dsn=settings.SENTRY_DSN,
            environment=environment,
            release=f"{settings.PROJECT_NAME}@{settings.API_VERSION}",
            traces_sample_rate=traces_sample_rate,
            ignore_errors=list(ignore_errors),
            integrations=[
                StarletteIntegration(transaction_style="endpoint"),
                FastApiIntegration(transaction_style="endpoint"),
                SqlalchemyIntegration(),
                # log.error (в том числе о сбоях хранилища) становится событием Sentry
                LoguruIntegration(level=INFO, event_level=ERROR),
            ],
        )
    except Exception as exc:
        log.exception(f"Ошибка инициализации Sentry SDK: {exc}")
        return False

    log.info(f"Sentry SDK инициализирован: environment={environment}, traces={traces_sample_rate}.")
    return True
