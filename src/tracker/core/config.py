"""Конфигурация сервиса трекера."""

from urllib.parse import quote_plus

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Настройки сервиса трекера привычек.

    Загружаются из переменных окружения и файла .env, валидируются Pydantic.
    """

    # --- Статические настройки ---

    PROJECT_NAME: str = "Smoking Tracker"
    API_VERSION: str = "0.1.0"

    # Префикс для всех эндпоинтов API
    API_PREFIX: str = "/api"

    # --- Настройки, читаемые из .env ---

    # Режим разработки/тестирования (для продакшен - False)
    DEVELOPMENT: bool = Field(default=False, description="Режим разработки/тестирования")

    # Логирование
    LOG_LEVEL: str = Field(default="INFO", description="Уровень логирования")
    LOG_TO_FILE: bool = Field(default=True, description="Дублировать логи в файл (logs/)")

    # Sentry
    SENTRY_DSN: str | None = Field(default=None, description="Sentry DSN. Если не задан, мониторинг отключен.")

    # Настройки БД
    DB_NAME: str = Field(default="smoking_tracker_db", description="Название базы данных")
    DB_USER: str = Field(default="smoking_tracker_user", description="Имя пользователя базы данных")
    DB_PASSWORD: str = Field(..., description="Пароль пользователя базы данных")
    DB_HOST: str = Field(
        default="db",
        description="Имя хоста базы данных (название сервиса в Docker)",
    )
    DB_PORT: int = Field(default=5432, description="Порт хоста базы данных")

    # Календарь, по которому определяются границы дня для записей и стриков
    TIMEZONE: str = Field(default="UTC", description="Часовой пояс календаря (IANA, например Europe/Moscow)")

    # Привычка, создаваемая при старте приложения
    DEFAULT_HABIT_NAME: str = Field(default="Smoking", min_length=1, description="Название привычки по умолчанию")
    DEFAULT_HABIT_MODE: str = Field(
        default="negative",
        pattern=r"^(positive|negative)$",
        description="Режим привычки по умолчанию (positive - делать чаще, negative - делать реже)",
    )

    # --- Вычисляемые поля ---

    @property
    def PRODUCTION(self) -> bool:
        """Продакшен - все, что не режим разработки."""
        return not self.DEVELOPMENT

    @computed_field(repr=False)
    def DATABASE_URL(self) -> str:
        """Собирает URL для SQLAlchemy."""

        # Экранируем пользователя и пароль, чтобы спецсимволы не ломали URL
        encoded_user = quote_plus(self.DB_USER)
        encoded_password = quote_plus(self.DB_PASSWORD)

        return f"postgresql+psycopg://{encoded_user}:{encoded_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Имена переменных окружения не чувствительны к регистру
        extra="ignore",  # Игнорировать лишние переменные .env
    )


# Создаем глобальный экземпляр настроек
settings = Settings()  # type: ignore[call-arg]
