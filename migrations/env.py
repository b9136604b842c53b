import logging

from alembic import context
from sqlalchemy import engine_from_config, pool

# Импортируем базовую модель SQLAlchemy
from src.tracker.models import Base  # Это подтянет все модели через __init__
from src.core_shared.logging_setup import setup_logger

# Логгер Loguru для миграций
loguru_logger = setup_logger("Alembic", enable_file_logging=False)


class InterceptHandler(logging.Handler):
    """Перехватывает логи стандартного модуля logging и перенаправляет их в Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Ищем, откуда был вызван лог, чтобы правильно отобразить место вызова
        frame, depth = logging.currentframe(), 2

        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# Подменяем logging
logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)

# Отключаем лишний шум
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


config = context.config

# Указываем Alembic на метаданные базовой модели
target_metadata = Base.metadata


def get_database_url() -> str:
    """
    Возвращает URL базы данных для миграций.

    URL, заданный в конфигурации Alembic (например, тестами), имеет приоритет над настройками приложения.
    """
    configured_url = config.get_main_option("sqlalchemy.url")
    if configured_url:
        return configured_url

    # Настройки импортируются лениво: без DB_PASSWORD они не валидируются
    from src.tracker.core.config import settings

    return str(settings.DATABASE_URL)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Calls to context.execute() here emit the given string to the
    script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable_config = config.get_section(config.config_ini_section, {})
    connectable_config["sqlalchemy.url"] = get_database_url()

    connectable = engine_from_config(
        connectable_config,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",  # ALTER TABLE на SQLite через batch
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
