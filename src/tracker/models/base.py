"""Базовое определение модели для SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

# Соглашение об именовании для внешних ключей и индексов (для Alembic и SQLAlchemy)
# https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata_obj = MetaData(naming_convention=convention)


class UTCDateTime(TypeDecorator[datetime]):
    """
    Момент времени, хранимый в UTC и всегда возвращаемый с tzinfo.

    Драйверы без поддержки часовых поясов (SQLite) возвращают наивные значения,
    поэтому на чтении UTC проставляется явно.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Ожидался datetime с часовым поясом, получен наивный: {value!r}")
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class TimestampMixin:
    """
    Миксин для добавления полей created_at и updated_at к моделям.

    Attributes:
        created_at: Время создания записи (автоматически устанавливается БД).
        updated_at: Время последнего обновления записи (автоматически обновляется при изменении).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        comment="Время создания записи",
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        comment="Время последнего обновления записи",
        nullable=False,
    )


class Base(DeclarativeBase, TimestampMixin):
    """
    Базовый класс для декларативных моделей SQLAlchemy.

    Предоставляет общий первичный ключ 'id', поля created_at/updated_at
    и metadata с соглашением об именовании.
    """

    metadata = metadata_obj

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id!r})>"
