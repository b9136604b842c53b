"""Модель SQLAlchemy для Habit (Привычка)."""

from enum import Enum as PyEnum  # Чтобы не конфликтовать с sqlalchemy.Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SqlEnum
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit_entry import HabitEntry


class HabitMode(PyEnum):
    """
    Режим привычки.

    Влияет только на интерпретацию успеха пользователем, но не на подсчет стриков.
    """

    POSITIVE = "positive"  # Делать чаще (например, зарядка)
    NEGATIVE = "negative"  # Делать реже или не делать вовсе (например, курение)


class Habit(Base):
    """
    Представляет отслеживаемую привычку.

    Attributes:
        id: Первичный ключ, идентификатор привычки (унаследован от Base).
        name: Уникальное название привычки (например, "Smoking").
        mode: Режим привычки (positive/negative).
        created_at: Время создания записи (унаследовано от TimestampMixin).
        updated_at: Время последнего обновления записи (унаследовано от TimestampMixin).
        entries: Дневные записи привычки. Удаляются вместе с привычкой.
    """

    __tablename__ = "habits"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    mode: Mapped[HabitMode] = mapped_column(
        SqlEnum(HabitMode, name="habit_mode_enum", values_callable=lambda enum: [item.value for item in enum]),
        nullable=False,
    )

    # Связи
    entries: Mapped[list["HabitEntry"]] = relationship(
        back_populates="habit",
        cascade="all, delete-orphan",
    )
