"""Модель SQLAlchemy для HabitEntry (Дневная запись привычки)."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UTCDateTime

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class HabitEntry(Base):
    """
    Представляет итог привычки за один календарный день.

    Для привычки допускается не более одной записи на календарный день.
    Ограничение обеспечивает журнал записей (EntryLedger), а не схема БД:
    день определяется календарем журнала, а не датой в UTC.

    Attributes:
        id: Первичный ключ (унаследован от Base).
        habit_id: Внешний ключ, связывающий запись с привычкой.
        entry_date: Момент, к которому относится запись. Время суток не значимо.
        is_success: Успешен ли день. Для negative-привычки - удалось воздержаться,
                    для positive - привычка выполнена.
        craving_level: Интенсивность тяги за день (опционально).
        note: Произвольная заметка (опционально).
        habit: Связь с привычкой, к которой относится запись.
    """

    __tablename__ = "habit_entries"

    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    entry_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, index=True)
    is_success: Mapped[bool] = mapped_column(nullable=False)
    craving_level: Mapped[int | None] = mapped_column(Integer)
    note: Mapped[str | None] = mapped_column(Text)

    # Связи
    habit: Mapped["Habit"] = relationship(back_populates="entries")
