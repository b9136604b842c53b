"""Схемы Pydantic для модели HabitEntry."""

from datetime import datetime

from pydantic import Field

from .base_schema import BaseSchema


class HabitEntrySchemaBase(BaseSchema):
    """Поля записи без ограничений ввода: так их возвращает хранилище."""

    is_success: bool = Field(..., description="Успешен ли день")
    craving_level: int | None = Field(None, description="Интенсивность тяги за день")
    note: str | None = Field(None, description="Заметка к записи")


class HabitEntrySchemaInput(HabitEntrySchemaBase):
    """Поля записи, которые задает пользователь, с проверкой диапазонов."""

    craving_level: int | None = Field(None, ge=1, le=5, description="Интенсивность тяги за день (1-5)")
    note: str | None = Field(None, max_length=2000, description="Заметка к записи")


class HabitEntrySchemaToday(HabitEntrySchemaInput):
    """Схема для отметки результата за сегодня."""


class HabitEntrySchemaUpsert(HabitEntrySchemaInput):
    """
    Схема для создания или перезаписи записи за день.

    Необязательные поля, не переданные в запросе, очищаются (полная перезапись).
    """

    entry_date: datetime | None = Field(
        None,
        description="Момент, к которому относится запись. По умолчанию - текущее время",
    )


class HabitEntrySchemaRead(HabitEntrySchemaBase):
    """
    Схема для чтения записи (ответа API).

    Ограничения ввода здесь не проверяются: запись, сохраненная в обход API,
    все равно должна читаться.
    """

    id: int = Field(..., description="ID записи")
    habit_id: int = Field(..., description="ID привычки, к которой относится запись")
    entry_date: datetime = Field(..., description="Момент, к которому относится запись")
    updated_at: datetime = Field(..., description="Время последнего обновления записи")
