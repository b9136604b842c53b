"""Схемы Pydantic для модели Habit."""

from datetime import date, datetime

from pydantic import Field

from src.tracker.models import HabitMode

from .base_schema import BaseSchema
from .habit_entry_schema import HabitEntrySchemaRead


class HabitSchemaBase(BaseSchema):
    """Базовая схема для привычки."""

    name: str = Field(..., min_length=1, max_length=255, description="Название привычки")
    mode: HabitMode = Field(..., description="Режим привычки (positive/negative)")


class HabitSchemaCreate(HabitSchemaBase):
    """Схема для создания новой привычки."""


class HabitSchemaRead(HabitSchemaBase):
    """Схема для чтения данных о привычке (ответа API)."""

    id: int = Field(..., description="ID привычки")
    created_at: datetime = Field(..., description="Время создания привычки")


class HabitDetailSchemaRead(BaseSchema):
    """
    Состояние экрана привычки.

    Обычная структура данных без подписок: вычисляется заново при каждой загрузке.
    """

    habit: HabitSchemaRead = Field(..., description="Отслеживаемая привычка")
    today: date = Field(..., description="День, относительно которого посчитан текущий стрик")
    today_entry: HabitEntrySchemaRead | None = Field(None, description="Запись за сегодня, если она уже есть")
    current_streak: int = Field(..., ge=0, description="Текущая серия успешных дней, заканчивающаяся сегодня")
    longest_streak: int = Field(..., ge=0, description="Самая длинная серия успешных дней за всю историю")
