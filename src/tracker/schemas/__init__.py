"""Инициализация модуля схем Pydantic."""

# Экспортируем Enum
from src.tracker.models import HabitMode

from .base_schema import BaseSchema
from .habit_entry_schema import (
    HabitEntrySchemaBase,
    HabitEntrySchemaInput,
    HabitEntrySchemaRead,
    HabitEntrySchemaToday,
    HabitEntrySchemaUpsert,
)
from .habit_schema import (
    HabitDetailSchemaRead,
    HabitSchemaBase,
    HabitSchemaCreate,
    HabitSchemaRead,
)

__all__ = [
    "BaseSchema",
    "HabitSchemaBase",
    "HabitSchemaCreate",
    "HabitSchemaRead",
    "HabitDetailSchemaRead",
    "HabitEntrySchemaBase",
    "HabitEntrySchemaInput",
    "HabitEntrySchemaRead",
    "HabitEntrySchemaToday",
    "HabitEntrySchemaUpsert",
    "HabitMode",  # Экспорт Enum
]
