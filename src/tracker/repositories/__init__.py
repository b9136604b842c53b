"""Инициализация модуля репозиториев."""

from .base_repository import BaseRepository
from .habit_entry_repository import HabitEntryRepository
from .habit_repository import HabitRepository

__all__ = [
    "BaseRepository",
    "HabitRepository",
    "HabitEntryRepository",
]
