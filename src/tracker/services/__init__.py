"""Инициализация модуля сервисов."""

from .entry_ledger import EntryLedger
from .habit_detail_service import HabitDetailService
from .habit_service import HabitService
from .streak_calculator import EntryLike, StreakCalculator

__all__ = [
    "EntryLike",
    "EntryLedger",
    "StreakCalculator",
    "HabitService",
    "HabitDetailService",
]
