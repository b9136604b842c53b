"""Зависимости FastAPI: сессия БД, репозитории и сервисы."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import Habit, HabitEntry
from src.tracker.repositories import HabitEntryRepository, HabitRepository
from src.tracker.services import EntryLedger, HabitDetailService, HabitService, StreakCalculator
from src.tracker.utils.date_utils import DayCalendar

from .config import settings
from .database import get_db_session

# --- Типизация для инъекции зависимостей ---

# Сессия базы данных
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# --- Календарь ---


@lru_cache(maxsize=1)
def get_calendar() -> DayCalendar:
    return DayCalendar(settings.TIMEZONE)


# --- Фабрики Репозиториев ---


def get_habit_repository() -> HabitRepository:
    return HabitRepository(Habit)


def get_habit_entry_repository() -> HabitEntryRepository:
    return HabitEntryRepository(HabitEntry)


# Типизация для репозиториев
HabitRepo = Annotated[HabitRepository, Depends(get_habit_repository)]


# --- Фабрики Сервисов ---


# Журнал записей - один на приложение: в нем живут блокировки привычек
@lru_cache(maxsize=1)
def get_entry_ledger() -> EntryLedger:
    return EntryLedger(
        entry_repository=get_habit_entry_repository(),
        habit_repository=get_habit_repository(),
        calendar=get_calendar(),
    )


def get_streak_calculator() -> StreakCalculator:
    return StreakCalculator(calendar=get_calendar())


def get_habit_service(repository: HabitRepo) -> HabitService:
    return HabitService(habit_repository=repository)


def get_habit_detail_service(
    ledger: Annotated[EntryLedger, Depends(get_entry_ledger)],
    calculator: Annotated[StreakCalculator, Depends(get_streak_calculator)],
) -> HabitDetailService:
    return HabitDetailService(entry_ledger=ledger, streak_calculator=calculator)


# Типизация для сервисов
EntryLedgerSvc = Annotated[EntryLedger, Depends(get_entry_ledger)]
HabitSvc = Annotated[HabitService, Depends(get_habit_service)]
HabitDetailSvc = Annotated[HabitDetailService, Depends(get_habit_detail_service)]
