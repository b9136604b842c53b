"""
Эндпоинты для дневных записей привычки (HabitEntries).
"""

from datetime import date, datetime, timezone
from typing import Sequence

from fastapi import APIRouter, Path, Query

from src.tracker.core.dependencies import DBSession, EntryLedgerSvc, HabitDetailSvc, HabitSvc
from src.tracker.models import HabitEntry
from src.tracker.schemas import (
    HabitDetailSchemaRead,
    HabitEntrySchemaRead,
    HabitEntrySchemaToday,
    HabitEntrySchemaUpsert,
)

router = APIRouter(
    prefix="/habits/{habit_id}/entries",  # Вложенный ресурс
    tags=["Habit Entries"],
)

HabitIDPath = Path(..., title="ID Привычки", description="Идентификатор родительской привычки", gt=0)


@router.post(
    "/today",
    response_model=HabitDetailSchemaRead,
    summary="Отметка результата за сегодня",
    description="Создает или перезаписывает запись за сегодня и возвращает пересчитанные стрики.",
)
async def mark_today(
    db_session: DBSession,
    habit_service: HabitSvc,
    detail_service: HabitDetailSvc,
    entry_in: HabitEntrySchemaToday,
    habit_id: int = HabitIDPath,
) -> HabitDetailSchemaRead:
    habit = await habit_service.get_habit(db_session, habit_id=habit_id)
    return await detail_service.mark_today(
        db_session,
        habit=habit,
        is_success=entry_in.is_success,
        craving_level=entry_in.craving_level,
        note=entry_in.note,
    )


@router.put(
    "/",
    response_model=HabitEntrySchemaRead,
    summary="Создание или перезапись записи за день",
    description=(
        "Одна запись на календарный день: если запись за день `entry_date` уже есть, "
        "она перезаписывается целиком, иначе создается новая."
    ),
)
async def upsert_entry(
    db_session: DBSession,
    habit_service: HabitSvc,
    ledger: EntryLedgerSvc,
    entry_in: HabitEntrySchemaUpsert,
    habit_id: int = HabitIDPath,
) -> HabitEntry:
    habit = await habit_service.get_habit(db_session, habit_id=habit_id)
    return await ledger.upsert_entry(
        db_session,
        habit=habit,
        entry_date=entry_in.entry_date or datetime.now(timezone.utc),
        is_success=entry_in.is_success,
        craving_level=entry_in.craving_level,
        note=entry_in.note,
    )


@router.get(
    "/",
    response_model=list[HabitEntrySchemaRead],
    summary="Записи привычки за период",
)
async def list_entries(
    db_session: DBSession,
    habit_service: HabitSvc,
    ledger: EntryLedgerSvc,
    habit_id: int = HabitIDPath,
    start: date | None = Query(None, description="Начальная дата (включительно)"),
    end: date | None = Query(None, description="Конечная дата (включительно)"),
) -> Sequence[HabitEntry]:
    habit = await habit_service.get_habit(db_session, habit_id=habit_id)
    return await ledger.fetch_entries(db_session, habit=habit, start=start, end=end)


@router.get(
    "/{entry_date}",
    response_model=HabitEntrySchemaRead | None,
    summary="Запись привычки за день",
    description="Возвращает запись за день или null, если ее нет.",
)
async def get_entry(
    db_session: DBSession,
    habit_service: HabitSvc,
    ledger: EntryLedgerSvc,
    entry_date: date,
    habit_id: int = HabitIDPath,
) -> HabitEntry | None:
    habit = await habit_service.get_habit(db_session, habit_id=habit_id)
    return await ledger.fetch_entry(db_session, habit=habit, entry_date=entry_date)
