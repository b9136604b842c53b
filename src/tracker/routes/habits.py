"""
Эндпоинты для управления привычками (Habits).
"""

from datetime import date

from fastapi import APIRouter, Path, Query, status

from src.tracker.core.dependencies import DBSession, HabitDetailSvc, HabitSvc
from src.tracker.models import Habit
from src.tracker.schemas import HabitDetailSchemaRead, HabitSchemaRead

router = APIRouter(prefix="/habits", tags=["Habits"])

HabitIDPath = Path(..., title="ID Привычки", description="Идентификатор привычки", gt=0)


@router.get(
    "/default",
    response_model=HabitSchemaRead,
    summary="Привычка по умолчанию",
    description="Возвращает привычку по умолчанию из настроек, создавая ее при первом обращении.",
)
async def get_default_habit(db_session: DBSession, habit_service: HabitSvc) -> Habit:
    return await habit_service.get_or_create_default_habit(db_session)


@router.get(
    "/{habit_id}",
    response_model=HabitSchemaRead,
    summary="Получение привычки",
)
async def get_habit(db_session: DBSession, habit_service: HabitSvc, habit_id: int = HabitIDPath) -> Habit:
    return await habit_service.get_habit(db_session, habit_id=habit_id)


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удаление привычки",
    description="Удаляет привычку вместе со всеми ее записями.",
)
async def delete_habit(db_session: DBSession, habit_service: HabitSvc, habit_id: int = HabitIDPath) -> None:
    await habit_service.delete_habit(db_session, habit_id=habit_id)


@router.get(
    "/{habit_id}/detail",
    response_model=HabitDetailSchemaRead,
    summary="Состояние привычки: запись за сегодня и стрики",
)
async def get_habit_detail(
    db_session: DBSession,
    habit_service: HabitSvc,
    detail_service: HabitDetailSvc,
    habit_id: int = HabitIDPath,
    today: date | None = Query(None, description="День отсчета (YYYY-MM-DD). По умолчанию - сегодня"),
) -> HabitDetailSchemaRead:
    """
    Возвращает запись за сегодня (или null), текущий и максимальный стрики.

    - Текущий стрик равен нулю, если за `today` нет успешной записи.
    """
    habit = await habit_service.get_habit(db_session, habit_id=habit_id)
    return await detail_service.load(db_session, habit=habit, today=today)
