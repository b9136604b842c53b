"""Сервис состояния экрана привычки: запись за сегодня и стрики."""

from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.logging import tracker_log as log
from src.tracker.models import Habit
from src.tracker.schemas import HabitDetailSchemaRead, HabitEntrySchemaRead, HabitSchemaRead

from .entry_ledger import EntryLedger
from .streak_calculator import StreakCalculator


class HabitDetailService:
    """
    Собирает состояние экрана привычки из журнала записей и калькулятора стриков.

    Результат - обычная структура данных, которую презентационный слой
    отображает как есть. Ошибки хранилища пробрасываются вызывающему коду.
    """

    def __init__(self, entry_ledger: EntryLedger, streak_calculator: StreakCalculator):
        self.entry_ledger = entry_ledger
        self.streak_calculator = streak_calculator

    async def load(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        today: date | None = None,
    ) -> HabitDetailSchemaRead:
        """
        Загружает запись за сегодня и вычисляет текущий и максимальный стрики.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка.
            today (date | None): День отсчета. По умолчанию - сегодня по календарю журнала.

        Returns:
            HabitDetailSchemaRead: Состояние экрана привычки.
        """
        reference_day = today or self.entry_ledger.calendar.today()

        today_entry = await self.entry_ledger.fetch_entry(db_session, habit=habit, entry_date=reference_day)
        entries = await self.entry_ledger.fetch_entries(db_session, habit=habit)

        current_streak = self.streak_calculator.current_streak(entries, today=reference_day)
        longest_streak = self.streak_calculator.longest_streak(entries)

        log.debug(
            f"Состояние привычки ID: {habit.id} на {reference_day}: "
            f"текущий стрик {current_streak}, максимальный {longest_streak}."
        )

        return HabitDetailSchemaRead(
            habit=HabitSchemaRead.model_validate(habit),
            today=reference_day,
            today_entry=HabitEntrySchemaRead.model_validate(today_entry) if today_entry else None,
            current_streak=current_streak,
            longest_streak=longest_streak,
        )

    async def mark_today(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        is_success: bool,
        craving_level: int | None = None,
        note: str | None = None,
        now: datetime | None = None,
    ) -> HabitDetailSchemaRead:
        """
        Фиксирует результат за сегодня и возвращает пересчитанное состояние.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка.
            is_success (bool): Успешен ли день.
            craving_level (int | None): Интенсивность тяги.
            note (str | None): Заметка.
            now (datetime | None): Текущий момент. По умолчанию - текущее время UTC.

        Returns:
            HabitDetailSchemaRead: Состояние экрана после записи.
        """
        moment = now or datetime.now(timezone.utc)

        await self.entry_ledger.upsert_entry(
            db_session,
            habit=habit,
            entry_date=moment,
            is_success=is_success,
            craving_level=craving_level,
            note=note,
        )

        return await self.load(db_session, habit=habit, today=self.entry_ledger.calendar.today(moment))
