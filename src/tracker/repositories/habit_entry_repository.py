"""Репозиторий для работы с моделью HabitEntry."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.logging import tracker_log as log
from src.tracker.models import HabitEntry
from src.tracker.repositories import BaseRepository


class HabitEntryRepository(BaseRepository[HabitEntry, BaseModel]):
    """
    Репозиторий для операций с моделью HabitEntry.

    Записи создаются и изменяются только журналом записей (EntryLedger),
    поэтому здесь только выборки.
    """

    async def get_entry_in_range(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        start: datetime,
        end: datetime,
    ) -> HabitEntry | None:
        """
        Получает запись привычки, попадающую в полуинтервал [start, end).

        Если записей в интервале несколько (данные, пришедшие в обход журнала),
        возвращается самая ранняя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            start (datetime): Начало интервала (включительно).
            end (datetime): Конец интервала (не включительно).

        Returns:
            HabitEntry | None: Экземпляр записи или None.
        """
        log.debug(f"Поиск записи привычки ID: {habit_id} в интервале [{start.isoformat()}, {end.isoformat()})")
        entry = await self.get_by_filter_first_or_none(
            db_session,
            self.model.habit_id == habit_id,
            self.model.entry_date >= start,
            self.model.entry_date < end,
            order_by=[self.model.entry_date.asc(), self.model.id.asc()],
        )

        if entry:
            log.debug(f"Найдена запись (ID: {entry.id}) привычки ID: {habit_id}.")
        else:
            log.debug(f"Запись привычки ID: {habit_id} в интервале не найдена.")

        return entry

    async def get_entries_for_habit(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
        end_exclusive: bool = False,
    ) -> Sequence[HabitEntry]:
        """
        Получает записи привычки, отсортированные по дате по возрастанию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            start (datetime | None): Нижняя граница (включительно). None - без ограничения.
            end (datetime | None): Верхняя граница. None - без ограничения.
            end_exclusive (bool): Если True, верхняя граница не включается.

        Returns:
            Sequence[HabitEntry]: Список записей.
        """
        filters: list[ColumnElement[bool]] = [self.model.habit_id == habit_id]

        if start is not None:
            filters.append(self.model.entry_date >= start)

        if end is not None:
            filters.append(self.model.entry_date < end if end_exclusive else self.model.entry_date <= end)

        entries = await self.get_multi_by_filter(
            db_session,
            *filters,
            order_by=[self.model.entry_date.asc(), self.model.id.asc()],
        )

        log.debug(f"Найдено {len(entries)} записей привычки ID: {habit_id}.")
        return entries
