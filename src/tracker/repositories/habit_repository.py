"""Репозиторий для работы с моделью Habit."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.logging import tracker_log as log
from src.tracker.models import Habit
from src.tracker.repositories import BaseRepository
from src.tracker.schemas import HabitSchemaCreate


class HabitRepository(BaseRepository[Habit, HabitSchemaCreate]):
    """
    Репозиторий для операций с моделью Habit.

    Наследует общие методы от BaseRepository и содержит специфичные для Habit методы.
    """

    async def get_by_name(self, db_session: AsyncSession, *, name: str) -> Habit | None:
        """
        Получает привычку по названию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            name (str): Название привычки.

        Returns:
            Habit | None: Экземпляр привычки или None.
        """
        habit = await self.get_by_filter_first_or_none(db_session, self.model.name == name)

        status = "найдена" if habit else "не найдена"
        log.debug(f"Привычка '{name}' {status}.")

        return habit

    async def get_habit_by_id_for_update(self, db_session: AsyncSession, *, habit_id: int) -> Habit | None:
        """
        Получает привычку по ID для последующего изменения ее записей.

        Блокирует строку от изменения другими транзакциями до конца текущей транзакции
        (SELECT ... FOR UPDATE). На SQLite блокировка строк не поддерживается и опускается.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.

        Returns:
            Habit | None: Экземпляр привычки или None.
        """
        statement = select(self.model).where(self.model.id == habit_id).with_for_update()
        result = await db_session.execute(statement)
        habit = result.scalar_one_or_none()

        status = "найдена" if habit else "не найдена"
        log.debug(f"Привычка (ID {habit_id}) для обновления {status}.")

        return habit
