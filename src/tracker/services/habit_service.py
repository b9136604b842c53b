"""Сервис для работы с привычками."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import settings
from src.tracker.core.exceptions import NotFoundException
from src.tracker.core.logging import tracker_log as log
from src.tracker.models import Habit, HabitMode
from src.tracker.repositories import HabitRepository
from src.tracker.schemas import HabitSchemaCreate


class HabitService:
    """
    Сервис для управления привычками.

    Отвечает за получение, создание по названию и удаление привычек.
    Каждый публичный метод - отдельная единица работы со своим commit.
    """

    def __init__(self, habit_repository: HabitRepository):
        """
        Args:
            habit_repository (HabitRepository): Репозиторий для работы с привычками.
        """
        self.repository = habit_repository

    async def get_habit(self, db_session: AsyncSession, *, habit_id: int) -> Habit:
        """
        Получает привычку по ID или выбрасывает исключение.

        Raises:
            NotFoundException: Если привычка не найдена.
        """
        habit = await self.repository.get_by_id(db_session, obj_id=habit_id)

        if not habit:
            raise NotFoundException(message=f"Привычка с ID {habit_id} не найдена.", error_type="habit_not_found")

        return habit

    async def get_or_create_habit(self, db_session: AsyncSession, *, name: str, mode: HabitMode) -> Habit:
        """
        Возвращает привычку с указанным названием, создавая ее при отсутствии.

        Метод идемпотентен: привычка с одним названием существует в единственном экземпляре.
        Если привычку параллельно создал другой запрос, возвращается уже созданная.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            name (str): Название привычки.
            mode (HabitMode): Режим привычки, используемый только при создании.

        Returns:
            Habit: Сохраненная привычка.
        """
        existing = await self.repository.get_by_name(db_session, name=name)
        if existing:
            return existing

        log.info(f"Привычка '{name}' не найдена, создаем ({mode.value}).")

        try:
            habit = await self.repository.create(db_session, obj_in=HabitSchemaCreate(name=name, mode=mode))
            await db_session.commit()
        except IntegrityError:
            # Уникальность названия нарушена параллельным созданием
            await db_session.rollback()
            log.warning(f"Привычка '{name}' уже создана параллельно, используем существующую.")
            raced = await self.repository.get_by_name(db_session, name=name)
            if raced is None:
                raise
            return raced

        log.success(f"Привычка '{name}' (ID: {habit.id}) создана.")
        return habit

    async def get_or_create_default_habit(self, db_session: AsyncSession) -> Habit:
        """Возвращает привычку по умолчанию из настроек (по умолчанию - "Smoking", negative)."""
        return await self.get_or_create_habit(
            db_session,
            name=settings.DEFAULT_HABIT_NAME,
            mode=HabitMode(settings.DEFAULT_HABIT_MODE),
        )

    async def delete_habit(self, db_session: AsyncSession, *, habit_id: int) -> None:
        """
        Удаляет привычку вместе со всеми ее записями.

        Raises:
            NotFoundException: Если привычка не найдена.
        """
        habit = await self.get_habit(db_session, habit_id=habit_id)

        try:
            await self.repository.remove(db_session, db_obj=habit)
            await db_session.commit()
        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при удалении привычки ID: {habit_id}: {exc}")
            raise

        log.info(f"Привычка ID: {habit_id} и ее записи удалены.")
