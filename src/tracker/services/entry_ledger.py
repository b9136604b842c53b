"""Журнал дневных записей привычки."""

import asyncio
from datetime import date, datetime
from weakref import WeakValueDictionary

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import NotFoundException, PersistenceError
from src.tracker.core.logging import tracker_log as log
from src.tracker.models import Habit, HabitEntry
from src.tracker.repositories import HabitEntryRepository, HabitRepository
from src.tracker.utils.date_utils import DayCalendar


class EntryLedger:
    """
    Журнал записей привычки.

    Гарантирует, что у привычки не более одной записи на календарный день,
    и предоставляет выборки записей одной привычки.

    Изменения одной привычки выполняются строго по одному: журнал держит
    отдельную блокировку на каждую привычку и дополнительно блокирует строку
    привычки в БД (SELECT ... FOR UPDATE) на время транзакции. Поэтому экземпляр
    журнала должен быть общим для всех обработчиков приложения.
    Чтения не блокируются и могут не видеть изменение, которое еще выполняется.
    """

    def __init__(
        self,
        entry_repository: HabitEntryRepository,
        habit_repository: HabitRepository,
        calendar: DayCalendar,
    ):
        """
        Инициализирует журнал записей.

        Args:
            entry_repository (HabitEntryRepository): Репозиторий для работы с записями.
            habit_repository (HabitRepository): Репозиторий для блокировки привычки.
            calendar (DayCalendar): Календарь, определяющий границы дня.
        """
        self.entry_repository = entry_repository
        self.habit_repository = habit_repository
        self.calendar = calendar
        # Блокировка живет, пока ее держит или ждет хотя бы один вызов
        self._habit_locks: WeakValueDictionary[int, asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, habit_id: int) -> asyncio.Lock:
        lock = self._habit_locks.get(habit_id)
        if lock is None:
            lock = asyncio.Lock()
            self._habit_locks[habit_id] = lock
        return lock

    async def upsert_entry(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        entry_date: date | datetime,
        is_success: bool,
        craving_level: int | None = None,
        note: str | None = None,
    ) -> HabitEntry:
        """
        Создает или перезаписывает запись привычки за день, к которому относится `entry_date`.

        Если запись за этот день уже есть, перезаписываются `is_success`, `craving_level`
        и `note` (в том числе очищаются до None, если не переданы); ID и дата записи
        сохраняются. Иначе создается новая запись.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка, к которой относится запись.
            entry_date (date | datetime): Момент или день, к которому относится запись.
                День без времени записывается на начало дня по календарю.
            is_success (bool): Успешен ли день.
            craving_level (int | None): Интенсивность тяги.
            note (str | None): Заметка.

        Returns:
            HabitEntry: Созданная или обновленная запись, уже сохраненная в БД.

        Raises:
            NotFoundException: Если привычка не найдена в БД.
            PersistenceError: Если запись в хранилище не удалась. Транзакция откатывается,
                              объекты сессии следует перечитать.
        """
        habit_id = habit.id
        # Границы дня вычисляются один раз на вызов
        moment = self.calendar.to_moment(entry_date)
        start_of_day, start_of_next_day = self.calendar.day_bounds(moment)

        log.info(f"Запись результата привычки ID: {habit_id} за {start_of_day.date()}: success={is_success}")

        async with self._lock_for(habit_id):
            try:
                locked_habit = await self.habit_repository.get_habit_by_id_for_update(db_session, habit_id=habit_id)
                if locked_habit is None:
                    raise NotFoundException(message=f"Привычка с ID {habit_id} не найдена.", error_type="habit_not_found")

                existing_entry = await self.entry_repository.get_entry_in_range(
                    db_session,
                    habit_id=habit_id,
                    start=start_of_day,
                    end=start_of_next_day,
                )

                db_entry: HabitEntry

                if existing_entry:
                    log.debug(f"Перезапись существующей записи (ID: {existing_entry.id})")
                    existing_entry.is_success = is_success
                    existing_entry.craving_level = craving_level
                    existing_entry.note = note
                    db_entry = existing_entry
                else:
                    log.debug(f"Создание новой записи привычки ID: {habit_id}")
                    # Связь через объект привычки: запись попадает и в загруженную коллекцию habit.entries
                    db_entry = self.entry_repository.model(
                        habit=locked_habit,
                        entry_date=moment,
                        is_success=is_success,
                        craving_level=craving_level,
                        note=note,
                    )

                db_session.add(db_entry)

                await db_session.commit()
                await db_session.refresh(db_entry)

            except SQLAlchemyError as exc:
                # Изменения в памяти не считаются примененными
                await db_session.rollback()
                log.error(f"Ошибка при сохранении записи привычки ID: {habit_id}: {exc}")
                raise PersistenceError(
                    message=f"Не удалось сохранить запись привычки ID {habit_id}.",
                ) from exc

            except NotFoundException:
                await db_session.rollback()
                raise

        log.info(f"Запись (ID: {db_entry.id}) привычки ID: {habit_id} за {start_of_day.date()} сохранена.")
        return db_entry

    async def fetch_entry(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        entry_date: date | datetime,
    ) -> HabitEntry | None:
        """
        Получает запись привычки за день, к которому относится `entry_date`.

        Отсутствие записи - нормальный результат, а не ошибка.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка.
            entry_date (date | datetime): День или момент внутри дня.

        Returns:
            HabitEntry | None: Запись за день или None.

        Raises:
            PersistenceError: Если чтение из хранилища не удалось.
        """
        start_of_day, start_of_next_day = self.calendar.day_bounds(entry_date)

        try:
            return await self.entry_repository.get_entry_in_range(
                db_session,
                habit_id=habit.id,
                start=start_of_day,
                end=start_of_next_day,
            )
        except SQLAlchemyError as exc:
            log.error(f"Ошибка при чтении записи привычки ID: {habit.id}: {exc}")
            raise PersistenceError(message=f"Не удалось прочитать запись привычки ID {habit.id}.") from exc

    async def fetch_entries(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> list[HabitEntry]:
        """
        Получает записи привычки в диапазоне дат, отсортированные по возрастанию даты.

        Обе границы включительные и необязательные. Граница-дата (date) охватывает
        весь календарный день, граница-момент (datetime) сравнивается как есть.
        Уникальность записи на день здесь не предполагается.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка.
            start (date | datetime | None): Нижняя граница.
            end (date | datetime | None): Верхняя граница.

        Returns:
            list[HabitEntry]: Записи привычки.

        Raises:
            PersistenceError: Если чтение из хранилища не удалось.
        """
        lower: datetime | None = None
        upper: datetime | None = None
        end_exclusive = False

        if start is not None:
            lower = self.calendar.to_moment(start)

        if isinstance(end, datetime):
            upper = self.calendar.localize(end)
        elif end is not None:
            # Включительно весь день end: до начала следующего дня
            _, upper = self.calendar.day_bounds(end)
            end_exclusive = True

        try:
            entries = await self.entry_repository.get_entries_for_habit(
                db_session,
                habit_id=habit.id,
                start=lower,
                end=upper,
                end_exclusive=end_exclusive,
            )
        except SQLAlchemyError as exc:
            log.error(f"Ошибка при чтении записей привычки ID: {habit.id}: {exc}")
            raise PersistenceError(message=f"Не удалось прочитать записи привычки ID {habit.id}.") from exc

        return list(entries)
