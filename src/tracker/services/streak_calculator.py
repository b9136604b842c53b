"""Подсчет стриков (серий успешных дней) по истории записей."""

from datetime import date, datetime, timedelta
from typing import Iterable, Protocol

from src.tracker.utils.date_utils import DayCalendar

ONE_DAY = timedelta(days=1)


class EntryLike(Protocol):
    """Минимальный контракт записи, нужный для подсчета стриков."""

    entry_date: datetime
    is_success: bool


class StreakCalculator:
    """
    Вычисляет текущий и максимальный стрики по набору записей.

    Калькулятор не хранит состояния, не обращается к БД и к системным часам:
    "сегодня" всегда передается явно. Календарь нужен только для того,
    чтобы отнести момент записи к календарному дню.

    Стрик - серия подряд идущих календарных дней, в каждом из которых есть
    успешная запись. Пропущенный день прерывает серию.
    """

    def __init__(self, calendar: DayCalendar | None = None):
        """
        Args:
            calendar (DayCalendar | None): Календарь для нормализации дат. По умолчанию - UTC.
        """
        self.calendar = calendar or DayCalendar()

    def normalized_successful_days(self, entries: Iterable[EntryLike]) -> set[date]:
        """
        Возвращает множество календарных дней с успешными записями.

        Несколько успешных записей за один день дают один день.
        """
        return {self.calendar.day_of(entry.entry_date) for entry in entries if entry.is_success}

    def current_streak(self, entries: Iterable[EntryLike], today: date | datetime) -> int:
        """
        Текущий стрик, заканчивающийся сегодняшним днем.

        Если сегодня нет успешной записи, стрик равен нулю, даже если вчера был успех.
        Обход идет назад от сегодняшнего дня и останавливается на первом пропуске.

        Args:
            entries (Iterable[EntryLike]): Записи привычки.
            today (date | datetime): День, к которому привязан стрик.

        Returns:
            int: Количество подряд идущих успешных дней, включая сегодня.
        """
        successful_days = self.normalized_successful_days(entries)
        current_day = self.calendar.day_of(today)

        streak = 0
        while current_day in successful_days:
            streak += 1
            current_day -= ONE_DAY

        return streak

    def longest_streak(self, entries: Iterable[EntryLike]) -> int:
        """
        Самый длинный стрик за всю историю.

        Args:
            entries (Iterable[EntryLike]): Записи привычки.

        Returns:
            int: Длина максимальной серии подряд идущих успешных дней (0 для пустой истории).
        """
        longest = 0
        current = 0
        previous_day: date | None = None

        for day in sorted(self.normalized_successful_days(entries)):
            if previous_day is not None and day - previous_day == ONE_DAY:
                current += 1
            else:
                current = 1
            longest = max(longest, current)
            previous_day = day

        return longest
