"""Модуль вспомогательных утилит для работы с датами/таймзонами."""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.tracker.core.logging import tracker_log as log


class DayCalendar:
    """
    Календарь, определяющий границы дня.

    Все сравнения "в пределах дня" в журнале записей и подсчет стриков
    выполняются по одному и тому же календарю, переданному явно.

    Attributes:
        tz (tzinfo): Часовой пояс календаря.
    """

    def __init__(self, tz: str | tzinfo = "UTC"):
        """
        Инициализирует календарь.

        Если часовой пояс задан строкой и не найден, используется UTC.

        Args:
            tz (str | tzinfo): Имя часового пояса IANA или объект tzinfo.
        """
        if isinstance(tz, tzinfo):
            self.tz: tzinfo = tz
            return

        try:
            self.tz = ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError):
            # Опечатка в настройках не должна ронять приложение
            log.warning(f"Некорректный часовой пояс '{tz}'. Используется UTC по умолчанию.")
            self.tz = timezone.utc

    def __repr__(self) -> str:
        return f"DayCalendar(tz={self.tz!s})"

    def localize(self, moment: datetime) -> datetime:
        """
        Приводит момент времени к часовому поясу календаря.

        Наивный datetime трактуется как время на часах в поясе календаря.
        """
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.tz)
        return moment.astimezone(self.tz)

    def to_moment(self, value: date | datetime) -> datetime:
        """Момент в поясе календаря; день без времени - его начало."""
        if isinstance(value, datetime):
            return self.localize(value)
        return self.start_of(value)

    def day_of(self, moment: date | datetime) -> date:
        """Возвращает календарный день, к которому относится момент."""
        # datetime - подкласс date, поэтому проверяем его первым
        if isinstance(moment, datetime):
            return self.localize(moment).date()
        return moment

    def start_of(self, day: date) -> datetime:
        """Начало календарного дня (полночь в поясе календаря)."""
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def start_of_day(self, moment: date | datetime) -> datetime:
        return self.start_of(self.day_of(moment))

    def day_bounds(self, moment: date | datetime) -> tuple[datetime, datetime]:
        """
        Границы дня в виде полуинтервала [начало дня, начало следующего дня).

        Конец считается от следующей календарной даты, а не прибавлением 24 часов,
        поэтому дни перехода на летнее/зимнее время обрабатываются корректно.
        """
        day = self.day_of(moment)
        return self.start_of(day), self.start_of(day + timedelta(days=1))

    def today(self, now: datetime | None = None) -> date:
        """
        Вычисляет "сегодня" в поясе календаря.

        Args:
            now (datetime | None): Текущий момент. По умолчанию - текущее время UTC.
        """
        return self.day_of(now or datetime.now(timezone.utc))
