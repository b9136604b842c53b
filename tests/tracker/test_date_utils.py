from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.tracker.utils.date_utils import DayCalendar


def test_unknown_timezone_falls_back_to_utc():
    """Несуществующий часовой пояс не роняет приложение, используется UTC."""
    calendar = DayCalendar("Mars/Olympus_Mons")

    assert calendar.tz is timezone.utc


def test_naive_datetime_is_read_as_calendar_wall_clock():
    calendar = DayCalendar("Europe/Moscow")

    localized = calendar.localize(datetime(2025, 1, 5, 23, 59))

    assert localized.tzinfo == ZoneInfo("Europe/Moscow")
    assert calendar.day_of(localized) == date(2025, 1, 5)


def test_day_of_converts_aware_datetime_to_calendar_day():
    calendar = DayCalendar("Europe/Moscow")

    # 21:30 UTC = 00:30 следующего дня по Москве
    assert calendar.day_of(datetime(2025, 1, 5, 21, 30, tzinfo=timezone.utc)) == date(2025, 1, 6)
    assert calendar.day_of(date(2025, 1, 5)) == date(2025, 1, 5)


def test_day_bounds_are_half_open_day():
    calendar = DayCalendar("UTC")

    start, end = calendar.day_bounds(datetime(2025, 1, 5, 13, 45, tzinfo=timezone.utc))

    assert start == datetime(2025, 1, 5, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 6, tzinfo=timezone.utc)


def test_day_bounds_on_daylight_saving_switch():
    """В день перехода на летнее время сутки короче 24 часов."""
    calendar = DayCalendar("Europe/Berlin")

    start, end = calendar.day_bounds(date(2025, 3, 30))

    # Разность с одинаковым tzinfo считается по часам на стене, поэтому сравниваем в UTC
    assert end.astimezone(timezone.utc) - start.astimezone(timezone.utc) == timedelta(hours=23)
    assert calendar.day_of(end) == date(2025, 3, 31)


def test_today_uses_calendar_timezone():
    now = datetime(2025, 1, 5, 22, 0, tzinfo=timezone.utc)

    assert DayCalendar("UTC").today(now) == date(2025, 1, 5)
    assert DayCalendar("Asia/Tokyo").today(now) == date(2025, 1, 6)


def test_to_moment_accepts_day_and_datetime():
    calendar = DayCalendar("Europe/Moscow")

    assert calendar.to_moment(date(2025, 1, 5)) == datetime(2025, 1, 5, tzinfo=ZoneInfo("Europe/Moscow"))
    assert calendar.to_moment(datetime(2025, 1, 5, 21, 30, tzinfo=timezone.utc)).date() == date(2025, 1, 6)
