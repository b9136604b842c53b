from datetime import date, datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import Habit
from src.tracker.services import EntryLedger, HabitDetailService, StreakCalculator

# Помечаем все тесты в модуле как асинхронные
pytestmark = pytest.mark.asyncio


@pytest.fixture
def detail_service(entry_ledger: EntryLedger, streak_calculator: StreakCalculator) -> HabitDetailService:
    return HabitDetailService(entry_ledger=entry_ledger, streak_calculator=streak_calculator)


async def seed(entry_ledger: EntryLedger, db_session: AsyncSession, habit: Habit, results: dict[int, bool]) -> None:
    """Записывает результаты за дни марта 2025 года."""
    for day, is_success in results.items():
        await entry_ledger.upsert_entry(
            db_session,
            habit=habit,
            entry_date=datetime(2025, 3, day, 12, tzinfo=timezone.utc),
            is_success=is_success,
        )


async def test_load_without_entries(db_session: AsyncSession, detail_service: HabitDetailService, habit: Habit):
    detail = await detail_service.load(db_session, habit=habit, today=date(2025, 3, 10))

    assert detail.habit.id == habit.id
    assert detail.today == date(2025, 3, 10)
    assert detail.today_entry is None
    assert detail.current_streak == 0
    assert detail.longest_streak == 0


async def test_load_computes_both_streaks(
    db_session: AsyncSession, detail_service: HabitDetailService, entry_ledger: EntryLedger, habit: Habit
):
    """Успехи 1-3 и 5-6 марта, неудача 4-го: на 6 марта текущий 2, максимальный 3."""
    await seed(entry_ledger, db_session, habit, {1: True, 2: True, 3: True, 4: False, 5: True, 6: True})

    detail = await detail_service.load(db_session, habit=habit, today=date(2025, 3, 6))

    assert detail.today_entry is not None
    assert detail.today_entry.is_success is True
    assert detail.current_streak == 2
    assert detail.longest_streak == 3


async def test_load_before_todays_mark(
    db_session: AsyncSession, detail_service: HabitDetailService, entry_ledger: EntryLedger, habit: Habit
):
    """Пока сегодня не отмечено, текущий стрик равен нулю."""
    await seed(entry_ledger, db_session, habit, {1: True, 2: True})

    detail = await detail_service.load(db_session, habit=habit, today=date(2025, 3, 3))

    assert detail.today_entry is None
    assert detail.current_streak == 0
    assert detail.longest_streak == 2


async def test_mark_today_records_and_recomputes(
    db_session: AsyncSession, detail_service: HabitDetailService, entry_ledger: EntryLedger, habit: Habit
):
    await seed(entry_ledger, db_session, habit, {1: True, 2: True})

    detail = await detail_service.mark_today(
        db_session,
        habit=habit,
        is_success=True,
        craving_level=2,
        note="Справился",
        now=datetime(2025, 3, 3, 21, 45, tzinfo=timezone.utc),
    )

    assert detail.today == date(2025, 3, 3)
    assert detail.today_entry is not None
    assert detail.today_entry.craving_level == 2
    assert detail.today_entry.note == "Справился"
    assert detail.current_streak == 3
    assert detail.longest_streak == 3


async def test_mark_today_twice_overwrites(
    db_session: AsyncSession, detail_service: HabitDetailService, habit: Habit
):
    """Повторная отметка за день перезаписывает результат."""
    first = await detail_service.mark_today(
        db_session, habit=habit, is_success=True, now=datetime(2025, 3, 3, 8, tzinfo=timezone.utc)
    )
    second = await detail_service.mark_today(
        db_session, habit=habit, is_success=False, now=datetime(2025, 3, 3, 22, tzinfo=timezone.utc)
    )

    assert first.current_streak == 1
    assert second.today_entry is not None
    assert first.today_entry is not None
    assert second.today_entry.id == first.today_entry.id
    assert second.today_entry.is_success is False
    assert second.current_streak == 0
    assert second.longest_streak == 0
