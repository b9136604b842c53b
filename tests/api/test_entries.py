from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.tracker.models import Habit, HabitEntry

# Помечаем все тесты в модуле как асинхронные
pytestmark = pytest.mark.asyncio


def entries_url(habit_id: int) -> str:
    return f"/api/v1/habits/{habit_id}/entries"


async def test_upsert_entry_overwrites_same_day(test_client: AsyncClient, habit: Habit):
    """
    Сценарий:
    1. Записать успех утром.
    2. Записать неудачу вечером того же дня -> та же запись, результат перезаписан.
    """
    morning = await test_client.put(
        f"{entries_url(habit.id)}/",
        json={"is_success": True, "craving_level": 4, "note": "Утро", "entry_date": "2025-03-01T08:00:00Z"},
    )
    assert morning.status_code == status.HTTP_200_OK

    evening = await test_client.put(
        f"{entries_url(habit.id)}/",
        json={"is_success": False, "entry_date": "2025-03-01T22:30:00Z"},
    )
    assert evening.status_code == status.HTTP_200_OK

    data = evening.json()
    assert data["id"] == morning.json()["id"]
    assert data["is_success"] is False
    assert data["craving_level"] is None
    assert data["note"] is None

    listing = await test_client.get(f"{entries_url(habit.id)}/")
    assert len(listing.json()) == 1


async def test_upsert_entry_validates_craving_level(test_client: AsyncClient, habit: Habit):
    response = await test_client.put(
        f"{entries_url(habit.id)}/",
        json={"is_success": True, "craving_level": 6},
    )

    assert response.status_code == 422


async def test_list_entries_with_date_range(test_client: AsyncClient, habit: Habit):
    for day in ("01", "02", "03", "04"):
        await test_client.put(
            f"{entries_url(habit.id)}/",
            json={"is_success": True, "entry_date": f"2025-03-{day}T12:00:00Z"},
        )

    response = await test_client.get(f"{entries_url(habit.id)}/", params={"start": "2025-03-02", "end": "2025-03-03"})

    assert response.status_code == status.HTTP_200_OK
    assert [entry["entry_date"][:10] for entry in response.json()] == ["2025-03-02", "2025-03-03"]


async def test_get_entry_for_day(test_client: AsyncClient, habit: Habit):
    """Запрос записи за день без записи возвращает null, а не 404."""
    await test_client.put(
        f"{entries_url(habit.id)}/",
        json={"is_success": True, "entry_date": "2025-03-01T12:00:00Z"},
    )

    found = await test_client.get(f"{entries_url(habit.id)}/2025-03-01")
    missing = await test_client.get(f"{entries_url(habit.id)}/2025-03-02")

    assert found.status_code == status.HTTP_200_OK
    assert found.json()["is_success"] is True
    assert missing.status_code == status.HTTP_200_OK
    assert missing.json() is None


async def test_mark_today_and_check_streak(test_client: AsyncClient, habit: Habit):
    """
    Сценарий:
    1. Отметить успех сегодня -> стрик 1.
    2. Отметить неудачу сегодня -> стрик 0, запись та же.
    """
    success = await test_client.post(f"{entries_url(habit.id)}/today", json={"is_success": True, "craving_level": 2})

    assert success.status_code == status.HTTP_200_OK
    assert success.json()["current_streak"] == 1
    assert success.json()["longest_streak"] == 1

    failure = await test_client.post(f"{entries_url(habit.id)}/today", json={"is_success": False})

    assert failure.json()["current_streak"] == 0
    assert failure.json()["longest_streak"] == 0
    assert failure.json()["today_entry"]["id"] == success.json()["today_entry"]["id"]


async def test_entries_of_missing_habit(test_client: AsyncClient):
    response = await test_client.put(f"{entries_url(999)}/", json={"is_success": True})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_type"] == "habit_not_found"


async def test_storage_failure_returns_503(
    test_client: AsyncClient, db_session: AsyncSession, habit: Habit, monkeypatch: pytest.MonkeyPatch
):
    """Сбой записи в хранилище отдается клиенту как 503 с error_type."""

    async def failing_commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    response = await test_client.put(
        f"{entries_url(habit.id)}/",
        json={"is_success": True, "entry_date": "2025-03-01T12:00:00Z"},
    )

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["error_type"] == "persistence_error"


async def test_entry_stored_outside_api_is_readable(
    test_client: AsyncClient, db_session: AsyncSession, habit: Habit
):
    """Запись с тягой вне диапазона ввода (сохранена в обход API) все равно читается."""
    db_session.add(
        HabitEntry(
            habit_id=habit.id,
            entry_date=datetime(2025, 3, 1, 12, tzinfo=timezone.utc),
            is_success=True,
            craving_level=7,
        )
    )
    await db_session.commit()

    single = await test_client.get(f"{entries_url(habit.id)}/2025-03-01")
    listing = await test_client.get(f"{entries_url(habit.id)}/")

    assert single.status_code == status.HTTP_200_OK
    assert single.json()["craving_level"] == 7
    assert listing.status_code == status.HTTP_200_OK
    assert [entry["craving_level"] for entry in listing.json()] == [7]
