"""Schedule resolution: which menus are planned for a given weekday."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from training_log.core.enums import DAYS_FROM_SUNDAY, DayOfWeek
from training_log.repositories.menu import MenuRepository
from training_log.schemas.menu import MenuRead


def day_of_week(d: date) -> DayOfWeek:
    """Map a date to its weekday (Sunday=0 ... Saturday=6 indexing)."""
    # date.weekday() is Monday=0, so shift by one to start the week on Sunday
    return DAYS_FROM_SUNDAY[(d.weekday() + 1) % 7]


class ScheduleResolver:
    def __init__(self, menus: MenuRepository, clock: Callable[[], date] = date.today):
        self._menus = menus
        self._clock = clock

    async def get_todays_schedule(self, user_id: str, today: date | None = None) -> list[MenuRead]:
        """Menus scheduled for today according to the caller's clock."""
        return await self.get_schedule_by_day(user_id, day_of_week(today or self._clock()))

    async def get_schedule_by_day(self, user_id: str, day: DayOfWeek) -> list[MenuRead]:
        return await self._menus.get_by_scheduled_day(user_id, day)
