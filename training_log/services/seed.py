"""Development sample data: three menus and two logged sessions for one user."""

from __future__ import annotations

import logging
from datetime import date

from training_log.core.enums import DayOfWeek
from training_log.repositories.menu import MenuRepository
from training_log.repositories.record import RecordRepository
from training_log.schemas.menu import MenuCreate, MenuRead
from training_log.schemas.record import RecordCreate, SetCreate

logger = logging.getLogger(__name__)

SAMPLE_MENUS = [
    MenuCreate(
        name="ベンチプレス",
        description="胸筋を鍛えるメニュー",
        scheduled_days=[DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY, DayOfWeek.FRIDAY],
    ),
    MenuCreate(
        name="スクワット",
        description="脚を鍛えるメニュー",
        scheduled_days=[DayOfWeek.TUESDAY, DayOfWeek.THURSDAY],
    ),
    MenuCreate(
        name="デッドリフト",
        description="背中を鍛えるメニュー",
        scheduled_days=[DayOfWeek.MONDAY, DayOfWeek.FRIDAY],
    ),
]

# (menu index, date, comment, [(weight, reps, rest_time)])
SAMPLE_RECORDS = [
    (0, date(2024, 1, 15), "調子良かった", [(50, 10, 90), (50, 8, 90), (50, 6, None)]),
    (1, date(2024, 1, 16), "きつかった", [(60, 12, 60), (60, 10, 60)]),
]


async def seed_sample_data(menus: MenuRepository, records: RecordRepository, user_id: str) -> list[MenuRead]:
    """Insert the sample menus and records for `user_id`; returns the created menus."""
    created = [await menus.create(user_id, m) for m in SAMPLE_MENUS]
    for menu_index, day, comment, sets in SAMPLE_RECORDS:
        await records.create(
            user_id,
            RecordCreate(
                menu_id=created[menu_index].id,
                date=day,
                comment=comment,
                sets=[SetCreate(weight=w, reps=r, rest_time=rest) for w, r, rest in sets],
            ),
        )
    logger.info("Seeded %d menus and %d records for user %s", len(created), len(SAMPLE_RECORDS), user_id)
    return created
