import math

import pytest
import pytest_asyncio

from training_log.core.constants import (
    MSG_MENU_NOT_FOUND,
    MSG_REPS_POSITIVE,
    MSG_SETS_REQUIRED,
    MSG_WEIGHT_POSITIVE,
)
from training_log.core.errors import NotFoundError, ValidationError
from training_log.schemas.menu import MenuCreate
from training_log.schemas.record import RecordCreate, RecordUpdate

USER = "user-1"
OTHER_USER = "user-2"

SETS = [
    {"weight": 50, "reps": 10, "restTime": 90},
    {"weight": 60, "reps": 8, "restTime": 90},
    {"weight": 70, "reps": 5, "duration": 40},
]


@pytest_asyncio.fixture
async def menu(menus):
    return await menus.create(USER, MenuCreate(name="Bench Press", scheduled_days=["monday"]))


async def count_rows(storage, table):
    row = await storage.first(f"SELECT COUNT(*) AS n FROM {table}")
    return row["n"]


def new_record(menu_id, day="2024-01-15", sets=SETS, comment=None):
    return RecordCreate(menu_id=menu_id, date=day, sets=sets, comment=comment)


@pytest.mark.asyncio
async def test_create_keeps_set_order(records, menu, storage):
    record = await records.create(USER, new_record(menu.id, comment="felt strong"))

    assert record.menu_id == menu.id
    assert record.date.isoformat() == "2024-01-15"
    assert record.comment == "felt strong"
    assert [(s.weight, s.reps) for s in record.sets] == [(50, 10), (60, 8), (70, 5)]
    assert record.sets[0].rest_time == 90
    assert record.sets[2].duration == 40
    assert len({s.id for s in record.sets}) == 3

    rows = await storage.query(
        "SELECT set_order FROM training_sets WHERE record_id = :id ORDER BY set_order", {"id": record.id}
    )
    assert [r["set_order"] for r in rows] == [1, 2, 3]
    assert await records.get_by_id(USER, record.id) == record


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "sets, message",
    [
        ([], MSG_SETS_REQUIRED),
        ([{"weight": 0, "reps": 10}], MSG_WEIGHT_POSITIVE),
        ([{"weight": -5, "reps": 10}], MSG_WEIGHT_POSITIVE),
        ([{"weight": math.nan, "reps": 5}], MSG_WEIGHT_POSITIVE),
        ([{"weight": math.inf, "reps": 5}], MSG_WEIGHT_POSITIVE),
        ([{"weight": -math.inf, "reps": 5}], MSG_WEIGHT_POSITIVE),
        ([{"weight": 50, "reps": 0}], MSG_REPS_POSITIVE),
        ([{"weight": 0, "reps": 0}], MSG_WEIGHT_POSITIVE),
        ([{"weight": 50, "reps": 10}, {"weight": 50, "reps": 0}, {"weight": 0, "reps": 5}], MSG_REPS_POSITIVE),
    ],
)
async def test_invalid_sets_write_nothing(records, menu, storage, sets, message):
    with pytest.raises(ValidationError) as exc_info:
        await records.create(USER, new_record(menu.id, sets=sets))

    assert exc_info.value.message == message
    assert await count_rows(storage, "training_records") == 0
    assert await count_rows(storage, "training_sets") == 0


@pytest.mark.asyncio
async def test_create_for_unknown_or_foreign_menu(records, menus, menu):
    foreign = await menus.create(OTHER_USER, MenuCreate(name="Squat", scheduled_days=["friday"]))

    for menu_id in ("missing", foreign.id):
        with pytest.raises(NotFoundError) as exc_info:
            await records.create(USER, new_record(menu_id))
        assert exc_info.value.message == MSG_MENU_NOT_FOUND


@pytest.mark.asyncio
async def test_records_sorted_newest_first_and_latest_matches(records, menu):
    assert await records.get_latest_by_menu_id(USER, menu.id) is None

    await records.create(USER, new_record(menu.id, day="2024-01-01"))
    newest = await records.create(USER, new_record(menu.id, day="2024-01-20"))
    await records.create(USER, new_record(menu.id, day="2024-01-10"))

    history = await records.get_by_menu_id(USER, menu.id)
    assert [r.date.isoformat() for r in history] == ["2024-01-20", "2024-01-10", "2024-01-01"]
    assert history[0] == newest
    assert await records.get_latest_by_menu_id(USER, menu.id) == history[0]


@pytest.mark.asyncio
async def test_same_day_records_break_ties_by_creation(records, menu):
    await records.create(USER, new_record(menu.id, day="2024-02-01", comment="morning"))
    evening = await records.create(USER, new_record(menu.id, day="2024-02-01", comment="evening"))

    assert (await records.get_by_menu_id(USER, menu.id))[0].id == evening.id
    assert (await records.get_latest_by_menu_id(USER, menu.id)).id == evening.id


@pytest.mark.asyncio
async def test_get_all_spans_menus(records, menus, menu):
    squat = await menus.create(USER, MenuCreate(name="Squat", scheduled_days=["tuesday"]))
    await records.create(USER, new_record(menu.id, day="2024-03-01"))
    await records.create(USER, new_record(squat.id, day="2024-03-02"))

    all_records = await records.get_all(USER)

    assert [r.menu_id for r in all_records] == [squat.id, menu.id]
    assert all(len(r.sets) == len(SETS) for r in all_records)
    assert await records.get_all(OTHER_USER) == []


@pytest.mark.asyncio
async def test_update_replaces_whole_set_collection(records, menu, storage):
    record = await records.create(USER, new_record(menu.id, comment="first"))

    updated = await records.update(USER, record.id, RecordUpdate(sets=[{"weight": 80, "reps": 3}]))

    assert [(s.weight, s.reps) for s in updated.sets] == [(80, 3)]
    assert not {s.id for s in record.sets} & {s.id for s in updated.sets}
    assert updated.comment == "first"
    assert updated.date == record.date
    assert updated.updated_at >= record.updated_at
    assert await count_rows(storage, "training_sets") == 1


@pytest.mark.asyncio
async def test_update_comment_only_keeps_sets(records, menu):
    record = await records.create(USER, new_record(menu.id, comment="first"))

    updated = await records.update(USER, record.id, RecordUpdate(comment=""))

    assert updated.comment == ""
    assert updated.sets == record.sets


@pytest.mark.asyncio
@pytest.mark.parametrize("sets", [[], [{"weight": 0, "reps": 5}]])
async def test_invalid_update_leaves_record_unchanged(records, menu, sets):
    record = await records.create(USER, new_record(menu.id))

    with pytest.raises(ValidationError):
        await records.update(USER, record.id, RecordUpdate(sets=sets, comment="changed"))

    assert await records.get_by_id(USER, record.id) == record


@pytest.mark.asyncio
async def test_update_and_delete_unknown_record(records):
    with pytest.raises(NotFoundError):
        await records.update(USER, "missing", RecordUpdate(comment="x"))
    with pytest.raises(NotFoundError):
        await records.delete(USER, "missing")


@pytest.mark.asyncio
async def test_delete_removes_sets(records, menu, storage):
    record = await records.create(USER, new_record(menu.id))
    kept = await records.create(USER, new_record(menu.id, day="2024-01-16"))

    with pytest.raises(NotFoundError):
        await records.delete(OTHER_USER, record.id)
    await records.delete(USER, record.id)

    assert await records.get_by_id(USER, record.id) is None
    assert await records.get_by_menu_id(USER, menu.id) == [kept]
    assert await count_rows(storage, "training_sets") == len(SETS)
