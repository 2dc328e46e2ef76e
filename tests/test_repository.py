"""
TaskRepository behaviour over the in-memory store.
"""
import itertools
from datetime import date
from unittest.mock import AsyncMock

import pytest

from taskboard.core.exceptions import (
    PersistenceError,
    RetrievalError,
    TaskNotFoundError,
    ValidationError,
)
from taskboard.models.schemas import TaskFilters
from taskboard.models.task import TaskStatus
from tests.conftest import ALICE, BOB, fake


# ═══════════════════════════════════════════════════════
# FETCH
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_fetch_all_returns_only_own_tasks_newest_first(repository, seeded):
    tasks = await repository.fetch_all(ALICE)

    assert [t.id for t in tasks] == [
        seeded["alice_new"],
        seeded["alice_mid"],
        seeded["alice_legacy"],
        seeded["alice_old"],
    ]
    assert all(t.userId == ALICE for t in tasks)
    assert seeded["bob_task"] not in {t.id for t in tasks}


@pytest.mark.asyncio
async def test_fetch_all_for_unknown_user_is_empty(repository, seeded):
    assert await repository.fetch_all("nobody") == []


@pytest.mark.asyncio
async def test_filtering_never_introduces_tasks(repository, seeded):
    unfiltered = await repository.fetch_all(ALICE)
    unfiltered_ids = [t.id for t in unfiltered]

    days = [None, date(2024, 3, 9), date(2024, 3, 10)]
    statuses = [None, *TaskStatus]
    categories = [None, "Personal", "Work", "Errands"]

    for day, status, category in itertools.product(days, statuses, categories):
        filters = TaskFilters(date=day, status=status, category=category)
        result = await repository.fetch_all(ALICE, filters)
        ids = [t.id for t in result]
        assert set(ids) <= set(unfiltered_ids)
        # Relative order is preserved too
        assert ids == [i for i in unfiltered_ids if i in ids]


@pytest.mark.asyncio
async def test_date_filter_uses_half_open_day(repository, seeded):
    on_the_ninth = await repository.fetch_all(ALICE, TaskFilters(date=date(2024, 3, 9)))
    assert {t.id for t in on_the_ninth} == {seeded["alice_mid"], seeded["alice_legacy"]}

    on_the_tenth = await repository.fetch_all(ALICE, TaskFilters(date=date(2024, 3, 10)))
    assert [t.id for t in on_the_tenth] == [seeded["alice_new"]]


@pytest.mark.asyncio
async def test_legacy_rows_default_to_personal(repository, seeded):
    personal = await repository.fetch_all(ALICE, TaskFilters(category="Personal"))
    assert seeded["alice_legacy"] in {t.id for t in personal}


@pytest.mark.asyncio
async def test_read_failure_raises_retrieval_error(repository, store, monkeypatch):
    monkeypatch.setattr(store, "read_all", AsyncMock(side_effect=ConnectionError("network down")))

    with pytest.raises(RetrievalError) as excinfo:
        await repository.fetch_all(ALICE)
    assert excinfo.value.message == "Error fetching tasks"


@pytest.mark.asyncio
async def test_get_hides_other_users_tasks(repository, seeded):
    assert (await repository.get(seeded["alice_new"], ALICE)).title == "Call plumber"
    assert await repository.get(seeded["bob_task"], ALICE) is None
    assert await repository.get("missing", ALICE) is None


# ═══════════════════════════════════════════════════════
# CREATE
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
async def test_create_with_blank_title_writes_nothing(repository, store, monkeypatch, title):
    create = AsyncMock(wraps=store.create)
    monkeypatch.setattr(store, "create", create)

    with pytest.raises(ValidationError):
        await repository.create(title, "Work", ALICE)

    create.assert_not_awaited()
    assert len(store) == 0


@pytest.mark.asyncio
async def test_create_without_user_writes_nothing(repository, store):
    with pytest.raises(ValidationError):
        await repository.create("Buy milk", "Work", None)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_create_persists_defaults(repository, clock):
    task_id = await repository.create("Buy milk", "Work", ALICE)

    [task] = await repository.fetch_all(ALICE)
    assert task.id == task_id
    assert task.title == "Buy milk"
    assert task.category == "Work"
    assert task.status is TaskStatus.NOT_STARTED
    assert task.description == ""
    assert task.createdAt == clock.now
    assert task.userId == ALICE


@pytest.mark.asyncio
async def test_create_trims_title_and_defaults_category(repository):
    await repository.create("   Buy milk  ", "  ", ALICE)

    [task] = await repository.fetch_all(ALICE)
    assert task.title == "Buy milk"
    assert task.category == "Personal"


@pytest.mark.asyncio
async def test_new_tasks_come_first(repository, clock):
    first = await repository.create(fake.sentence(nb_words=3), None, ALICE)
    clock.advance()
    second = await repository.create(fake.sentence(nb_words=3), None, ALICE)

    assert [t.id for t in await repository.fetch_all(ALICE)] == [second, first]


@pytest.mark.asyncio
async def test_create_write_failure_raises_persistence_error(repository, store, monkeypatch):
    monkeypatch.setattr(store, "create", AsyncMock(side_effect=TimeoutError("write timed out")))

    with pytest.raises(PersistenceError) as excinfo:
        await repository.create("Buy milk", "Work", ALICE)
    assert excinfo.value.operation == "create"


# ═══════════════════════════════════════════════════════
# UPDATE
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_update_status_round_trip(repository, seeded):
    before = await repository.get(seeded["alice_new"], ALICE)

    await repository.update_status(before, "started")

    after = await repository.get(seeded["alice_new"], ALICE)
    assert after.status is TaskStatus.STARTED
    assert after.model_dump(exclude={"status"}) == before.model_dump(exclude={"status"})


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(repository, seeded, store, monkeypatch):
    update = AsyncMock(wraps=store.update)
    monkeypatch.setattr(store, "update", update)

    with pytest.raises(ValidationError):
        await repository.update_status(seeded["alice_new"], "archived")
    update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_fields_with_blank_title_keeps_stored_title(repository, seeded):
    with pytest.raises(ValidationError):
        await repository.update_fields(seeded["alice_mid"], "", "desc")

    task = await repository.get(seeded["alice_mid"], ALICE)
    assert task.title == "Quarterly report"
    assert task.description == "Q1 numbers"


@pytest.mark.asyncio
async def test_update_fields_trims_both_fields(repository, seeded):
    await repository.update_fields(seeded["alice_mid"], "  Annual report ", "  FY numbers\n")

    task = await repository.get(seeded["alice_mid"], ALICE)
    assert task.title == "Annual report"
    assert task.description == "FY numbers"
    assert task.status is TaskStatus.STARTED


@pytest.mark.asyncio
async def test_update_missing_task_is_not_found(repository):
    with pytest.raises(TaskNotFoundError):
        await repository.update_fields("missing", "Title", "")


@pytest.mark.asyncio
async def test_update_write_failure_raises_persistence_error(repository, seeded, store, monkeypatch):
    monkeypatch.setattr(store, "update", AsyncMock(side_effect=ConnectionError("reset")))

    with pytest.raises(PersistenceError) as excinfo:
        await repository.update_status(seeded["alice_new"], TaskStatus.COMPLETED)
    assert excinfo.value.task_id == seeded["alice_new"]


# ═══════════════════════════════════════════════════════
# DELETE
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_deleted_task_never_comes_back(repository, seeded, store):
    await repository.delete(seeded["alice_mid"])

    assert seeded["alice_mid"] not in store
    assert seeded["alice_mid"] not in {t.id for t in await repository.fetch_all(ALICE)}
    assert seeded["alice_mid"] not in {t.id for t in await repository.fetch_all(BOB)}


@pytest.mark.asyncio
async def test_deleting_a_missing_task_is_a_no_op(repository, seeded, store):
    await repository.delete("missing")
    assert len(store) == len(seeded)
