"""
TaskListController: refetch-after-every-change and error retention.
"""
from datetime import date
from unittest.mock import AsyncMock

import pytest

from taskboard.models.task import TaskStatus
from taskboard.tasks.controller import FETCH_ERROR_MESSAGE, TaskListController
from tests.conftest import ALICE


@pytest.fixture
def controller(repository):
    return TaskListController(repository, ALICE)


@pytest.fixture
def counted_reads(store, monkeypatch):
    read_all = AsyncMock(wraps=store.read_all)
    monkeypatch.setattr(store, "read_all", read_all)
    return read_all


@pytest.mark.asyncio
async def test_refresh_loads_the_users_list(controller, seeded):
    tasks = await controller.refresh()

    assert controller.count == 4
    assert tasks[0].id == seeded["alice_new"]
    assert controller.loading is False
    assert controller.error is None


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_list(controller, seeded, store, monkeypatch):
    await controller.refresh()
    previous = list(controller.tasks)

    failing = AsyncMock(side_effect=ConnectionError("offline"))
    monkeypatch.setattr(store, "read_all", failing)
    await controller.refresh()

    assert controller.tasks == previous
    assert controller.error == FETCH_ERROR_MESSAGE
    assert controller.loading is False

    monkeypatch.undo()
    await controller.refresh()
    assert controller.error is None


@pytest.mark.asyncio
async def test_add_task_refetches_exactly_once(controller, counted_reads, clock):
    controller.new_title = "Buy milk"
    controller.new_category = "Work"

    assert await controller.add_task() is True

    assert counted_reads.await_count == 1
    assert controller.new_title == ""
    assert [(t.title, t.category, t.status) for t in controller.tasks] == [
        ("Buy milk", "Work", TaskStatus.NOT_STARTED)
    ]
    assert controller.tasks[0].createdAt == clock.now


@pytest.mark.asyncio
async def test_rejected_add_keeps_draft_and_skips_refetch(controller, counted_reads, store):
    assert await controller.add_task(title="   ") is False

    assert controller.new_title == "   "
    assert counted_reads.await_count == 0
    assert len(store) == 0


@pytest.mark.asyncio
async def test_failed_add_leaves_list_untouched(controller, seeded, store, monkeypatch):
    await controller.refresh()
    before = list(controller.tasks)
    monkeypatch.setattr(store, "create", AsyncMock(side_effect=ConnectionError("offline")))

    assert await controller.add_task(title="Buy milk") is False
    assert controller.tasks == before
    assert controller.new_title == "Buy milk"


@pytest.mark.asyncio
async def test_filter_changes_refetch(controller, seeded, counted_reads):
    await controller.set_filters(status="started")
    assert [t.id for t in controller.tasks] == [seeded["alice_mid"]]

    await controller.set_filters(category="Work")
    assert controller.filters.status is TaskStatus.STARTED
    assert [t.id for t in controller.tasks] == [seeded["alice_mid"]]

    await controller.clear_filters()
    assert controller.count == 4
    assert counted_reads.await_count == 3


@pytest.mark.asyncio
async def test_date_filter_set_and_cleared(controller, seeded):
    await controller.set_date_filter("2024-03-10")
    assert controller.filters.date == date(2024, 3, 10)
    assert [t.id for t in controller.tasks] == [seeded["alice_new"]]

    await controller.clear_date_filter()
    assert controller.filters.date is None
    assert controller.count == 4


@pytest.mark.asyncio
async def test_change_status_and_delete_refetch(controller, seeded):
    await controller.refresh()
    target = controller.tasks[0]

    assert await controller.change_status(target, TaskStatus.COMPLETED) is True
    assert controller.tasks[0].status is TaskStatus.COMPLETED

    assert await controller.delete_task(target.id) is True
    assert target.id not in {t.id for t in controller.tasks}
    assert controller.count == 3


@pytest.mark.asyncio
async def test_editor_save_closes_and_refetches(controller, seeded):
    await controller.refresh()
    editor = controller.open_editor(controller.tasks[0])
    editor.title = "Call the plumber today"

    assert await editor.submit() is True

    assert controller.editor is None
    assert controller.tasks[0].title == "Call the plumber today"


@pytest.mark.asyncio
async def test_reopening_editor_resyncs_draft(controller, seeded):
    await controller.refresh()
    first, second = controller.tasks[0], controller.tasks[1]

    editor = controller.open_editor(first)
    editor.title = "draft"
    same_editor = controller.open_editor(second)

    assert same_editor is editor
    assert editor.title == second.title
