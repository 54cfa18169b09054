"""Tests for generation requests and stale-response handling."""

import asyncio
import threading

from schema_studio.llm.schema_generator import SchemaGenerationError
from schema_studio.session import SchemaSession
from schema_studio.sync import SyncController

SLOW_SQL = "CREATE TABLE Slow (id INT);"
FAST_SQL = "CREATE TABLE Fast (id INT);"


def test_generated_sql_reaches_controller(scheduler, example_sql: str) -> None:
    session = SchemaSession(SyncController(scheduler), lambda prompt: example_sql)

    result = asyncio.run(session.generate("a blog"))

    assert result == example_sql
    assert session.controller.text == example_sql
    assert [n.id for n in session.controller.diagram.nodes] == ["User", "Post"]
    assert session.error is None
    assert session.is_loading is False


def test_superseded_generation_is_discarded(scheduler) -> None:
    release = threading.Event()

    def generator(prompt: str) -> str:
        if prompt == "slow":
            release.wait(5)
            return SLOW_SQL
        return FAST_SQL

    session = SchemaSession(SyncController(scheduler), generator)

    async def scenario():
        slow = asyncio.create_task(session.generate("slow"))
        await asyncio.sleep(0)
        fast = await session.generate("fast")
        release.set()
        return fast, await slow

    fast, slow = asyncio.run(scenario())

    assert fast == FAST_SQL
    assert slow is None
    assert session.controller.text == FAST_SQL


def test_closed_session_discards_result(scheduler) -> None:
    session = SchemaSession(SyncController(scheduler), lambda prompt: FAST_SQL)

    async def scenario():
        task = asyncio.create_task(session.generate("x"))
        await asyncio.sleep(0)
        session.close()
        return await task

    assert asyncio.run(scenario()) is None
    assert session.closed
    assert session.controller.text == ""


def test_generation_error_is_surfaced(scheduler, example_sql: str) -> None:
    def failing(prompt: str) -> str:
        raise SchemaGenerationError("No content received from model", "NO_CONTENT")

    controller = SyncController(scheduler, example_sql)
    session = SchemaSession(controller, failing)

    assert asyncio.run(session.generate("x")) is None
    assert session.error == "No content received from model"
    assert session.is_loading is False
    assert controller.text == example_sql


def test_generated_sql_is_pushed_to_text_view(scheduler, example_sql: str) -> None:
    seen: list[str] = []
    controller = SyncController(scheduler, on_text_change=seen.append)
    session = SchemaSession(controller, lambda prompt: example_sql)

    asyncio.run(session.generate("blog"))

    assert seen == [example_sql]
    assert [n.id for n in controller.diagram.nodes] == ["User", "Post"]
    scheduler.run_ready()
    assert controller.text == example_sql
    assert len(controller.diagram.edges) == 1
