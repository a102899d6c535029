"""BDD step definitions for pipeline features."""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from pihole_statsd.adapters.transport.in_memory import InMemoryTransport
from pihole_statsd.core.dispatch import Dispatcher
from pihole_statsd.core.errors import FetchError
from pihole_statsd.core.flatten import EXCLUDED_KEYS, GRAVITY_KEY
from pihole_statsd.core.pipeline import StatsPipeline


class _ScenarioSource:
    def __init__(self, ctx: "PipelineScenarioContext") -> None:
        self._ctx = ctx

    async def fetch(self) -> str:
        if self._ctx.fetch_error is not None:
            raise self._ctx.fetch_error
        if self._ctx.raw_body is not None:
            return self._ctx.raw_body
        return json.dumps(self._ctx.document)


class _ListSink:
    def __init__(self) -> None:
        self.payloads: list[str] = []

    def write(self, payload: str) -> None:
        self.payloads.append(payload)


@dataclass
class PipelineScenarioContext:
    """Shared state between steps in a pipeline scenario."""

    document: dict[str, Any] = field(default_factory=dict)
    raw_body: str | None = None
    fetch_error: Exception | None = None
    debug: bool = False
    transport: InMemoryTransport = field(default_factory=InMemoryTransport)
    sink: _ListSink = field(default_factory=_ListSink)


@pytest.fixture
def ctx() -> PipelineScenarioContext:
    """Fresh scenario context for each test."""
    return PipelineScenarioContext()


# === Given ===
@given("a capturing metrics transport")
def step_transport(ctx: PipelineScenarioContext) -> None:
    ctx.transport = InMemoryTransport()


@given(parsers.parse('a status document with "{key}" = {value:d}'))
def step_document_field(ctx: PipelineScenarioContext, key: str, value: int) -> None:
    ctx.document[key] = value


@given(
    parsers.parse(
        "a status document with gravity age {days:d} days {hours:d} hours "
        "{minutes:d} minutes"
    )
)
def step_gravity_age(
    ctx: PipelineScenarioContext, days: int, hours: int, minutes: int
) -> None:
    ctx.document[GRAVITY_KEY] = {
        "file_exists": True,
        "absolute": 1702300000,
        "relative": {"days": days, "hours": hours, "minutes": minutes},
    }


@given("a status document with only excluded fields")
def step_excluded_only(ctx: PipelineScenarioContext) -> None:
    ctx.document = {key: 1 for key in sorted(EXCLUDED_KEYS)}


@given("debug mode is enabled")
def step_debug(ctx: PipelineScenarioContext) -> None:
    ctx.debug = True


@given("the status endpoint is unreachable")
def step_unreachable(ctx: PipelineScenarioContext) -> None:
    ctx.fetch_error = FetchError("http://pi.hole/admin/api.php", "connection refused")


@given(parsers.parse('the status endpoint answers "{body}"'))
def step_raw_body(ctx: PipelineScenarioContext, body: str) -> None:
    ctx.raw_body = body


# === When ===
@when("one tick runs")
def step_run_tick(ctx: PipelineScenarioContext) -> None:
    dispatcher = Dispatcher(ctx.transport, ctx.sink, debug=ctx.debug)
    pipeline = StatsPipeline(_ScenarioSource(ctx), dispatcher)
    asyncio.run(pipeline.run_once())


# === Then ===
@then("one datagram is sent")
def step_one_datagram(ctx: PipelineScenarioContext) -> None:
    assert len(ctx.transport.payloads) == 1


@then("no datagram is sent")
def step_no_datagram(ctx: PipelineScenarioContext) -> None:
    assert ctx.transport.payloads == []


@then(parsers.parse('the datagram contains "{line}"'))
def step_datagram_contains(ctx: PipelineScenarioContext, line: str) -> None:
    assert line in ctx.transport.lines()


@then(parsers.parse('the diagnostic sink receives "{line}"'))
def step_sink_receives(ctx: PipelineScenarioContext, line: str) -> None:
    assert ctx.sink.payloads == [line]
