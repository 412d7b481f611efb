from __future__ import annotations

import asyncio
from typing import Sequence, Union

import pytest

from ean_mobile.destinations.destination import Category, Destination
from ean_mobile.services.errors import RedirectError, ServiceError
from ean_mobile.tasks.suggestions import SuggestionPipeline, select_cities

SEA_RESULTS = [
    Destination(identifier="1", name="Seattle", category=Category.CITY),
    Destination(identifier="2", name="Searchlight", category=Category.CITY),
    Destination(identifier="3", name="SeaTac Airport", category=Category.AIRPORT),
]


class _FakeLookup:
    def __init__(self, responses: dict[str, Union[list[Destination], Exception]]) -> None:
        self.responses = responses
        self.gates: dict[str, asyncio.Event] = {}
        self.queries: list[str] = []

    async def lookup_destinations(self, query: str) -> list[Destination]:
        self.queries.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        response = self.responses[query]
        if isinstance(response, Exception):
            raise response
        return list(response)


class _RecordingPresenter:
    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def replace_all(self, destinations: Sequence[Destination]) -> None:
        self.calls.append([destination.name for destination in destinations])


@pytest.mark.asyncio
async def test_suggest_publishes_only_cities_up_to_limit() -> None:
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(_FakeLookup({"Sea": SEA_RESULTS}), presenter)

    request = pipeline.suggest("Sea", limit=2)
    await request.wait()

    assert presenter.calls == [["Seattle", "Searchlight"]]


@pytest.mark.asyncio
async def test_suggest_uses_pipeline_limit_by_default() -> None:
    cities = [Destination(identifier=str(i), name=f"City {i}", category=Category.CITY) for i in range(10)]
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(_FakeLookup({"City": cities}), presenter, limit=6)

    request = pipeline.suggest("City")
    await request.wait()

    assert presenter.calls == [[f"City {i}" for i in range(6)]]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        ServiceError("Invalid destination", category="DATA_VALIDATION"),
        RedirectError("http://captive.portal/login", status=302),
    ],
)
async def test_lookup_errors_leave_presenter_untouched(error: Exception) -> None:
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(_FakeLookup({"Sea": SEA_RESULTS, "Se?": error}), presenter)

    await pipeline.suggest("Sea").wait()
    await pipeline.suggest("Se?").wait()

    assert presenter.calls == [["Seattle", "Searchlight"]]


@pytest.mark.asyncio
async def test_only_latest_query_reaches_presenter() -> None:
    lookup = _FakeLookup({"Se": [Destination(identifier="9", name="Sedona", category=Category.CITY)], "Sea": SEA_RESULTS})
    lookup.gates["Se"] = asyncio.Event()
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(lookup, presenter)

    stale = pipeline.suggest("Se")
    await asyncio.sleep(0)
    latest = pipeline.suggest("Sea")
    await latest.wait()
    lookup.gates["Se"].set()
    await stale.wait()

    assert lookup.queries == ["Se", "Sea"]
    assert presenter.calls == [["Seattle", "Searchlight"]]


@pytest.mark.asyncio
async def test_close_discards_pending_suggestions() -> None:
    lookup = _FakeLookup({"Sea": SEA_RESULTS})
    lookup.gates["Sea"] = asyncio.Event()
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(lookup, presenter)

    request = pipeline.suggest("Sea")
    await asyncio.sleep(0)
    pipeline.close()
    lookup.gates["Sea"].set()
    await request.wait()

    assert presenter.calls == []
    assert pipeline.coordinator.is_idle


@pytest.mark.asyncio
async def test_blank_query_supersedes_pending_lookup() -> None:
    lookup = _FakeLookup({"Sea": SEA_RESULTS, "": ServiceError("Destination string is too short")})
    lookup.gates["Sea"] = asyncio.Event()
    presenter = _RecordingPresenter()
    pipeline = SuggestionPipeline(lookup, presenter)

    first = pipeline.suggest("Sea")
    await asyncio.sleep(0)
    blank = pipeline.suggest("")
    await blank.wait()
    lookup.gates["Sea"].set()
    await first.wait()

    assert lookup.queries == ["Sea", ""]
    assert presenter.calls == []
    assert pipeline.coordinator.is_idle


def test_select_cities_handles_non_positive_limits() -> None:
    assert select_cities(SEA_RESULTS, 0) == []
    assert [d.name for d in select_cities(SEA_RESULTS, 10)] == ["Seattle", "Searchlight"]
