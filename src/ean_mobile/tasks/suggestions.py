"""Destination suggestions for the contents of a search box."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, List, Optional, Protocol, Sequence

from ean_mobile.destinations.destination import Destination
from ean_mobile.services.errors import RedirectError, ServiceError

from .coordinator import CancellationToken, RequestCoordinator, TrackedRequest

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 6


class DestinationLookup(Protocol):
    async def lookup_destinations(self, query: str) -> List[Destination]:
        ...


class SuggestionPresenter(Protocol):
    def replace_all(self, destinations: Sequence[Destination]) -> None:
        ...


@dataclass(frozen=True)
class SuggestionQuery:
    text: str
    limit: int


def select_cities(destinations: Iterable[Destination], limit: int) -> List[Destination]:
    """Keep the first ``limit`` city destinations, preserving order."""
    return list(islice((destination for destination in destinations if destination.is_city), max(limit, 0)))


class SuggestionPipeline:
    """Keeps a presenter in sync with suggestions for the latest query."""

    def __init__(
        self,
        lookup: DestinationLookup,
        presenter: SuggestionPresenter,
        *,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        self._lookup = lookup
        self._presenter = presenter
        self._limit = limit
        self.coordinator: RequestCoordinator[SuggestionQuery, Optional[List[Destination]]] = RequestCoordinator(
            self._fetch,
            self._publish,
            name="destination-suggestion",
        )

    def suggest(self, query: str, limit: Optional[int] = None) -> TrackedRequest:
        """Request suggestions for ``query``; any older request is abandoned."""
        return self.coordinator.start(SuggestionQuery(text=query, limit=self._limit if limit is None else limit))

    def close(self) -> None:
        self.coordinator.kill_current()

    async def _fetch(self, query: SuggestionQuery, token: CancellationToken) -> Optional[List[Destination]]:
        try:
            destinations = await self._lookup.lookup_destinations(query.text)
        except ServiceError as exc:
            logger.debug("The API call returned an error for '%s': %s", query.text, exc)
            return None
        except RedirectError as exc:
            logger.warning("The API call has been unexpectedly redirected: %s", exc)
            return None
        if token.cancelled:
            return None
        return select_cities(destinations, query.limit)

    def _publish(self, destinations: Optional[List[Destination]]) -> None:
        if destinations is None:
            return
        logger.debug("Publishing %s suggestions", len(destinations))
        self._presenter.replace_all(destinations)
