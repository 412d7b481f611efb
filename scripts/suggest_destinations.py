"""Print city suggestions for a search query."""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from ean_mobile.config.settings import Settings
from ean_mobile.core.logging import configure_logging
from ean_mobile.destinations.destination import Destination
from ean_mobile.services import EanClient
from ean_mobile.tasks.suggestions import SuggestionPipeline

logger = logging.getLogger(__name__)


class ConsolePresenter:
    def __init__(self) -> None:
        self.destinations: list[Destination] = []

    def replace_all(self, destinations: Sequence[Destination]) -> None:
        self.destinations = list(destinations)


async def run(query: str, limit: Optional[int], settings: Settings) -> list[Destination]:
    presenter = ConsolePresenter()
    async with EanClient(settings) as client:
        pipeline = SuggestionPipeline(client, presenter, limit=settings.suggestion_limit)
        await pipeline.suggest(query, limit).wait()
    return presenter.destinations


def main() -> None:
    parser = argparse.ArgumentParser(description="Suggest destinations for a query")
    parser.add_argument("query")
    parser.add_argument("--limit", type=int, help="Maximum number of cities to show")
    args = parser.parse_args()

    settings = Settings()
    configure_logging(settings.log_level, settings.log_dir)
    destinations = asyncio.run(run(args.query, args.limit, settings))
    if not destinations:
        logger.info("No city suggestions for '%s'", args.query)
    for destination in destinations:
        print(f"{destination.identifier}\t{destination.name}")


if __name__ == "__main__":
    main()
