"""Concurrent season fan-out used by adapters exposing multi-season shows.

Given a show URL and a known season count K, fetches the episode lists of
seasons 1..K concurrently (bounded by a semaphore), drops seasons without
episodes and returns the rest ordered by season number.

Failure policy is all-or-nothing: the first failing season cancels its
outstanding siblings and the error propagates.  Cancelling the caller
cancels every in-flight season fetch.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import structlog

from resolvarr.domain.entities.media import Episode, Season

from .constants import DEFAULT_MAX_CONCURRENT_SEASONS

log = structlog.get_logger(__name__)

FetchEpisodes = Callable[[int], Awaitable[list[Episode]]]


class SeasonFetchOrchestrator:
    """Bounded fan-out/fan-in of per-season episode fetches."""

    def __init__(self, max_concurrent: int = DEFAULT_MAX_CONCURRENT_SEASONS) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self.max_concurrent = max_concurrent

    async def fetch(
        self,
        show_url: str,
        season_count: int,
        fetch_episodes: FetchEpisodes,
    ) -> list[Season]:
        """Fetch seasons ``1..season_count`` and assemble them in order.

        Args:
            show_url: Owning show URL, stored on every Season.
            season_count: Number of seasons the source reports.
            fetch_episodes: Coroutine function returning the episode list
                for one season number.

        Raises:
            Whatever the first failing ``fetch_episodes`` call raised.
        """
        if season_count <= 0:
            return []

        sem = asyncio.Semaphore(self.max_concurrent)

        async def _fetch_one(number: int) -> list[Episode]:
            async with sem:
                return await fetch_episodes(number)

        numbers = list(range(1, season_count + 1))
        failures: list[tuple[int, BaseException]] = []

        def _record_failure(number: int) -> Callable[[asyncio.Task[list[Episode]]], None]:
            # Reading exception() marks it retrieved; callbacks fire in completion order.
            def _done(task: asyncio.Task[list[Episode]]) -> None:
                if not task.cancelled() and task.exception() is not None:
                    failures.append((number, task.exception()))

            return _done

        tasks: list[asyncio.Task[list[Episode]]] = []
        for number in numbers:
            task = asyncio.create_task(_fetch_one(number), name=f"season-{number}")
            task.add_done_callback(_record_failure(number))
            tasks.append(task)

        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if failures:
            number, exc = failures[0]
            log.warning(
                "season_fetch_failed",
                show_url=show_url,
                season=number,
                error_type=type(exc).__name__,
                failed_seasons=sorted(n for n, _ in failures),
                cancelled_siblings=sum(1 for t in tasks if t.cancelled()),
            )
            raise exc

        seasons = [
            Season(number=number, web_url=show_url, episodes=task.result())
            for number, task in zip(numbers, tasks)
            if task.result()
        ]
        log.debug(
            "seasons_fetched",
            show_url=show_url,
            requested=season_count,
            kept=len(seasons),
        )
        return seasons
