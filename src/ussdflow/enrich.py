from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from .diagnostics import BuildWarning, WarningKind
from .directory import ScreenDirectory, ScreenSource
from .log import getLogger
from .screens import MenuScreen, RouterScreen, Screen

logger = getLogger(__name__)

T = TypeVar("T")


class RelationEnricher:
    """
    Attach child records (menu items, router options) to the screens that need them.

    - One fetch per MENU / ROUTER screen, all in flight concurrently.
    - Each fetch writes only the relation field of its own screen.
    - A failed fetch leaves the relation absent (``None``); the failure is
      returned as an ``enrichment_failed`` warning keyed by screen name.
    - ``enrich`` returns only once every fetch has settled.
    """

    def __init__(
        self,
        source: ScreenSource,
        *,
        max_concurrency: Optional[int] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._source = source
        self._max_concurrency = max_concurrency
        self._timeout_s = timeout_s

    async def enrich(self, directory: ScreenDirectory) -> list[BuildWarning]:
        screens = [
            s for s in directory.values() if isinstance(s, (MenuScreen, RouterScreen))
        ]
        if not screens:
            return []

        semaphore = (
            asyncio.Semaphore(self._max_concurrency)
            if self._max_concurrency is not None
            else None
        )
        # Children carried in from an earlier build are dropped; only this
        # build's fetch may populate the relation.
        for screen in screens:
            _clear_relation(screen)
        logger.debug("Enriching %d screens (max_concurrency=%s)", len(screens), self._max_concurrency)

        tasks = [self._enrich_one(screen, semaphore) for screen in screens]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        warnings: list[BuildWarning] = []
        for screen, result in zip(screens, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.warning(
                    "Failed to fetch %s for screen %r: %r",
                    _relation_name(screen),
                    screen.name,
                    result,
                )
                warnings.append(
                    BuildWarning(
                        WarningKind.ENRICHMENT_FAILED,
                        screen.name,
                        f"could not fetch {_relation_name(screen)}: {result!r}",
                    )
                )

        logger.info(
            "Enriched %d of %d screens",
            len(screens) - len(warnings),
            len(screens),
        )
        return warnings

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _enrich_one(self, screen: Screen, semaphore: Optional[asyncio.Semaphore]) -> None:
        if isinstance(screen, MenuScreen):
            items = await self._fetch(self._source.fetch_menu_items, screen.name, semaphore)
            screen.menu_items = tuple(items)
        elif isinstance(screen, RouterScreen):
            options = await self._fetch(self._source.fetch_router_options, screen.name, semaphore)
            screen.router_options = tuple(options)

    async def _fetch(
        self,
        fetch: Callable[[str], Awaitable[Sequence[T]]],
        screen_name: str,
        semaphore: Optional[asyncio.Semaphore],
    ) -> Sequence[T]:
        if semaphore is None:
            return await self._with_timeout(fetch(screen_name))
        async with semaphore:
            return await self._with_timeout(fetch(screen_name))

    async def _with_timeout(self, awaitable: Awaitable[Sequence[T]]) -> Sequence[T]:
        if self._timeout_s is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._timeout_s)


def _relation_name(screen: Screen) -> str:
    return "menu items" if isinstance(screen, MenuScreen) else "router options"


def _clear_relation(screen: Screen) -> None:
    if isinstance(screen, MenuScreen):
        screen.menu_items = None
    elif isinstance(screen, RouterScreen):
        screen.router_options = None
