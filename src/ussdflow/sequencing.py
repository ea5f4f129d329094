from __future__ import annotations

"""Latest-wins acceptance of graph builds for callers that refresh on demand."""

from typing import Awaitable, Callable, Generic, Optional, TypeVar

from .log import getLogger

logger = getLogger(__name__)

T = TypeVar("T")


class BuildSequencer(Generic[T]):
    """
    Only the most recently issued build may publish its result.

    Builds can finish out of order; a build that completes after a newer
    one was issued is stale and its result is dropped, so a slow refresh
    never overwrites a fresher graph.

        seq = BuildSequencer()
        view = await seq.run(lambda: build_graph(screens, source))
        if view is not None:
            render(view)
    """

    __slots__ = ("_issued", "_latest")

    def __init__(self) -> None:
        self._issued = 0
        self._latest: Optional[T] = None

    @property
    def latest(self) -> Optional[T]:
        """The most recently accepted result, if any."""
        return self._latest

    def issue(self) -> int:
        """Register a new build and return its ticket."""
        self._issued += 1
        return self._issued

    def is_current(self, ticket: int) -> bool:
        return ticket == self._issued

    def accept(self, ticket: int, result: T) -> bool:
        """
        Publish ``result`` if ``ticket`` is still the newest build.

        Returns False (and keeps the previous result) for stale tickets.
        """
        if not self.is_current(ticket):
            logger.debug("Dropping stale build %d (latest issued %d)", ticket, self._issued)
            return False
        self._latest = result
        return True

    async def run(self, build: Callable[[], Awaitable[T]]) -> Optional[T]:
        """Issue a ticket, await ``build()`` and return its result unless superseded."""
        ticket = self.issue()
        result = await build()
        return result if self.accept(ticket, result) else None
