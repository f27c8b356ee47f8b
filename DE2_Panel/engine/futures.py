from __future__ import annotations

"""Registry of callbacks waiting for the simulation clock to reach a tick."""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

Future = Callable[[], None]


class FutureRegistry:
    """Map target ticks to the callbacks that should run once reached.

    A callback registered for tick ``k`` runs on the first call to
    :meth:`fire_due` with ``current_tick >= k`` and is then forgotten.
    Callbacks sharing a tick run in registration order.
    """

    def __init__(self) -> None:
        self._buckets: DefaultDict[int, List[Future]] = defaultdict(list)
        # bumped by clear() so an in-progress fire_due stops draining
        self._generation = 0

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __bool__(self) -> bool:
        return bool(self._buckets)

    def pending_ticks(self) -> list[int]:
        """Return the ticks that still have callbacks waiting, ascending."""
        return sorted(self._buckets)

    def schedule(self, when: int, callback: Future) -> None:
        """Run ``callback`` on the first step where the tick is ``>= when``.

        ``when`` may already be in the past; the callback then fires on the
        next step.
        """
        self._buckets[when].append(callback)
        logger.debug("scheduled future for tick %d", when)

    def fire_due(self, current_tick: int) -> int:
        """Run and discard every bucket whose tick is ``<= current_tick``.

        Every due bucket is detached before any callback runs. A callback
        that schedules another future for an already-due tick therefore
        lands in a new bucket, picked up by the next step. Calling
        :meth:`clear` from a callback drops the due buckets not yet run.

        Returns
        -------
        int
            Number of callbacks invoked.
        """

        due = [
            self._buckets.pop(when)
            for when in sorted(self._buckets)
            if when <= current_tick
        ]
        generation = self._generation
        fired = 0
        for bucket in due:
            if self._generation != generation:
                break
            for callback in bucket:
                callback()
                fired += 1
        if fired:
            logger.debug("fired %d future(s) at tick %d", fired, current_tick)
        return fired

    def clear(self) -> None:
        """Drop all pending callbacks without running them."""
        self._buckets.clear()
        self._generation += 1
