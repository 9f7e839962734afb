"""
Single-slot snapshot cache.

Memoizes the most recently loaded copy of a collection for a freshness
window. One instance per entity kind; there is no eviction beyond
replacing the slot.
"""

import logging
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Collection = list[dict[str, Any]]


class SnapshotCache:
    """
    Read-through cache holding one snapshot and the time it was taken.

    Attributes:
        ttl: Freshness window in seconds
        snapshot: Cached collection, or None when empty/invalidated
        cached_at: Clock reading when the snapshot was stored (0 = never)
    """

    def __init__(self, ttl: float = 300, clock: Callable[[], float] = time.monotonic, name: str = "cache"):
        self.ttl = ttl
        self.clock = clock
        self.name = name
        self.snapshot: Optional[Collection] = None
        self.cached_at: float = 0.0

    def is_fresh(self) -> bool:
        return self.snapshot is not None and (self.clock() - self.cached_at) < self.ttl

    def read_through(self, loader: Callable[[], Collection]) -> Collection:
        """
        Serve the snapshot while fresh, otherwise reload and store it.

        Exceptions raised by ``loader`` propagate and leave the slot as it was.
        """
        if self.is_fresh():
            logger.debug(f"{self.name}: serving cached snapshot")
            return self.snapshot

        collection = loader()
        self.snapshot = collection
        self.cached_at = self.clock()
        logger.debug(f"{self.name}: snapshot reloaded ({len(collection)} entries)")
        return collection

    def refresh(self, collection: Collection) -> None:
        self.snapshot = list(collection)
        self.cached_at = self.clock()

    def invalidate(self) -> None:
        self.snapshot = None
