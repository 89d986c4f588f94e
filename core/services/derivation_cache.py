from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Callable, Hashable, Tuple, TypeVar

T = TypeVar("T")

_MISSING = object()


class DerivationCache:
    """
    Memoizes market-view derivations.

    Keys are small identity tuples (view name, pair key, account). The cache is
    bound to one records snapshot: as soon as a caller asks with a different
    source object or different generations, every entry is dropped. None results
    (pair not ready) are cached like any other value.
    """

    def __init__(self, *, max_entries: int = 256, logger: logging.Logger | None = None):
        self._max_entries = max(1, int(max_entries))
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._generations: Tuple[int, ...] | None = None
        # held, not just its id(), so the identity cannot be reused by a new snapshot
        self._source: Any = None
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def generations(self) -> Tuple[int, ...] | None:
        return self._generations

    def get_or_compute(
        self,
        key: Hashable,
        generations: Tuple[int, ...],
        compute: Callable[[], T],
        source: Any = None,
    ) -> T:
        generations = tuple(generations)
        if generations != self._generations or source is not self._source:
            if self._entries:
                self._logger.debug(
                    "Invalidating %s cached views: generations %s -> %s",
                    len(self._entries),
                    self._generations,
                    generations,
                )
            self._entries.clear()
            self._generations = generations
            self._source = source

        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            self._entries.move_to_end(key)
            self.hits += 1
            return value

        self.misses += 1
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return value
