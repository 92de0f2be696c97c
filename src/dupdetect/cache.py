# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-run memoization of pairwise similarity scores."""

import logging
import threading
from typing import Callable

from dupdetect.model import MethodRecord, RecordIdentity

logger = logging.getLogger(__name__)

PairKey = tuple[RecordIdentity, RecordIdentity]


def pair_key(left: MethodRecord, right: MethodRecord) -> PairKey:
    """Return a cache key that does not depend on argument order."""
    left_id = left.identity
    right_id = right.identity
    if left_id <= right_id:
        return (left_id, right_id)
    return (right_id, left_id)


class SimilarityCache:
    """Thread-safe store of pairwise scores for one detection run."""

    def __init__(self, enabled: bool = True, max_size: int | None = None) -> None:
        """Initialize cache.

        Args:
            enabled: When ``False`` every lookup computes the score.
            max_size: Maximum stored pairs. Once reached, new pairs are computed
                but not stored. ``None`` means unbounded.
        """
        self._enabled = enabled
        self._max_size = max_size
        self._scores: dict[PairKey, float] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get_or_compute(
        self,
        left: MethodRecord,
        right: MethodRecord,
        scorer_fn: Callable[[MethodRecord, MethodRecord], float],
    ) -> float:
        """Return the cached score for a pair, computing it on a miss.

        The score is computed outside the lock, so two workers may compute the
        same pair concurrently. Only the first stored value is ever returned
        afterwards.

        Args:
            left: First record.
            right: Second record.
            scorer_fn: Pure scoring function used on a miss.

        Returns:
            Similarity score for the pair.
        """
        if not self._enabled:
            return scorer_fn(left, right)

        key = pair_key(left, right)
        with self._lock:
            cached = self._scores.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        value = scorer_fn(left, right)
        with self._lock:
            if key in self._scores:
                return self._scores[key]
            if self._max_size is None or len(self._scores) < self._max_size:
                self._scores[key] = value
        return value

    def clear(self) -> None:
        with self._lock:
            self._scores.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)
