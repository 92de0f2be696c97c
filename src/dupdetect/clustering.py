# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Star clustering of similar method records."""

import logging
import threading
from dataclasses import dataclass, field
from itertools import chain, combinations

from dupdetect.cache import SimilarityCache
from dupdetect.config import DetectionConfig
from dupdetect.model import DuplicateGroup, MethodRecord
from dupdetect.prefilter import PreFilter
from dupdetect.similarity import SimilarityScorer

logger = logging.getLogger(__name__)


class ClusteringError(RuntimeError):
    """Represent a failed clustering run."""


class ClaimRegistry:
    """Track records already assigned to a group, shared by all workers."""

    def __init__(self) -> None:
        self._claimed: set[MethodRecord] = set()
        self._lock = threading.Lock()

    def try_claim(self, record: MethodRecord) -> bool:
        """Atomically claim a record.

        Args:
            record: Record to claim.

        Returns:
            ``True`` if this call claimed the record, ``False`` if it was
            already claimed.
        """
        with self._lock:
            if record in self._claimed:
                return False
            self._claimed.add(record)
            return True

    def try_claim_pair(self, first: MethodRecord, second: MethodRecord) -> bool:
        """Atomically claim two records, or neither if either is taken.

        Args:
            first: Founding record of a new group.
            second: Its first matching candidate.

        Returns:
            ``True`` if both records were claimed by this call.
        """
        with self._lock:
            if first in self._claimed or second in self._claimed:
                return False
            self._claimed.update((first, second))
            return True

    def is_claimed(self, record: MethodRecord) -> bool:
        with self._lock:
            return record in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)


@dataclass
class DetectionStats:
    """Count the work done during one detection run.

    Attributes:
        scored_pairs: Pair lookups that reached the cache or the scorer.
        skipped_pairs: Pairs rejected by the pre-filter.
        groups_emitted: Groups with at least two members.
        buckets_processed: Buckets handled by a worker.
    """

    scored_pairs: int = 0
    skipped_pairs: int = 0
    groups_emitted: int = 0
    buckets_processed: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def add(
        self,
        scored_pairs: int = 0,
        skipped_pairs: int = 0,
        groups_emitted: int = 0,
        buckets_processed: int = 0,
    ) -> None:
        with self._lock:
            self.scored_pairs += scored_pairs
            self.skipped_pairs += skipped_pairs
            self.groups_emitted += groups_emitted
            self.buckets_processed += buckets_processed


@dataclass
class DetectionContext:
    """Hold the state shared by all workers of a single detection run."""

    cache: SimilarityCache
    claims: ClaimRegistry = field(default_factory=ClaimRegistry)
    stats: DetectionStats = field(default_factory=DetectionStats)

    @classmethod
    def from_config(cls, config: DetectionConfig) -> "DetectionContext":
        return cls(
            cache=SimilarityCache(
                enabled=config.enable_similarity_cache,
                max_size=config.max_cache_size,
            )
        )


class ClusteringEngine:
    """Build star-shaped duplicate groups around founding records.

    Candidates are matched against the founder only. Two non-founding members of
    the same group are not guaranteed to reach the threshold against each other.
    """

    def __init__(
        self,
        scorer: SimilarityScorer,
        config: DetectionConfig,
        prefilter: PreFilter | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            scorer: Pairwise similarity scorer.
            config: Run configuration supplying threshold and sampling sizes.
            prefilter: Optional cheap rejection test; ``None`` scores every pair.
        """
        self._scorer = scorer
        self._config = config
        self._prefilter = prefilter

    def cluster_bucket(
        self,
        bucket: list[MethodRecord],
        all_records: list[MethodRecord],
        context: DetectionContext,
    ) -> list[DuplicateGroup]:
        """Group the unclaimed members of one bucket.

        A founder is claimed atomically together with its first match, so a
        founder that finds nothing stays available to other groups.

        Args:
            bucket: Bucket members in stable order.
            all_records: Every candidate record of the run, for cross-bucket
                matches.
            context: Shared run state.

        Returns:
            Unlabeled groups founded by members of this bucket.
        """
        groups: list[DuplicateGroup] = []
        for index, founder in enumerate(bucket):
            if context.claims.is_claimed(founder):
                continue
            members = [founder]
            in_group = {founder}
            for candidate in chain(bucket[index + 1 :], all_records):
                if candidate in in_group:
                    continue
                if self._try_add(founder, candidate, members, context):
                    in_group.add(candidate)
                elif len(members) == 1 and context.claims.is_claimed(founder):
                    break

            if len(members) < 2:
                continue
            group = DuplicateGroup(
                members=tuple(members),
                similarity_score=self.aggregate_score(members, context),
            )
            groups.append(group)
            logger.info(
                f"Created duplicate group (founder={founder.full_method_name} "
                f"size={group.group_size} score={group.similarity_score:.3f})"
            )
        context.stats.add(groups_emitted=len(groups), buckets_processed=1)
        return groups

    def aggregate_score(
        self, members: list[MethodRecord], context: DetectionContext
    ) -> float:
        """Return the mean pairwise score of a group.

        Groups larger than ``max_group_size_for_full_analysis`` are scored over
        their first ``sample_size_for_large_groups`` members only.

        Args:
            members: Group members, founder first.
            context: Shared run state.

        Returns:
            Mean pairwise score, or 1.0 when there is no pair to compare.
        """
        sample = members
        if len(members) > self._config.max_group_size_for_full_analysis:
            sample = members[: self._config.sample_size_for_large_groups]
        pairs = list(combinations(sample, 2))
        if not pairs:
            return 1.0
        total = sum(self._score(left, right, context) for left, right in pairs)
        return total / len(pairs)

    def _try_add(
        self,
        founder: MethodRecord,
        candidate: MethodRecord,
        members: list[MethodRecord],
        context: DetectionContext,
    ) -> bool:
        if context.claims.is_claimed(candidate):
            return False
        if self._prefilter is not None and self._prefilter.should_skip(
            founder, candidate
        ):
            context.stats.add(skipped_pairs=1)
            return False
        similarity = self._score(founder, candidate, context)
        if similarity < self._config.similarity_threshold:
            return False
        if len(members) == 1:
            claimed = context.claims.try_claim_pair(founder, candidate)
        else:
            claimed = context.claims.try_claim(candidate)
        if not claimed:
            return False
        members.append(candidate)
        logger.debug(
            f"Found similar methods (founder={founder.full_method_name} "
            f"candidate={candidate.full_method_name} similarity={similarity:.3f})"
        )
        return True

    def _score(
        self, left: MethodRecord, right: MethodRecord, context: DetectionContext
    ) -> float:
        context.stats.add(scored_pairs=1)
        return context.cache.get_or_compute(left, right, self._scorer.score)
