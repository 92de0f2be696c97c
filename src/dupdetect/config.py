# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Detection run configuration and tuning presets."""

import logging
import os
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)


def _default_parallelism() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class DetectionConfig:
    """Describe all tuning values for one detection run.

    Values are not range-checked. A threshold outside [0.0, 1.0] or a
    non-positive thread count leads to unspecified behavior.

    Attributes:
        similarity_threshold: Inclusive minimum score for joining a group.
        min_method_length: Raw body length below which a record is excluded.
        max_parallel_threads: Worker pool size.
        enable_similarity_cache: Memoize pairwise scores within the run.
        max_cache_size: Maximum number of cached pairs; ``None`` for no limit.
        enable_early_filtering: Apply the length/parameter pre-filter.
        length_difference_threshold: Pre-filter relative body length cutoff.
        max_parameter_difference: Pre-filter parameter count cutoff.
        max_group_size_for_full_analysis: Largest group scored over all pairs.
        sample_size_for_large_groups: Leading members scored for larger groups.
        length_band_width: Body length band width used for bucketing.
    """

    similarity_threshold: float = 0.7
    min_method_length: int = 50
    max_parallel_threads: int = field(default_factory=_default_parallelism)
    enable_similarity_cache: bool = True
    max_cache_size: int | None = 10000
    enable_early_filtering: bool = True
    length_difference_threshold: float = 0.5
    max_parameter_difference: int = 2
    max_group_size_for_full_analysis: int = 10
    sample_size_for_large_groups: int = 10
    length_band_width: int = 100

    @classmethod
    def for_large_projects(cls) -> "DetectionConfig":
        """Return settings tuned for throughput on large code bases."""
        return cls(
            max_parallel_threads=max(4, _default_parallelism()),
            max_cache_size=20000,
            length_difference_threshold=0.6,
        )

    @classmethod
    def for_memory_constrained(cls) -> "DetectionConfig":
        """Return settings that keep the worker pool and cache small."""
        return cls(
            max_parallel_threads=2,
            enable_similarity_cache=False,
            max_cache_size=1000,
        )

    @classmethod
    def for_high_accuracy(cls) -> "DetectionConfig":
        """Return settings that trade speed for recall on smaller projects."""
        return cls(
            similarity_threshold=0.6,
            min_method_length=30,
            max_group_size_for_full_analysis=20,
            enable_early_filtering=False,
            length_difference_threshold=0.7,
        )

    def with_overrides(self, **changes: object) -> "DetectionConfig":
        """Return a copy with the given fields replaced.

        Args:
            **changes: Field names and their new values.

        Returns:
            Updated configuration.
        """
        return replace(self, **changes)
