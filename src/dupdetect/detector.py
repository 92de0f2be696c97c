# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Duplicate detection orchestration across a bounded worker pool."""

import concurrent.futures
import logging
import time
from dataclasses import dataclass

from dupdetect.bucketing import build_buckets, filter_candidates
from dupdetect.classifier import DuplicationClassifier
from dupdetect.clustering import (
    ClusteringEngine,
    ClusteringError,
    DetectionContext,
    DetectionStats,
)
from dupdetect.config import DetectionConfig
from dupdetect.model import DuplicateGroup, MethodRecord
from dupdetect.prefilter import PreFilter
from dupdetect.similarity import SimilarityScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionResult:
    """Represent the outcome of one detection run.

    Attributes:
        groups: Labeled duplicate groups in bucket order.
        stats: Work counters collected during the run.
        candidate_count: Records left after the minimum length filter.
    """

    groups: list[DuplicateGroup]
    stats: DetectionStats
    candidate_count: int


class DuplicateDetector:
    """Find and classify groups of similar methods."""

    def __init__(
        self,
        config: DetectionConfig | None = None,
        scorer: SimilarityScorer | None = None,
        classifier: DuplicationClassifier | None = None,
    ) -> None:
        """Initialize detector.

        Args:
            config: Run configuration; defaults to ``DetectionConfig()``.
            scorer: Pairwise scorer; defaults to ``SimilarityScorer()``.
            classifier: Group classifier; defaults to the standard rule chain.
        """
        self._config = config or DetectionConfig()
        self._scorer = scorer or SimilarityScorer()
        self._classifier = classifier or DuplicationClassifier()

    @property
    def config(self) -> DetectionConfig:
        return self._config

    def find_duplicates(self, records: list[MethodRecord]) -> list[DuplicateGroup]:
        """Return labeled duplicate groups for the given records."""
        return self.run(records).groups

    def run(self, records: list[MethodRecord]) -> DetectionResult:
        """Run one full detection pass.

        Args:
            records: Extracted method records in caller order.

        Returns:
            Labeled groups together with run statistics.

        Raises:
            ClusteringError: If any bucket worker fails.
        """
        config = self._config
        logger.info(
            f"Finding similar methods (threshold={config.similarity_threshold} "
            f"threads={config.max_parallel_threads})"
        )
        started_at = time.monotonic()
        context = DetectionContext.from_config(config)

        candidates = filter_candidates(records, config.min_method_length)
        logger.info(
            f"Analyzing methods (candidates={len(candidates)} total={len(records)})"
        )
        if len(candidates) < 2:
            logger.info("Not enough methods to analyze for duplicates")
            return DetectionResult(
                groups=[], stats=context.stats, candidate_count=len(candidates)
            )

        buckets = build_buckets(candidates, config.length_band_width)
        prefilter = (
            PreFilter(
                length_difference_threshold=config.length_difference_threshold,
                max_parameter_difference=config.max_parameter_difference,
            )
            if config.enable_early_filtering
            else None
        )
        engine = ClusteringEngine(
            scorer=self._scorer, config=config, prefilter=prefilter
        )
        work_units = [bucket for bucket in buckets.values() if len(bucket) > 1]
        logger.debug(
            f"Scheduling bucket workers (buckets={len(buckets)} "
            f"units={len(work_units)})"
        )

        unlabeled = self._run_units(engine, work_units, candidates, context)
        groups = [self._classifier.label(group) for group in unlabeled]

        elapsed_ms = int((time.monotonic() - started_at) * 1000)
        logger.info(
            f"Duplicate detection completed (groups={len(groups)} "
            f"scored_pairs={context.stats.scored_pairs} "
            f"skipped_pairs={context.stats.skipped_pairs} elapsed_ms={elapsed_ms})"
        )
        return DetectionResult(
            groups=groups, stats=context.stats, candidate_count=len(candidates)
        )

    def _run_units(
        self,
        engine: ClusteringEngine,
        work_units: list[list[MethodRecord]],
        candidates: list[MethodRecord],
        context: DetectionContext,
    ) -> list[DuplicateGroup]:
        """Cluster every bucket on the worker pool and merge in bucket order."""
        if not work_units:
            return []
        groups: list[DuplicateGroup] = []
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._config.max_parallel_threads
        ) as executor:
            futures = [
                executor.submit(engine.cluster_bucket, bucket, candidates, context)
                for bucket in work_units
            ]
            for future in futures:
                try:
                    groups.extend(future.result())
                except Exception as exc:
                    logger.error(f"Bucket clustering failed (error={exc})")
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise ClusteringError("Bucket clustering failed.") from exc
        return groups
