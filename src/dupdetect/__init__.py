# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for duplicate method detection."""

from dupdetect.cache import SimilarityCache
from dupdetect.classifier import ClassificationRule, DuplicationClassifier
from dupdetect.clustering import ClusteringEngine, ClusteringError, DetectionContext
from dupdetect.config import DetectionConfig
from dupdetect.detector import DetectionResult, DuplicateDetector
from dupdetect.model import (
    DuplicateGroup,
    DuplicationType,
    MethodRecord,
    SimilarityScore,
)
from dupdetect.prefilter import PreFilter
from dupdetect.similarity import SimilarityScorer

__all__ = [
    "ClassificationRule",
    "ClusteringEngine",
    "ClusteringError",
    "DetectionConfig",
    "DetectionContext",
    "DetectionResult",
    "DuplicateDetector",
    "DuplicateGroup",
    "DuplicationClassifier",
    "DuplicationType",
    "MethodRecord",
    "PreFilter",
    "SimilarityCache",
    "SimilarityScore",
    "SimilarityScorer",
]
