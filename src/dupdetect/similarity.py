# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Pairwise similarity scoring for method records."""

import logging
from collections import Counter

import Levenshtein

from dupdetect.model import MethodRecord, SimilarityScore
from dupdetect.normalizer import (
    extract_content_tokens,
    extract_parameter_types,
    extract_return_type,
    normalize_body,
)

logger = logging.getLogger(__name__)

STRUCTURAL_WEIGHT = 0.5
CONTENT_WEIGHT = 0.3
SIGNATURE_WEIGHT = 0.2
RETURN_TYPE_WEIGHT = 0.3
PARAMETER_WEIGHT = 0.7
LARGE_BODY_THRESHOLD = 1000


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def edit_similarity(left: str, right: str) -> float:
    """Return ``1 - levenshtein / max(len)``; two empty strings score 1.0."""
    max_length = max(len(left), len(right))
    if max_length == 0:
        return 1.0
    distance = Levenshtein.distance(left, right)
    return _clamp(1.0 - distance / max_length)


def frequency_similarity(left: str, right: str) -> float:
    """Approximate edit similarity from character histograms in linear time.

    Args:
        left: First normalized body.
        right: Second normalized body.

    Returns:
        ``1 - sum(|count_left(c) - count_right(c)|) / (2 * max(len))``.
    """
    max_length = max(len(left), len(right))
    if max_length == 0:
        return 1.0
    left_counts = Counter(left)
    right_counts = Counter(right)
    total_diff = sum(
        abs(left_counts[char] - right_counts[char])
        for char in left_counts.keys() | right_counts.keys()
    )
    return _clamp(1.0 - total_diff / (2.0 * max_length))


def jaccard_similarity(left: frozenset[str], right: frozenset[str]) -> float:
    if not left and not right:
        return 1.0
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def parameter_similarity(left: tuple[str, ...], right: tuple[str, ...]) -> float:
    """Return the fraction of positions holding the same parameter type.

    Lists of different lengths score 0.0 and two empty lists score 1.0.
    """
    if len(left) != len(right):
        return 0.0
    if not left:
        return 1.0
    matching = sum(
        1 for left_type, right_type in zip(left, right) if left_type == right_type
    )
    return matching / len(left)


class SimilarityScorer:
    """Score method pairs by structure, content and signature."""

    def __init__(self, large_body_threshold: int = LARGE_BODY_THRESHOLD) -> None:
        """Initialize scorer.

        Args:
            large_body_threshold: Normalized body length above which structural
                similarity switches to the character histogram approximation.
        """
        self._large_body_threshold = large_body_threshold

    def score(self, left: MethodRecord, right: MethodRecord) -> float:
        """Return the weighted similarity of two records in [0.0, 1.0]."""
        return self.breakdown(left, right).total

    def breakdown(self, left: MethodRecord, right: MethodRecord) -> SimilarityScore:
        """Compute all sub-scores and their weighted total.

        Args:
            left: First record.
            right: Second record.

        Returns:
            Structural, content and signature sub-scores with the clamped
            weighted total.
        """
        structural = self.structural(left, right)
        content = self.content(left, right)
        signature = self.signature(left, right)
        total = _clamp(
            STRUCTURAL_WEIGHT * structural
            + CONTENT_WEIGHT * content
            + SIGNATURE_WEIGHT * signature
        )
        return SimilarityScore(
            structural=structural,
            content=content,
            signature=signature,
            total=total,
        )

    def structural(self, left: MethodRecord, right: MethodRecord) -> float:
        left_body = normalize_body(left.body)
        right_body = normalize_body(right.body)
        if (
            len(left_body) > self._large_body_threshold
            or len(right_body) > self._large_body_threshold
        ):
            return frequency_similarity(left_body, right_body)
        return edit_similarity(left_body, right_body)

    def content(self, left: MethodRecord, right: MethodRecord) -> float:
        return jaccard_similarity(
            extract_content_tokens(left.body), extract_content_tokens(right.body)
        )

    def signature(self, left: MethodRecord, right: MethodRecord) -> float:
        """Compare lower-cased return clauses and positional parameter types."""
        left_signature = left.signature.lower()
        right_signature = right.signature.lower()
        same_return = extract_return_type(left_signature) == extract_return_type(
            right_signature
        )
        return_match = 1.0 if same_return else 0.0
        params = parameter_similarity(
            extract_parameter_types(left_signature),
            extract_parameter_types(right_signature),
        )
        return RETURN_TYPE_WEIGHT * return_match + PARAMETER_WEIGHT * params
