# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Cheap rejection test applied before full similarity scoring."""

import logging

from dupdetect.model import MethodRecord
from dupdetect.normalizer import extract_parameter_types, normalize_body

logger = logging.getLogger(__name__)


class PreFilter:
    """Skip pairs whose length or arity differ too much to be similar."""

    def __init__(
        self,
        length_difference_threshold: float = 0.5,
        max_parameter_difference: int = 2,
    ) -> None:
        """Initialize filter cutoffs.

        Args:
            length_difference_threshold: Largest accepted normalized body length
                difference as a fraction of the longer body.
            max_parameter_difference: Largest accepted parameter count difference.
        """
        self._length_difference_threshold = length_difference_threshold
        self._max_parameter_difference = max_parameter_difference

    def should_skip(self, left: MethodRecord, right: MethodRecord) -> bool:
        """Return whether the pair can be rejected without scoring.

        Args:
            left: First record.
            right: Second record.

        Returns:
            ``True`` when the relative difference of the normalized body
            lengths or the parameter count difference exceeds its cutoff.
        """
        left_length = len(normalize_body(left.body))
        right_length = len(normalize_body(right.body))
        max_length = max(left_length, right_length)
        if max_length > 0:
            length_ratio = abs(left_length - right_length) / max_length
            if length_ratio > self._length_difference_threshold:
                return True

        left_params = len(extract_parameter_types(left.signature))
        right_params = len(extract_parameter_types(right.signature))
        return abs(left_params - right_params) > self._max_parameter_difference
