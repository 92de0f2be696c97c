# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Coarse bucketing of method records to prune pairwise comparisons."""

import logging

from dupdetect.model import MethodRecord
from dupdetect.normalizer import extract_parameter_types

logger = logging.getLogger(__name__)

BucketKey = tuple[int, int]


def filter_candidates(
    records: list[MethodRecord], min_method_length: int
) -> list[MethodRecord]:
    """Drop records whose raw body is shorter than the configured minimum.

    Args:
        records: Input records in caller order.
        min_method_length: Minimum raw body length to keep a record.

    Returns:
        Remaining records in their original order.
    """
    return [record for record in records if record.method_length >= min_method_length]


def bucket_key(record: MethodRecord, band_width: int = 100) -> BucketKey:
    """Return ``(parameter count, body length band)`` for a record."""
    return (
        len(extract_parameter_types(record.signature)),
        record.method_length // band_width,
    )


def build_buckets(
    records: list[MethodRecord], band_width: int = 100
) -> dict[BucketKey, list[MethodRecord]]:
    """Partition records into buckets of probably-similar methods.

    Args:
        records: Candidate records.
        band_width: Body length band width in characters.

    Returns:
        Mapping from bucket key to records; records keep input order inside each
        bucket and buckets appear in order of first occurrence.
    """
    buckets: dict[BucketKey, list[MethodRecord]] = {}
    for record in records:
        buckets.setdefault(bucket_key(record, band_width), []).append(record)
    logger.debug(
        f"Built method buckets (records={len(records)} buckets={len(buckets)})"
    )
    return buckets
