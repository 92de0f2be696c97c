# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import dataclasses
import os

import pytest

from dupdetect.config import DetectionConfig


def test_config_001_defaults() -> None:
    config = DetectionConfig()

    assert config.similarity_threshold == 0.7
    assert config.min_method_length == 50
    assert config.max_parallel_threads == (os.cpu_count() or 1)
    assert config.enable_similarity_cache is True
    assert config.max_cache_size == 10000
    assert config.enable_early_filtering is True
    assert config.length_difference_threshold == 0.5
    assert config.max_parameter_difference == 2
    assert config.max_group_size_for_full_analysis == 10
    assert config.sample_size_for_large_groups == 10
    assert config.length_band_width == 100


def test_config_002_large_project_preset() -> None:
    config = DetectionConfig.for_large_projects()

    assert config.max_parallel_threads >= 4
    assert config.max_cache_size == 20000
    assert config.length_difference_threshold == 0.6
    assert config.similarity_threshold == 0.7


def test_config_003_memory_constrained_preset() -> None:
    config = DetectionConfig.for_memory_constrained()

    assert config.max_parallel_threads == 2
    assert config.enable_similarity_cache is False
    assert config.max_cache_size == 1000


def test_config_004_high_accuracy_preset() -> None:
    config = DetectionConfig.for_high_accuracy()

    assert config.similarity_threshold == 0.6
    assert config.min_method_length == 30
    assert config.max_group_size_for_full_analysis == 20
    assert config.enable_early_filtering is False
    assert config.length_difference_threshold == 0.7


def test_config_005_with_overrides_returns_updated_copy() -> None:
    base = DetectionConfig(max_parallel_threads=1)

    updated = base.with_overrides(similarity_threshold=0.9, max_cache_size=None)

    assert updated.similarity_threshold == 0.9
    assert updated.max_cache_size is None
    assert updated.max_parallel_threads == 1
    assert base.similarity_threshold == 0.7


def test_config_006_is_immutable_and_rejects_unknown_fields() -> None:
    config = DetectionConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.similarity_threshold = 0.1  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.with_overrides(no_such_field=1)
