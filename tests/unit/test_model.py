# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from dupdetect.model import DuplicateGroup, MethodRecord


def _record(body: str, **changes) -> MethodRecord:
    values = {
        "class_name": "OrderService",
        "method_name": "total",
        "signature": "public int total(int[] values)",
        "body": body,
        "file_path": "src/OrderService.java",
        "start_line": 12,
        "end_line": 20,
        "package_name": "com.shop",
    }
    values.update(changes)
    return MethodRecord(**values)


def test_model_001_equality_ignores_body() -> None:
    first = _record("{ return 1; }")
    second = _record("{ return 2; }")

    assert first == second
    assert hash(first) == hash(second)
    assert first.identity == second.identity


def test_model_002_same_body_at_other_location_is_distinct() -> None:
    first = _record("{ return 1; }")
    moved = _record("{ return 1; }", start_line=40, end_line=48)

    assert first != moved
    assert len({first, moved}) == 2


def test_model_003_full_method_name_includes_package_when_present() -> None:
    assert _record("{}").full_method_name == "com.shop.OrderService.total"
    assert _record("{}", package_name="").full_method_name == "OrderService.total"


def test_model_004_method_length_is_raw_body_length() -> None:
    assert _record("{  return 1;  }").method_length == 15


def test_model_005_group_reports_distinct_classes_in_order() -> None:
    group = DuplicateGroup(
        members=(
            _record("{}", class_name="B", start_line=1),
            _record("{}", class_name="A", start_line=2),
            _record("{}", class_name="B", start_line=3),
        ),
        similarity_score=0.8,
    )

    assert group.group_size == 3
    assert group.class_names == ["B", "A"]
    assert group.is_cross_class is True
    assert group.duplication_type is None


def test_model_006_single_class_group_is_not_cross_class() -> None:
    group = DuplicateGroup(
        members=(_record("{}", start_line=1), _record("{}", start_line=5)),
        similarity_score=0.9,
    )

    assert group.is_cross_class is False
