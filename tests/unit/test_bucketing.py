# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from dupdetect.bucketing import bucket_key, build_buckets, filter_candidates
from dupdetect.prefilter import PreFilter


def test_bucket_001_filter_candidates_drops_short_bodies_in_order(make_record) -> None:
    long_a = make_record("x" * 60, method_name="a")
    short = make_record("return 0;", method_name="b")
    long_b = make_record("y" * 50, method_name="c")

    assert filter_candidates([long_a, short, long_b], min_method_length=50) == [
        long_a,
        long_b,
    ]


def test_bucket_002_key_combines_parameter_count_and_length_band(make_record) -> None:
    record = make_record("z" * 250, signature="public int add(int a, int b)")

    assert bucket_key(record) == (2, 2)
    assert bucket_key(record, band_width=50) == (2, 5)


def test_bucket_003_buckets_keep_insertion_order(make_record) -> None:
    first = make_record("a" * 120, signature="void f(int a)")
    other = make_record("b" * 120, signature="void g()")
    second = make_record("c" * 150, signature="void h(String s)")
    far = make_record("d" * 320, signature="void k(String s)")

    buckets = build_buckets([first, other, second, far])

    assert list(buckets) == [(1, 1), (0, 1), (1, 3)]
    assert buckets[(1, 1)] == [first, second]
    assert buckets[(0, 1)] == [other]
    assert buckets[(1, 3)] == [far]


def test_prefilter_001_skips_large_relative_length_difference(make_record) -> None:
    prefilter = PreFilter()
    short = make_record("a" * 100)
    close = make_record("b" * 150)
    far = make_record("c" * 201)

    assert prefilter.should_skip(short, close) is False
    assert prefilter.should_skip(short, far) is True
    assert prefilter.should_skip(far, short) is True


def test_prefilter_002_skips_large_parameter_count_difference(make_record) -> None:
    prefilter = PreFilter()
    none = make_record("a" * 100, signature="void f()")
    two = make_record("b" * 100, signature="void f(int a, int b)")
    three = make_record("c" * 100, signature="void f(int a, int b, int c)")

    assert prefilter.should_skip(none, two) is False
    assert prefilter.should_skip(none, three) is True


def test_prefilter_003_cutoffs_are_configurable(make_record) -> None:
    strict = PreFilter(length_difference_threshold=0.1, max_parameter_difference=0)
    base = make_record("a" * 100, signature="void f(int a)")
    longer = make_record("b" * 120, signature="void f(int a)")
    more_params = make_record("c" * 100, signature="void f(int a, int b)")

    assert strict.should_skip(base, longer) is True
    assert strict.should_skip(base, more_params) is True


def test_prefilter_004_empty_bodies_are_not_skipped_for_length(make_record) -> None:
    prefilter = PreFilter()

    assert prefilter.should_skip(make_record(""), make_record("")) is False


def test_prefilter_005_comment_padding_does_not_count_as_length(make_record) -> None:
    prefilter = PreFilter()
    code = "{ total = compute(values, offset); store(total); }" * 2
    padded = make_record(code + " /* " + "note " * 60 + "*/\n" + " " * 80)

    assert padded.method_length > 3 * len(code)
    assert prefilter.should_skip(make_record(code), padded) is False
