"""Unit tests for class filter parsing."""

import pytest

from pipeline_adapters.coverage.filters import InvalidClassFilterError, apply_filter_pattern, extract_filters


def test_extract_filters_splits_includes_and_excludes():
    filters = extract_filters("+com.acme.*,-com.acme.Main, -com.acme.gen.*")

    assert filters.include_filter == "com.acme.*"
    assert filters.exclude_filter == "com.acme.Main:com.acme.gen.*"


@pytest.mark.parametrize("class_filter", [None, "", "   "])
def test_extract_filters_blank_means_no_filtering(class_filter):
    filters = extract_filters(class_filter)

    assert filters.include_filter == ""
    assert filters.exclude_filter == ""


@pytest.mark.parametrize("class_filter", ["com.acme.*", "+", "+com.acme.*,,-x", "*com.acme"])
def test_extract_filters_rejects_malformed_entries(class_filter):
    with pytest.raises(InvalidClassFilterError, match="Invalid class filter"):
        extract_filters(class_filter)


def test_apply_filter_pattern_package_wildcard_becomes_recursive_glob():
    assert apply_filter_pattern("com.foo.*") == ["'com/foo/**'"]


def test_apply_filter_pattern_class_becomes_exact_match():
    assert apply_filter_pattern("com.foo.Bar") == ["'com/foo/Bar.class'"]


def test_apply_filter_pattern_name_wildcard_keeps_prefix_match():
    assert apply_filter_pattern("com.foo.Bar*") == ["'com/foo/Bar*/**'"]


def test_apply_filter_pattern_skips_empty_tokens():
    assert apply_filter_pattern(" com.foo.*::com.foo.Bar: ") == ["'com/foo/**'", "'com/foo/Bar.class'"]


@pytest.mark.parametrize("filter_expr", [None, "", "  "])
def test_apply_filter_pattern_blank_yields_nothing(filter_expr):
    assert apply_filter_pattern(filter_expr) == []
