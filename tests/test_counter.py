from ceres_lint.counter import format_counts


def test_counts_without_page_size_use_thousands_separators():
    assert format_counts(0) == "0 words"
    assert format_counts(999) == "999 words"
    assert format_counts(1234) == "1,234 words"
    assert format_counts(1234567) == "1,234,567 words"


def test_counts_with_page_size():
    assert format_counts(1234, 500) == "2 pages + 234 words"
    assert format_counts(1000, 500) == "2 pages + 0 words"
    assert format_counts(12, 500) == "0 pages + 12 words"


def test_zero_page_size_is_unset():
    assert format_counts(1234, 0) == "1,234 words"
    assert format_counts(1234, None) == "1,234 words"
