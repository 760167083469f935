"""
ShipView API — Pagination Window Unit Tests
=============================================

What:  Tests for PaginationWindow.from_query() parsing, defaults and clamps.
"""

import pytest

from shipview_api.schemas.order import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PaginationWindow,
)


class TestPaginationWindow:
    """limit/offset never raise; they fall back or clamp."""

    def test_defaults_when_missing(self):
        window = PaginationWindow.from_query()

        assert window.limit == DEFAULT_LIMIT == 10_000
        assert window.offset == 0

    def test_plain_integers(self):
        window = PaginationWindow.from_query(limit="25", offset="50")

        assert (window.limit, window.offset) == (25, 50)

    @pytest.mark.parametrize("raw", ["abc", "", "  ", "-", "NaN"])
    def test_invalid_limit_falls_back_to_default(self, raw):
        assert PaginationWindow.from_query(limit=raw).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("raw", ["abc", "", "x10"])
    def test_invalid_offset_falls_back_to_zero(self, raw):
        assert PaginationWindow.from_query(offset=raw).offset == 0

    def test_leading_integer_is_used(self):
        window = PaginationWindow.from_query(limit="25abc", offset="10.9")

        assert (window.limit, window.offset) == (25, 10)

    def test_limit_clamped_to_max(self):
        assert PaginationWindow.from_query(limit="999999").limit == MAX_LIMIT == 50_000
        assert PaginationWindow.from_query(limit="50000").limit == MAX_LIMIT

    def test_clamping_is_idempotent(self):
        assert PaginationWindow.from_query(limit="999999") == PaginationWindow.from_query(limit="50000")

    def test_negative_values_clamped_to_zero(self):
        window = PaginationWindow.from_query(limit="-5", offset="-20")

        assert (window.limit, window.offset) == (0, 0)

    def test_zero_limit_is_honoured(self):
        assert PaginationWindow.from_query(limit="0").limit == 0
