"""Tests for id-ID display formatting."""

from datetime import datetime

from formatting import format_datetime_id, format_idr


class TestFormatIdr:
    def test_groups_thousands_with_dots(self):
        assert format_idr(45000) == "Rp\u00a045.000"
        assert format_idr(1250000) == "Rp\u00a01.250.000"

    def test_small_and_negative(self):
        assert format_idr(0) == "Rp\u00a00"
        assert format_idr(-2500) == "-Rp\u00a02.500"


def test_format_datetime_id():
    assert format_datetime_id(datetime(2026, 1, 5, 8, 7)) == "05 Jan 2026, 08.07"
    assert format_datetime_id(datetime(2026, 8, 17, 23, 59)) == "17 Agu 2026, 23.59"
