# backend/modules/analytics/tests/test_period_resolver.py

import pytest
from datetime import datetime

from modules.analytics.services.period_resolver import resolve_period


class TestResolvePeriod:
    def test_current_month_covers_whole_month(self):
        period = resolve_period("current_month", datetime(2024, 2, 14, 9, 30))

        assert period.start == datetime(2024, 2, 1)
        assert period.end == datetime(2024, 2, 29, 23, 59, 59, 999999)
        assert not period.is_fallback

    def test_last_3_months_crosses_year_boundary(self):
        period = resolve_period("last_3_months", datetime(2024, 1, 31))

        assert period.start == datetime(2023, 10, 1)
        assert period.end == datetime(2024, 1, 31, 23, 59, 59, 999999)

    def test_december_end(self):
        period = resolve_period("current_month", datetime(2023, 12, 5))

        assert period.end == datetime(2023, 12, 31, 23, 59, 59, 999999)

    @pytest.mark.parametrize("key", ["fortnight", "", None, "CURRENT_MONTH"])
    def test_unknown_keys_use_current_month(self, key):
        period = resolve_period(key, datetime(2024, 6, 10))

        assert period.key == "current_month"
        assert period.start == datetime(2024, 6, 1)
        assert period.is_fallback

    def test_date_range_matches_bounds(self):
        period = resolve_period("last_3_months", datetime(2024, 6, 10))

        assert period.date_range.start == period.start
        assert period.date_range.contains(datetime(2024, 6, 30, 23, 0))
        assert not period.date_range.contains(datetime(2024, 2, 29))
