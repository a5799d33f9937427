# backend/modules/analytics/services/period_resolver.py

"""
Dashboard period resolution.

Period keys map to date ranges through a lookup table; anything not in
the table resolves to the default period instead of failing, so a
dashboard can always be rendered.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from dateutil.relativedelta import relativedelta

from modules.retail.services.record_store import DateRange
from ..constants import DEFAULT_PERIOD_KEY, TRAILING_MONTHS_FOR_QUARTER
from ..schemas.analytics_schemas import PeriodKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPeriod:
    key: str
    start: datetime
    end: datetime
    requested_key: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.requested_key != self.key

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start, end=self.end)


def _month_start(moment: datetime) -> datetime:
    return datetime(moment.year, moment.month, 1)


def _month_end(moment: datetime) -> datetime:
    """Last instant of the calendar month containing `moment`"""
    return _month_start(moment) + relativedelta(months=1) - timedelta(microseconds=1)


def _current_month(now: datetime) -> Tuple[datetime, datetime]:
    return _month_start(now), _month_end(now)


def _last_3_months(now: datetime) -> Tuple[datetime, datetime]:
    start = _month_start(now) - relativedelta(months=TRAILING_MONTHS_FOR_QUARTER)
    return start, _month_end(now)


PERIOD_RESOLVERS: Dict[str, Callable[[datetime], Tuple[datetime, datetime]]] = {
    PeriodKey.CURRENT_MONTH.value: _current_month,
    PeriodKey.LAST_3_MONTHS.value: _last_3_months,
}


def resolve_period(period_key: Optional[str], now: datetime) -> ResolvedPeriod:
    """Resolve a period key against `now`; unknown keys use the default period"""
    key = period_key if period_key in PERIOD_RESOLVERS else DEFAULT_PERIOD_KEY
    if key != period_key:
        logger.info(f"Unrecognized period '{period_key}', using '{key}'")

    start, end = PERIOD_RESOLVERS[key](now)
    return ResolvedPeriod(key=key, start=start, end=end, requested_key=period_key)
