"""Reporting-period resolver.

Derives the start/end window of the declaration from employee period and
salary dates, discarding historical outliers (birth dates leaking into period
fields, decades-old contracts). Never raises.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable, Optional

from dsnreport.models.answers import ReportingPeriod
from dsnreport.models.dsn_record import DsnEmployee

logger = logging.getLogger(__name__)

DSN_DATE_REGEX = re.compile(r"^\d{8}$")

# Used when no employee carries a single parseable date.
DEFAULT_FALLBACK_YEAR = 2025
REASONABLE_YEARS_BACK = 5
REASONABLE_YEARS_AHEAD = 1


def parse_dsn_date(value: Optional[str]) -> Optional[date]:
    """``YYYYMMDD`` -> date; None for anything else, impossible dates included."""
    if not value or not DSN_DATE_REGEX.match(value):
        return None
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:8]))
    except ValueError:
        return None


def calendar_year(year: int) -> ReportingPeriod:
    return ReportingPeriod(start_date=date(year, 1, 1), end_date=date(year, 12, 31))


DEFAULT_REPORTING_PERIOD = calendar_year(DEFAULT_FALLBACK_YEAR)


def collect_period_dates(employees: Iterable[DsnEmployee]) -> list[date]:
    dates: list[date] = []
    for emp in employees:
        for raw in (emp.period.period_start, emp.period.period_end, emp.salary.period_start):
            parsed = parse_dsn_date(raw)
            if parsed is not None:
                dates.append(parsed)
    return dates


def resolve_reporting_period(
    employees: Iterable[DsnEmployee], today: Optional[date] = None,
) -> ReportingPeriod:
    all_dates = collect_period_dates(employees)
    if not all_dates:
        logger.warning("No period dates found, using %d fallback", DEFAULT_FALLBACK_YEAR)
        return DEFAULT_REPORTING_PERIOD

    current_year = (today or date.today()).year
    reasonable = sorted(
        d for d in all_dates
        if current_year - REASONABLE_YEARS_BACK <= d.year <= current_year + REASONABLE_YEARS_AHEAD
    )
    if not reasonable:
        logger.warning("No reasonable dates found, using current year (%d) fallback", current_year)
        return calendar_year(current_year)

    period = ReportingPeriod(start_date=reasonable[0], end_date=reasonable[-1])
    logger.info(
        "Detected reporting period: %s to %s",
        period.start_date.strftime("%d/%m/%Y"), period.end_date.strftime("%d/%m/%Y"),
    )
    return period
