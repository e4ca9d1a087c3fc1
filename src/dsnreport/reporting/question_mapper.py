"""DSN -> CSRD S1-6 question mapper.

One pure function per answer, computed from the flat employee list and the
resolved reporting period. A DSN carries one snapshot rather than a full
employment history, so the "average" and "left" figures are approximations
scaled by the ratios below, not day-weighted averages or interval-based
turnover. They are kept as-is so outputs stay comparable with earlier reports.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Callable, Literal, Optional

from dsnreport.core.types import MappedAnswers
from dsnreport.models.answers import ReportingPeriod
from dsnreport.models.dsn_record import DsnEmployee, ParsedDsnData
from dsnreport.reporting.period_resolver import parse_dsn_date, resolve_reporting_period

logger = logging.getLogger(__name__)

# Share of end-of-period employees assumed present on average over the period.
AVERAGE_PRESENCE_RATIO = 0.8
# Share of employees bearing a contract end date assumed to have left.
TURNOVER_RATIO = 0.3

UNKNOWN = "Unknown"
HEADCOUNT_DATA_TYPE = "Head-count"
DATA_TIMING = "At end of period"

Calculation = Literal["end", "average"]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _fmt(d: date) -> str:
    return d.strftime("%d/%m/%Y")


# ---------------------------------------------------------------------------
# Headcount and turnover
# ---------------------------------------------------------------------------

def employees_end_of_period(employees: list[DsnEmployee], period: ReportingPeriod) -> int:
    """Employees with a contract start, a NIR and a family name."""
    return sum(
        1 for emp in employees
        if emp.contract.contract_start_date and emp.personal.nir and emp.personal.family_name
    )


def employees_average(employees: list[DsnEmployee], period: ReportingPeriod) -> int:
    valid = sum(1 for emp in employees if emp.contract.contract_start_date and emp.personal.nir)
    return round_half_up(valid * AVERAGE_PRESENCE_RATIO)


def employees_left(employees: list[DsnEmployee], period: ReportingPeriod) -> int:
    with_end_date = sum(1 for emp in employees if emp.contract.contract_end_date and emp.personal.nir)
    return round_half_up(with_end_date * TURNOVER_RATIO)


def employees_at_start(employees: list[DsnEmployee], period: ReportingPeriod) -> int:
    """Contract started on/before the period start and not ended by then."""
    count = 0
    for emp in employees:
        start = parse_dsn_date(emp.contract.contract_start_date)
        if start is None or start > period.start_date:
            continue
        end = parse_dsn_date(emp.contract.contract_end_date)
        if end is None or end > period.start_date:
            count += 1
    return count


def turnover_percentage(employees: list[DsnEmployee], period: ReportingPeriod) -> float:
    at_start = employees_at_start(employees, period)
    if at_start == 0:
        return 0.0
    left = employees_left(employees, period)
    return math.floor(left / at_start * 100 * 100 + 0.5) / 100


# ---------------------------------------------------------------------------
# Breakdowns
# ---------------------------------------------------------------------------

def _breakdown(
    employees: list[DsnEmployee],
    calculation: Calculation,
    include: Callable[[DsnEmployee], object],
    key: Callable[[DsnEmployee], str],
) -> dict[str, int]:
    valid = [emp for emp in employees if include(emp)]
    if calculation == "average":
        valid = valid[: round_half_up(len(valid) * AVERAGE_PRESENCE_RATIO)]

    counts: dict[str, int] = {}
    for emp in valid:
        k = key(emp)
        counts[k] = counts.get(k, 0) + 1
    return counts


def employees_by_country(
    employees: list[DsnEmployee], period: ReportingPeriod, calculation: Calculation,
) -> dict[str, int]:
    counts = _breakdown(
        employees, calculation,
        include=lambda e: e.personal.nir and e.personal.family_name,
        key=lambda e: e.personal.nationality or e.personal.country_of_residence or UNKNOWN,
    )
    logger.debug("Countries found for %s: %d", calculation, len(counts))
    return counts


def employees_by_contract_gender(
    employees: list[DsnEmployee], period: ReportingPeriod, calculation: Calculation,
) -> dict[str, int]:
    return _breakdown(
        employees, calculation,
        include=lambda e: e.contract.contract_type and e.personal.nir,
        key=lambda e: f"{e.contract.contract_type}-{e.personal.sex or e.contract.sex or UNKNOWN}",
    )


def employees_by_region(
    employees: list[DsnEmployee], period: ReportingPeriod, calculation: Calculation,
) -> dict[str, int]:
    # city stands in for the region
    return _breakdown(
        employees, calculation,
        include=lambda e: e.personal.city and e.personal.nir,
        key=lambda e: e.personal.city or UNKNOWN,
    )


def employees_by_category(
    employees: list[DsnEmployee], period: ReportingPeriod, calculation: Calculation,
) -> dict[str, int]:
    return _breakdown(
        employees, calculation,
        include=lambda e: e.contract.job_title and e.personal.nir,
        key=lambda e: e.contract.job_title or UNKNOWN,
    )


# ---------------------------------------------------------------------------
# Narrative answers
# ---------------------------------------------------------------------------

def contextual_info(parsed: ParsedDsnData, period: ReportingPeriod) -> str:
    info = parsed.company.info
    meta = parsed.metadata
    return (
        f"DSN file data for {info.company_name or 'Unknown Company'} (SIRET: {info.siret or 'N/A'}). "
        f"Data extracted on {meta.parsed_at.date().isoformat()} using {meta.parsing_method} parsing method. "
        f"Contains {meta.total_employees} employees across {meta.total_establishments} establishment(s). "
        f"Reporting period: {_fmt(period.start_date)} to {_fmt(period.end_date)}. "
        "Employee data includes contract dates, personal information, and period-specific employment status."
    )


def financial_relationship(parsed: ParsedDsnData, period: ReportingPeriod) -> str:
    employees = parsed.employees
    active_at_end = employees_end_of_period(employees, period)
    average = employees_average(employees, period)
    left = employees_left(employees, period)
    return (
        f"The {active_at_end} employees active at period end ({_fmt(period.end_date)}) should correspond to "
        "the headcount figures in the company's financial statements for the same reporting period. "
        f"During the period, {left} employees left the company, with an average of {average} employees present. "
        "Any discrepancies may be due to different reporting scopes, timing differences, or classification "
        "differences between DSN social declarations and financial reporting standards."
    )


def map_to_answers(parsed: ParsedDsnData, today: Optional[date] = None) -> MappedAnswers:
    """Compute every supported question answer. Total: never raises on a valid tree."""
    employees = parsed.employees
    period = resolve_reporting_period(employees, today=today)

    return {
        "S1-6_02": employees_end_of_period(employees, period),
        "S1-6_03": employees_average(employees, period),
        "S1-6_11": employees_left(employees, period),
        "S1-6_12": turnover_percentage(employees, period),
        "S1-6_05": employees_by_country(employees, period, "end"),
        "S1-6_06": employees_by_country(employees, period, "average"),
        "K_718": employees_by_contract_gender(employees, period, "end"),
        "K_719": employees_by_contract_gender(employees, period, "average"),
        "S1-6_09": employees_by_region(employees, period, "end"),
        "S1-6_10": employees_by_region(employees, period, "average"),
        "S1-6_19": employees_by_category(employees, period, "end"),
        "S1-6_20": employees_by_category(employees, period, "average"),
        # A DSN lists individuals, not FTEs, as a snapshot at period end.
        "S1-6_14": HEADCOUNT_DATA_TYPE,
        "S1-6_15": DATA_TIMING,
        "S1-6_16": contextual_info(parsed, period),
        "S1-6_17": financial_relationship(parsed, period),
    }
