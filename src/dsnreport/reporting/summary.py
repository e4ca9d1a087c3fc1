"""Parse summary shown right after upload: counts, samples, simple analytics."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from dsnreport.models.answers import (
    DsnSummary,
    EmployeeDistribution,
    GenderBreakdown,
    SampleEmployee,
)
from dsnreport.models.dsn_record import DsnEmployee, ParsedDsnData

SAMPLE_SIZE = 5
SEX_MALE = "01"
SEX_FEMALE = "02"


def _sample(emp: DsnEmployee) -> SampleEmployee:
    return SampleEmployee(
        employee_id=emp.employee_id,
        nir=emp.personal.nir or "N/A",
        family_name=emp.personal.family_name or "N/A",
        first_names=emp.personal.first_names or "N/A",
        sex=emp.personal.sex or "N/A",
        birth_date=emp.personal.birth_date or emp.contract.birth_date or "N/A",
        contract_type=emp.contract.contract_type or "N/A",
        job_title=emp.contract.job_title or "N/A",
        has_identity_block=emp.identity is not None,
        has_address_block=emp.address is not None,
    )


def _amount(raw: str | None) -> Decimal | None:
    if not raw:
        return None
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def summarize(parsed: ParsedDsnData) -> DsnSummary:
    company = parsed.company
    employees = parsed.employees

    first_establishment = company.establishments[0].employees if company.establishments else []
    samples = [_sample(emp) for emp in first_establishment[:SAMPLE_SIZE]]

    gender = GenderBreakdown()
    contract_types: dict[str, int] = {}
    total = Decimal("0")
    has_remuneration = False
    for emp in employees:
        sex = emp.personal.sex or emp.contract.sex
        if sex == SEX_MALE:
            gender.male += 1
        elif sex == SEX_FEMALE:
            gender.female += 1

        if emp.contract.contract_type:
            contract_types[emp.contract.contract_type] = contract_types.get(emp.contract.contract_type, 0) + 1

        amount = _amount(emp.salary.remuneration_amount)
        if amount is not None and amount > 0:
            has_remuneration = True
            total += amount

    average = total / len(employees) if has_remuneration and employees else Decimal("0")

    return DsnSummary(
        company_name=company.info.company_name or "Unknown",
        siret=company.info.siret or "Unknown",
        total_establishments=parsed.metadata.total_establishments,
        total_employees=parsed.metadata.total_employees,
        parsing_method=parsed.metadata.parsing_method,
        sample_employees=samples,
        employee_distribution=EmployeeDistribution(
            with_identity_block=sum(1 for emp in employees if emp.identity is not None),
            with_address_block=sum(1 for emp in employees if emp.address is not None),
            total=parsed.metadata.total_employees,
        ),
        gender_breakdown=gender,
        contract_types=contract_types,
        total_remuneration=total,
        average_remuneration=average.quantize(Decimal("0.01")),
        has_remuneration_data=has_remuneration,
    )
