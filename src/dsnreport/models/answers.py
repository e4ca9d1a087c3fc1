"""Reporting models: period, question catalogue entries, parse summary."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class ReportingPeriod(BaseModel):
    """Inferred date window the headcount and turnover answers refer to."""

    model_config = {"frozen": True}

    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _check_order(self) -> "ReportingPeriod":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")
        return self


class QuestionDefinition(BaseModel):
    """Static metadata for one reporting question (form and export layers)."""

    model_config = {"frozen": True}

    id: str
    label: str
    content: Literal["number", "percentage", "breakdown", "enum", "text"]
    unit: str = ""
    parent_id: Optional[str] = None


class SampleEmployee(BaseModel):
    employee_id: int
    nir: str = "N/A"
    family_name: str = "N/A"
    first_names: str = "N/A"
    sex: str = "N/A"
    birth_date: str = "N/A"
    contract_type: str = "N/A"
    job_title: str = "N/A"
    has_identity_block: bool = False
    has_address_block: bool = False


class EmployeeDistribution(BaseModel):
    with_identity_block: int = 0
    with_address_block: int = 0
    total: int = 0


class GenderBreakdown(BaseModel):
    male: int = 0
    female: int = 0


class DsnSummary(BaseModel):
    """Quick-look statistics shown right after an upload."""

    company_name: str = "Unknown"
    siret: str = "Unknown"
    total_establishments: int = 0
    total_employees: int = 0
    parsing_method: str = ""
    sample_employees: list[SampleEmployee] = Field(default_factory=list)
    employee_distribution: EmployeeDistribution = EmployeeDistribution()
    gender_breakdown: GenderBreakdown = GenderBreakdown()
    contract_types: dict[str, int] = Field(default_factory=dict)
    total_remuneration: Decimal = Decimal("0")
    average_remuneration: Decimal = Decimal("0")
    has_remuneration_data: bool = False
