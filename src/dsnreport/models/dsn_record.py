"""DSN entity tree: the structure every downstream calculation operates on.

A parsed file is one Company owning ordered Establishments, each owning
ordered Employees. Every block is a typed record of named optional fields plus
an ``extra_fields`` side channel keyed by raw DSN code, so codes the mappers do
not know about are kept rather than dropped.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

PARSING_METHOD = "S21.G00.30_delimiter"


class DsnBlock(BaseModel):
    """Common behaviour for all code -> field records."""

    extra_fields: dict[str, str] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        """True when no named field and no extra field has been written."""
        if self.extra_fields:
            return False
        return all(
            getattr(self, name) is None
            for name in type(self).model_fields
            if name != "extra_fields"
        )


# --- Company / establishment level (S10 / S20) ---


class CompanyInfo(DsnBlock):
    software_name: Optional[str] = None
    software_editor: Optional[str] = None
    software_version: Optional[str] = None
    siret: Optional[str] = None
    company_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    contact_name: Optional[str] = None


class EstablishmentInfo(DsnBlock):
    establishment_type: Optional[str] = None
    motif_code: Optional[str] = None
    siret: Optional[str] = None
    period_start_date: Optional[str] = None  # YYYYMMDD


# --- Employee level (S21) ---


class IdentityBlock(DsnBlock):
    """S21.G00.06: carried by the primary record only."""

    nir: Optional[str] = None
    internal_code: Optional[str] = None
    usage_name: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None


class AddressBlock(DsnBlock):
    """S21.G00.11: carried by the primary record only."""

    siret: Optional[str] = None
    nic: Optional[str] = None
    address: Optional[str] = None


class PersonalBlock(DsnBlock):
    """S21.G00.30: the block whose header starts every employee."""

    nir: Optional[str] = None
    family_name: Optional[str] = None
    first_names: Optional[str] = None
    usage_name: Optional[str] = None
    sex: Optional[str] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country_of_residence: Optional[str] = None
    nationality: Optional[str] = None


class ContractBlock(DsnBlock):
    """S21.G00.40."""

    birth_date: Optional[str] = None
    sex: Optional[str] = None
    contract_type: Optional[str] = None
    status_category: Optional[str] = None
    job_title: Optional[str] = None
    contract_start_date: Optional[str] = None  # YYYYMMDD
    contract_end_date: Optional[str] = None  # YYYYMMDD


class SalaryBlock(DsnBlock):
    """S21.G00.50."""

    period_start: Optional[str] = None
    remuneration_amount: Optional[str] = None


class PeriodBlock(DsnBlock):
    """S21.G00.51."""

    period_start: Optional[str] = None
    period_end: Optional[str] = None


class DsnEmployee(BaseModel):
    """Single employee record. Ids are 1-based per establishment."""

    employee_id: int
    is_primary_record: bool = False
    identity: Optional[IdentityBlock] = None
    address: Optional[AddressBlock] = None
    personal: PersonalBlock = Field(default_factory=PersonalBlock)
    contract: ContractBlock = Field(default_factory=ContractBlock)
    salary: SalaryBlock = Field(default_factory=SalaryBlock)
    period: PeriodBlock = Field(default_factory=PeriodBlock)


class DsnEstablishment(BaseModel):
    info: EstablishmentInfo = Field(default_factory=EstablishmentInfo)
    employees: list[DsnEmployee] = Field(default_factory=list)


class DsnCompany(BaseModel):
    info: CompanyInfo = Field(default_factory=CompanyInfo)
    establishments: list[DsnEstablishment] = Field(default_factory=list)

    @property
    def employees(self) -> list[DsnEmployee]:
        """All employees across establishments, in file order."""
        return [emp for est in self.establishments for emp in est.employees]

    @property
    def primary_record(self) -> Optional[DsnEmployee]:
        for emp in self.employees:
            if emp.is_primary_record:
                return emp
        return None


class DsnMetadata(BaseModel):
    total_employees: int = 0
    total_establishments: int = 0
    parsed_at: datetime
    filename: str
    parsing_method: Literal["S21.G00.30_delimiter"] = PARSING_METHOD


class ParsedDsnData(BaseModel):
    """Parse result handed to the question mapper and the presentation layer."""

    company: DsnCompany
    metadata: DsnMetadata

    @property
    def employees(self) -> list[DsnEmployee]:
        return self.company.employees
