"""Per-block DSN code -> field tables.

Each mapper writes ``value`` under the named field when the code is known and
under ``extra_fields[code]`` otherwise. Values are never validated here; dates
and amounts are interpreted by the consumers.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Callable

from dsnreport.models.dsn_record import (
    AddressBlock,
    CompanyInfo,
    ContractBlock,
    DsnBlock,
    EstablishmentInfo,
    IdentityBlock,
    PeriodBlock,
    PersonalBlock,
    SalaryBlock,
)

COMPANY_FIELDS: dict[str, str] = {
    "S10.G00.00.001": "software_name",
    "S10.G00.00.002": "software_editor",
    "S10.G00.00.003": "software_version",
    "S10.G00.01.001": "siret",
    "S10.G00.01.003": "company_name",
    "S10.G00.01.004": "address",
    "S10.G00.01.006": "city",
    "S10.G00.01.009": "contact_name",
}

ESTABLISHMENT_FIELDS: dict[str, str] = {
    "S20.G00.05.001": "establishment_type",
    "S20.G00.05.002": "motif_code",
    "S20.G00.05.004": "siret",
    "S20.G00.05.005": "period_start_date",
}

IDENTITY_FIELDS: dict[str, str] = {
    "S21.G00.06.001": "nir",
    "S21.G00.06.002": "internal_code",
    "S21.G00.06.003": "usage_name",
    "S21.G00.06.004": "address",
    "S21.G00.06.005": "postal_code",
    "S21.G00.06.006": "city",
}

ADDRESS_FIELDS: dict[str, str] = {
    "S21.G00.11.001": "siret",
    "S21.G00.11.002": "nic",
    "S21.G00.11.003": "address",
}

PERSONAL_FIELDS: dict[str, str] = {
    "S21.G00.30.001": "nir",
    "S21.G00.30.002": "family_name",
    "S21.G00.30.003": "first_names",
    "S21.G00.30.004": "usage_name",
    "S21.G00.30.005": "sex",
    "S21.G00.30.006": "birth_date",
    "S21.G00.30.007": "birth_place",
    "S21.G00.30.008": "address",
    "S21.G00.30.009": "postal_code",
    "S21.G00.30.010": "city",
    "S21.G00.30.011": "country_of_residence",
    "S21.G00.30.029": "nationality",
}

CONTRACT_FIELDS: dict[str, str] = {
    "S21.G00.40.001": "birth_date",
    "S21.G00.40.002": "sex",
    "S21.G00.40.003": "contract_type",
    "S21.G00.40.005": "status_category",
    "S21.G00.40.006": "job_title",
    "S21.G00.40.010": "contract_start_date",
    "S21.G00.40.030": "contract_end_date",
}

SALARY_FIELDS: dict[str, str] = {
    "S21.G00.50.001": "period_start",
    "S21.G00.50.002": "remuneration_amount",
}

PERIOD_FIELDS: dict[str, str] = {
    "S21.G00.51.001": "period_start",
    "S21.G00.51.002": "period_end",
}


class ActiveBlock(StrEnum):
    """Employee sub-block currently receiving data lines."""

    NONE = ""
    IDENTITY = "S21.G00.06"
    ADDRESS = "S21.G00.11"
    PERSONAL = "S21.G00.30"
    CONTRACT = "S21.G00.40"
    SALARY = "S21.G00.50"
    PERIOD = "S21.G00.51"

    @classmethod
    def for_group(cls, group: str) -> "ActiveBlock":
        """Block opened by a header of ``group``; NONE for anything unrecognised."""
        try:
            return cls(group)
        except ValueError:
            return cls.NONE


def _assign(record: DsnBlock, table: dict[str, str], code: str, value: str) -> None:
    field_name = table.get(code)
    if field_name is None:
        record.extra_fields[code] = value
    else:
        setattr(record, field_name, value)


def map_company_field(record: CompanyInfo, code: str, value: str) -> None:
    _assign(record, COMPANY_FIELDS, code, value)


def map_establishment_field(record: EstablishmentInfo, code: str, value: str) -> None:
    _assign(record, ESTABLISHMENT_FIELDS, code, value)


def map_identity_field(record: IdentityBlock, code: str, value: str) -> None:
    _assign(record, IDENTITY_FIELDS, code, value)


def map_address_field(record: AddressBlock, code: str, value: str) -> None:
    _assign(record, ADDRESS_FIELDS, code, value)


def map_personal_field(record: PersonalBlock, code: str, value: str) -> None:
    _assign(record, PERSONAL_FIELDS, code, value)


def map_contract_field(record: ContractBlock, code: str, value: str) -> None:
    _assign(record, CONTRACT_FIELDS, code, value)


def map_salary_field(record: SalaryBlock, code: str, value: str) -> None:
    _assign(record, SALARY_FIELDS, code, value)


def map_period_field(record: PeriodBlock, code: str, value: str) -> None:
    _assign(record, PERIOD_FIELDS, code, value)


# Employee attribute name and mapper for each routable block.
EMPLOYEE_BLOCK_MAPPERS: dict[ActiveBlock, tuple[str, Callable[..., None]]] = {
    ActiveBlock.IDENTITY: ("identity", map_identity_field),
    ActiveBlock.ADDRESS: ("address", map_address_field),
    ActiveBlock.PERSONAL: ("personal", map_personal_field),
    ActiveBlock.CONTRACT: ("contract", map_contract_field),
    ActiveBlock.SALARY: ("salary", map_salary_field),
    ActiveBlock.PERIOD: ("period", map_period_field),
}
