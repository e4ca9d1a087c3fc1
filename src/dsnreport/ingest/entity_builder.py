"""Block router: turns a DSN token stream into a Company -> Establishment -> Employee tree.

The walk is a single forward pass driven by header lines. ``S21.G00.30,''``
starts every employee, but a company's identity (S21.G00.06) and address
(S21.G00.11) blocks sit once ahead of the first employee marker, before the
employee they belong to exists. ``backfill_leading_blocks`` re-reads that
leading span and attaches it to the primary record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from dsnreport.ingest.field_mappers import (
    EMPLOYEE_BLOCK_MAPPERS,
    ActiveBlock,
    map_address_field,
    map_company_field,
    map_establishment_field,
    map_identity_field,
)
from dsnreport.ingest.tokenizer import DsnToken
from dsnreport.models.dsn_record import (
    AddressBlock,
    DsnCompany,
    DsnEmployee,
    DsnEstablishment,
    IdentityBlock,
)

logger = logging.getLogger(__name__)

COMPANY_BLOCK = "S10"
ESTABLISHMENT_BLOCK = "S20"
EMPLOYEE_BLOCK = "S21"
EMPLOYEE_START_MARKER = "S21.G00.30"


def is_employee_start(token: DsnToken) -> bool:
    return token.is_header and token.code == EMPLOYEE_START_MARKER


@dataclass
class BuilderState:
    """Mutable walk state, owned by a single ``build_entity_tree`` call."""

    company: DsnCompany = field(default_factory=DsnCompany)
    establishment: Optional[DsnEstablishment] = None
    employee: Optional[DsnEmployee] = None
    employee_counter: int = 0
    primary_assigned: bool = False
    active_block: ActiveBlock = ActiveBlock.NONE

    def open_establishment(self) -> DsnEstablishment:
        self.establishment = DsnEstablishment()
        self.company.establishments.append(self.establishment)
        self.employee = None
        self.employee_counter = 0
        logger.debug("New establishment #%d created", len(self.company.establishments))
        return self.establishment

    def open_employee(self) -> DsnEmployee:
        establishment = self.establishment
        if establishment is None:
            logger.warning("Employee data found without establishment context, creating one")
            establishment = self.open_establishment()

        self.employee_counter += 1
        employee = DsnEmployee(employee_id=self.employee_counter)
        if not self.primary_assigned:
            self.primary_assigned = True
            employee.is_primary_record = True
            employee.identity = IdentityBlock()
            employee.address = AddressBlock()

        establishment.employees.append(employee)
        self.employee = employee
        logger.debug("New employee #%d created", employee.employee_id)
        return employee


def _route(state: BuilderState, token: DsnToken) -> None:
    if token.is_header:
        state.active_block = ActiveBlock.for_group(token.group)

    if token.block == COMPANY_BLOCK:
        # headers land in extra_fields with an empty value
        map_company_field(state.company.info, token.code, token.value)

    elif token.block == ESTABLISHMENT_BLOCK:
        establishment = state.establishment
        if token.is_header or establishment is None:
            establishment = state.open_establishment()
        if not token.is_header:
            map_establishment_field(establishment.info, token.code, token.value)

    elif token.block == EMPLOYEE_BLOCK:
        if is_employee_start(token):
            state.open_employee()
            return
        if token.is_header:
            return
        if state.employee is None:
            logger.debug("Ignoring %s: no employee open yet", token.code)
            return
        _write_employee_field(state.employee, state.active_block, token)


def _write_employee_field(employee: DsnEmployee, active: ActiveBlock, token: DsnToken) -> None:
    if active is ActiveBlock.NONE:
        return
    attr, mapper = EMPLOYEE_BLOCK_MAPPERS[active]
    record = getattr(employee, attr)
    # identity/address exist on the primary record only
    if record is None:
        return
    mapper(record, token.code, token.value)


def build_entity_tree(tokens: Iterable[DsnToken]) -> DsnCompany:
    """Forward walk over ``tokens``. A failing token is logged and skipped."""
    state = BuilderState()
    for token in tokens:
        try:
            _route(state, token)
        except Exception:
            logger.error(
                "Error parsing line %d: %s", token.line_number, token.raw, exc_info=True,
            )
    return state.company


def backfill_leading_blocks(tokens: Iterable[DsnToken], company: DsnCompany) -> DsnCompany:
    """Fill the primary record's identity/address from lines preceding the first employee.

    Returns a new tree; ``company`` is left untouched. Nothing happens when
    there is no primary record or its identity block already holds data.
    """
    primary = company.primary_record
    if primary is None or primary.identity is None or not primary.identity.is_empty():
        return company

    identity = primary.identity.model_copy(deep=True)
    address = primary.address.model_copy(deep=True) if primary.address is not None else AddressBlock()

    active = ActiveBlock.NONE
    for token in tokens:
        if token.is_header:
            if is_employee_start(token):
                break
            active = ActiveBlock.for_group(token.group)
            continue
        if active is ActiveBlock.IDENTITY:
            map_identity_field(identity, token.code, token.value)
        elif active is ActiveBlock.ADDRESS:
            map_address_field(address, token.code, token.value)

    filled = company.model_copy(deep=True)
    for emp in filled.employees:
        if emp.is_primary_record:
            emp.identity = identity
            emp.address = address

    if not identity.is_empty() or not address.is_empty():
        logger.info("Backfilled identity/address blocks of the primary employee record")
    return filled
