"""Employee Routes — supervisee listing and the caller's own profile.

Invariants:
    - /me needs an employeeId claim in the session (400 otherwise)
    - Credit amounts are Decimal strings on the wire; counts and percentage are ints
"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.api.dependencies import require
from backoffice.api.routing import GuardedRoute
from backoffice.config import Settings, get_settings
from backoffice.core.authorization import Capability, Principal, require_claim
from backoffice.core.serialize import serialize_record, serialize_records, to_wire
from backoffice.infrastructure.database import get_db
from backoffice.schemas.queries import EmployeeQuery
from backoffice.services.employee_profile import list_employees, load_profile

router = APIRouter(
    prefix="/api/v1/employees", tags=["employees"], route_class=GuardedRoute,
)


@router.get("")
async def list_employees_route(
    query: Annotated[EmployeeQuery, Query()],
    principal: Principal = Depends(require(Capability.VIEW_EMPLOYEES)),
    db: AsyncSession = Depends(get_db),
):
    employees = await list_employees(db, principal, query)
    return serialize_records(employees)


@router.get("/me")
async def own_profile_route(
    principal: Principal = Depends(require(Capability.VIEW_OWN_PROFILE)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Profile, store-credit usage and HR documents of the calling employee."""
    employee_id = require_claim(principal, "employee_id")
    today = datetime.now(timezone.utc).date()
    profile = await load_profile(
        db, employee_id, settings.employee_credit_limit, today,
    )
    return {
        "employee": serialize_record(profile.employee, relationships=("documents",)),
        "credit": to_wire(asdict(profile.credit)),
    }
