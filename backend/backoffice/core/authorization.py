"""Authorization Gate — role → capability table and row-ownership scopes.

Invariants:
    - authorize() is the only place that turns a missing session into 401
      and a missing capability into 403
    - ADMIN holds every capability and an empty ownership scope
    - A scope that needs an identity claim the session lacks is a 403, never an
      unscoped query
    - Pure: no IO; callers consult the gate before touching persistence

Design Decisions:
    - Capabilities over direct role checks in routes: a route names what it needs,
      the table decides who has it
    - Principal is frozen: built once per request from verified token claims
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

from backoffice.core.domain_types import UserType
from backoffice.core.errors import (
    AuthenticationError, PermissionDeniedError, ValidationError,
)


class Capability(str, Enum):
    VIEW_CUSTOMERS = "view_customers"
    MANAGE_CUSTOMERS = "manage_customers"
    VIEW_ORDERS = "view_orders"
    VIEW_PRODUCTS = "view_products"
    VIEW_EMPLOYEES = "view_employees"
    VIEW_OWN_PROFILE = "view_own_profile"
    VIEW_EXPENSES = "view_expenses"
    VIEW_PORTFOLIO = "view_portfolio"
    VIEW_FILES = "view_files"


class Resource(str, Enum):
    """Row families that carry an ownership column."""
    CUSTOMER = "customer"
    ORDER = "order"
    EMPLOYEE = "employee"
    DOCUMENT = "document"
    PORTFOLIO = "portfolio"


ROLE_CAPABILITIES: dict[UserType, frozenset[Capability]] = {
    UserType.ADMIN: frozenset(Capability),
    UserType.SELLER: frozenset({
        Capability.VIEW_CUSTOMERS,
        Capability.VIEW_ORDERS,
        Capability.VIEW_PRODUCTS,
        Capability.VIEW_OWN_PROFILE,
        Capability.VIEW_FILES,
    }),
    UserType.EMPLOYEE: frozenset({
        Capability.VIEW_PRODUCTS,
        Capability.VIEW_EMPLOYEES,
        Capability.VIEW_OWN_PROFILE,
        Capability.VIEW_FILES,
    }),
    UserType.CUSTOMER: frozenset({
        Capability.VIEW_CUSTOMERS,
        Capability.VIEW_ORDERS,
        Capability.VIEW_PRODUCTS,
        Capability.VIEW_PORTFOLIO,
        Capability.VIEW_FILES,
    }),
}

# (role, resource) -> (principal attribute, row column)
_SCOPE_RULES: dict[tuple[UserType, Resource], tuple[str, str]] = {
    (UserType.SELLER, Resource.CUSTOMER): ("seller_id", "seller_id"),
    (UserType.SELLER, Resource.ORDER): ("seller_id", "seller_id"),
    (UserType.SELLER, Resource.DOCUMENT): ("employee_id", "employee_id"),
    (UserType.CUSTOMER, Resource.CUSTOMER): ("customer_id", "id"),
    (UserType.CUSTOMER, Resource.ORDER): ("customer_id", "customer_id"),
    (UserType.CUSTOMER, Resource.PORTFOLIO): ("customer_id", "customer_id"),
    (UserType.EMPLOYEE, Resource.EMPLOYEE): ("employee_id", "supervisor_id"),
    (UserType.EMPLOYEE, Resource.DOCUMENT): ("employee_id", "employee_id"),
}


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as asserted by the identity provider."""
    user_id: str
    user_type: UserType
    customer_id: UUID | None = None
    seller_id: UUID | None = None
    employee_id: UUID | None = None

    @property
    def is_admin(self) -> bool:
        return self.user_type is UserType.ADMIN

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES.get(self.user_type, frozenset())


def _optional_uuid(claims: Mapping[str, Any], key: str) -> UUID | None:
    raw = claims.get(key)
    if raw in (None, ""):
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        raise AuthenticationError(f"Malformed session claim: {key}")


def principal_from_claims(claims: Mapping[str, Any]) -> Principal:
    """Build a Principal from verified token claims.

    Raises AuthenticationError when the claims do not describe a known user.
    """
    subject = claims.get("sub")
    raw_type = claims.get("userType")
    if not subject or not raw_type:
        raise AuthenticationError("Session token is missing identity claims")
    try:
        user_type = UserType(str(raw_type).upper())
    except ValueError:
        raise AuthenticationError("Session token carries an unknown user type")
    return Principal(
        user_id=str(subject),
        user_type=user_type,
        customer_id=_optional_uuid(claims, "customerId"),
        seller_id=_optional_uuid(claims, "sellerId"),
        employee_id=_optional_uuid(claims, "employeeId"),
    )


def authorize(principal: Principal | None, capability: Capability) -> Principal:
    """Gate a request: no session → 401, role lacking capability → 403."""
    if principal is None:
        raise AuthenticationError()
    if not principal.can(capability):
        raise PermissionDeniedError(
            f"Role {principal.user_type.value} cannot {capability.value}",
        )
    return principal


def ownership_scope(principal: Principal, resource: Resource) -> dict[str, UUID]:
    """Column filters that restrict rows of `resource` to what principal may see.

    Returns {} for ADMIN. Roles without a rule for the resource get 403.
    """
    if principal.is_admin:
        return {}
    rule = _SCOPE_RULES.get((principal.user_type, resource))
    if rule is None:
        raise PermissionDeniedError(
            f"Role {principal.user_type.value} has no access to {resource.value} records",
        )
    attr, column = rule
    owner = getattr(principal, attr)
    if owner is None:
        raise PermissionDeniedError(
            f"Session has no {attr} for {resource.value} records",
        )
    return {column: owner}


def require_claim(principal: Principal, attr: str) -> UUID:
    """Return an identity claim a handler cannot run without (400 when absent)."""
    value = getattr(principal, attr)
    if value is None:
        raise ValidationError(f"Session has no {attr}", field=attr)
    return value
