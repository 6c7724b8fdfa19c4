"""Payment-Method Workflow — audited changes to a customer's boleto permission.

Invariants:
    - The flag change and its AuditLog row share one transaction (caller commits)
    - Every request is audited, including one that leaves the flag unchanged
    - before/after snapshots hold only the fields this workflow touches
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.authorization import Principal
from backoffice.models.audit_log import AuditLog
from backoffice.models.customer import Customer
from backoffice.schemas.customer import PaymentMethodUpdate
from backoffice.services.customer_queries import get_customer

logger = logging.getLogger(__name__)

AUDIT_ACTION = "payment_methods.update"


async def change_payment_methods(
    db: AsyncSession, principal: Principal, customer_id: UUID,
    body: PaymentMethodUpdate,
) -> tuple[Customer, AuditLog]:
    """Apply the change and stage its audit row. Does not commit."""
    customer = await get_customer(db, principal, customer_id)
    before = {"allows_boleto": customer.allows_boleto}
    customer.allows_boleto = body.allows_boleto
    audit = AuditLog(
        entity_type="customer",
        entity_id=str(customer.id),
        action=AUDIT_ACTION,
        actor_id=principal.user_id,
        actor_type=principal.user_type.value,
        before=before,
        after={"allows_boleto": body.allows_boleto},
        reason=body.reason,
    )
    db.add(audit)
    logger.info(
        f"Payment methods changed for customer {customer.id}: "
        f"{before['allows_boleto']} -> {body.allows_boleto}",
        extra={
            "principal_id": principal.user_id,
            "user_type": principal.user_type.value,
            "resource_id": str(customer.id),
        },
    )
    return customer, audit
