"""Employee routes — supervisee scope and the own-profile credit summary."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from backoffice.models.employee import Employee, EmployeeDocument
from backoffice.models.order import Order
from backoffice.models.receivable import Receivable


@pytest.fixture
async def staff(test_db):
    boss = Employee(id=uuid4(), name="Ana Supervisora", department="Produção")
    worker = Employee(
        id=uuid4(), name="Bruno", department="Produção", supervisor_id=boss.id,
    )
    other = Employee(id=uuid4(), name="Carla", department="Entrega")
    billed_order = Order(
        id=uuid4(), order_number=10, employee_id=worker.id,
        payment_status="UNPAID", subtotal=Decimal("50.00"), total=Decimal("50.00"),
    )
    unbilled_order = Order(
        id=uuid4(), order_number=11, employee_id=worker.id,
        payment_status="UNPAID", subtotal=Decimal("30.00"), total=Decimal("30.00"),
    )
    paid_order = Order(
        id=uuid4(), order_number=12, employee_id=worker.id,
        payment_status="PAID", subtotal=Decimal("99.00"), total=Decimal("99.00"),
    )
    test_db.add_all([
        boss, worker, other, billed_order, unbilled_order, paid_order,
        Receivable(
            employee_id=worker.id, order_id=billed_order.id,
            amount=Decimal("50.00"), status="PENDING", due_date=date(2020, 4, 5),
        ),
        Receivable(
            employee_id=worker.id, amount=Decimal("100.00"),
            status="PAID", due_date=date(2026, 3, 5),
        ),
        EmployeeDocument(
            employee_id=worker.id, title="Holerite 03/2026",
            document_type="PAYSLIP", file_key="employees/bruno/2026-03.pdf",
        ),
    ])
    await test_db.commit()
    return {"boss": boss, "worker": worker, "other": other}


async def test_employee_lists_only_supervisees(client, auth, staff):
    res = await client.get(
        "/api/v1/employees", headers=auth("EMPLOYEE", employeeId=staff["boss"].id),
    )
    assert res.status_code == 200
    assert [e["name"] for e in res.json()] == ["Bruno"]


async def test_admin_lists_everyone_by_name(client, admin_headers, staff):
    res = await client.get("/api/v1/employees", headers=admin_headers)
    assert [e["name"] for e in res.json()] == ["Ana Supervisora", "Bruno", "Carla"]


async def test_department_filter(client, admin_headers, staff):
    res = await client.get("/api/v1/employees?department=Entrega", headers=admin_headers)
    assert [e["name"] for e in res.json()] == ["Carla"]


async def test_own_profile_with_credit(client, auth, staff):
    res = await client.get(
        "/api/v1/employees/me",
        headers=auth("EMPLOYEE", employeeId=staff["worker"].id),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["employee"]["name"] == "Bruno"
    assert body["credit"] == {
        "credit_limit": "300",
        "used_credit": "80.00",
        "available_credit": "220.00",
        "pending_receivables": "50.00",
        "unpaid_orders": "30.00",
        "open_receivables_count": 1,
        "overdue_receivables_count": 1,
        "used_percentage": 27,
    }
    assert [d["title"] for d in body["employee"]["documents"]] == ["Holerite 03/2026"]


async def test_own_profile_without_employee_claim_is_400(client, auth):
    res = await client.get("/api/v1/employees/me", headers=auth("SELLER"))
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


async def test_own_profile_for_unknown_employee_is_404(client, auth):
    res = await client.get(
        "/api/v1/employees/me", headers=auth("EMPLOYEE", employeeId=uuid4()),
    )
    assert res.status_code == 404
