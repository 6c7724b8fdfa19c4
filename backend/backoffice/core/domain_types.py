"""Domain Types — enums shared by models, services and routes.

Invariants:
    - Every status/type column stores the .value of one of these enums
    - Enum values are UPPER_SNAKE strings, matching what the identity provider and
      the database already carry

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class UserType(str, Enum):
    """Roles carried in the session token's userType claim."""
    ADMIN = "ADMIN"
    SELLER = "SELLER"
    EMPLOYEE = "EMPLOYEE"
    CUSTOMER = "CUSTOMER"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"


class ReceivableStatus(str, Enum):
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class ExpenseType(str, Enum):
    """Expense buckets reported by the expense total endpoint."""
    OPERATIONAL = "OPERATIONAL"
    PRODUCTS = "PRODUCTS"
    RAW_MATERIALS = "RAW_MATERIALS"
    INVESTMENT = "INVESTMENT"
    PROLABORE = "PROLABORE"


class ExpenseStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class EmployeeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"


class ProductCategory(str, Enum):
    """Known catalog categories, in display order. Unknown categories sort last."""
    ESPETO = "ESPETO"
    HAMBURGUER = "HAMBURGUER"
    CARVAO = "CARVAO"
