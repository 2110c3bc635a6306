from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    OPERATIONS = "operations"
    GROWTH = "growth"
    MERCHANT = "merchant"
    USER = "user"


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    CONVERSION = "conversion"
    PAYMENT = "payment"
    TRANSFER = "transfer"
    REFUND = "refund"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
