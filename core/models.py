import uuid

from sqlalchemy import (
    Column,
    Integer,
    BigInteger,
    String,
    Numeric,
    DateTime,
    ForeignKey,
    Text,
    JSON,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base
from core.enums import UserRole, TransactionStatus


def _uuid() -> str:
    return str(uuid.uuid4())


# USER

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_uuid)

    # always stored lowercased
    wallet_address = Column(String(42), unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    role = Column(String, default=UserRole.USER.value, nullable=False)

    social_provider = Column(String, nullable=True)
    kyc_status = Column(String, nullable=True)  # pending | approved | rejected
    region = Column(String, nullable=True)

    merchant_id = Column(String, nullable=True)
    merchant_name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    transactions = relationship("Transaction", back_populates="user")


# TRANSACTIONS

class Transaction(Base):
    """
    A blockchain transaction captured by the ingestion pipeline.

    ``tx_hash`` is the idempotency key: the unique constraint on it is what
    makes concurrent redelivery of the same webhook safe. Wei quantities are
    kept as decimal strings so they never lose precision.
    """
    __tablename__ = "transactions"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    tx_hash = Column(String(66), unique=True, nullable=False)
    block_number = Column(BigInteger, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    network = Column(String, nullable=False, index=True)
    chain_id = Column(Integer, nullable=False)

    type = Column(String, nullable=False)
    status = Column(String, default=TransactionStatus.PENDING.value, nullable=False)

    from_address = Column(String(42), nullable=False)
    to_address = Column(String(42), nullable=False)

    from_token_symbol = Column(String, nullable=False)
    from_token_address = Column(String(42), nullable=False)
    from_token_amount = Column(String, nullable=False)
    from_token_decimals = Column(Integer, nullable=False, default=18)

    to_fiat_currency = Column(String(3), nullable=True)
    to_fiat_amount = Column(Numeric(18, 2), nullable=True)
    exchange_rate = Column(Numeric(18, 8), nullable=True)

    gas_fee_wei = Column(String, nullable=False, default="0")
    gas_fee_usd = Column(Numeric(18, 6), nullable=True)
    platform_fee_usd = Column(Numeric(18, 6), nullable=False, default=0)

    merchant_id = Column(String, nullable=True)
    merchant_name = Column(String, nullable=True)
    merchant_category = Column(String, nullable=True)

    error_message = Column(Text, nullable=True)
    extra = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="transactions")
