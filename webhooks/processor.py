import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.enums import TransactionStatus, UserRole
from core.errors import ErrorCode, ErrorMessage, not_found
from core.formatting import format_address, format_token_amount
from core.models import Transaction, User
from webhooks.classifier import determine_transaction_type
from webhooks.schemas import ProcessTransactionInput

logger = logging.getLogger(__name__)

# Native token only until ERC-20 transfers are decoded.
NATIVE_TOKEN_SYMBOL = "ETH"
NATIVE_TOKEN_ADDRESS = "0x0000000000000000000000000000000000000000"
NATIVE_TOKEN_DECIMALS = 18

FIAT_CURRENCY = "USD"


def get_transaction_by_hash(db: Session, tx_hash: str) -> Transaction | None:
    return db.query(Transaction).filter(Transaction.tx_hash == tx_hash.lower()).first()


def get_or_create_user(db: Session, wallet_address: str) -> User:
    address = wallet_address.lower()

    user = db.query(User).filter(User.wallet_address == address).first()
    if user:
        return user

    user = User(wallet_address=address, role=UserRole.USER.value)
    db.add(user)
    db.flush()
    logger.info("Created user for wallet %s", format_address(address))
    return user


def _usd_value(amount_wei: int, usd_rate: Decimal | None, places: str) -> Decimal | None:
    if usd_rate is None:
        return None
    return (format_token_amount(amount_wei, NATIVE_TOKEN_DECIMALS) * usd_rate).quantize(Decimal(places))


def _create_transaction(db: Session, data: ProcessTransactionInput, usd_rate: Decimal | None) -> Transaction:
    user = get_or_create_user(db, data.from_address)

    transaction_type = determine_transaction_type(data.value, data.has_call_data)
    transaction_status = (
        TransactionStatus.COMPLETED if data.status == "success" else TransactionStatus.FAILED
    )

    gas_fee_wei = data.gas_used * data.gas_price

    txn = Transaction(
        user_id=user.id,
        tx_hash=data.tx_hash,
        block_number=data.block_number,
        timestamp=data.timestamp,
        network=data.network,
        chain_id=data.chain_id,
        type=transaction_type.value,
        status=transaction_status.value,
        from_address=data.from_address.lower(),
        to_address=data.to_address.lower(),
        from_token_symbol=NATIVE_TOKEN_SYMBOL,
        from_token_address=NATIVE_TOKEN_ADDRESS,
        from_token_amount=str(data.value),
        from_token_decimals=NATIVE_TOKEN_DECIMALS,
        to_fiat_currency=FIAT_CURRENCY if usd_rate is not None else None,
        to_fiat_amount=_usd_value(data.value, usd_rate, "0.01"),
        exchange_rate=usd_rate,
        gas_fee_wei=str(gas_fee_wei),
        gas_fee_usd=_usd_value(gas_fee_wei, usd_rate, "0.000001"),
        platform_fee_usd=Decimal("0"),
        extra={
            "rawValue": str(data.value),
            "gasUsed": str(data.gas_used),
            "gasPrice": str(data.gas_price),
        },
    )

    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn


def process_transaction(
    db: Session,
    data: ProcessTransactionInput,
    usd_rate: Decimal | None = None,
) -> tuple[Transaction, bool]:
    """
    Store a parsed webhook transaction exactly once.

    Returns ``(transaction, created)``. A redelivery of a known hash returns
    the stored row untouched. When a concurrent delivery wins the insert, the
    unique constraint on ``tx_hash`` rejects ours and the winner's row is
    returned instead.
    """
    existing = get_transaction_by_hash(db, data.tx_hash)
    if existing:
        logger.info("Transaction %s already processed", data.tx_hash)
        return existing, False

    try:
        txn = _create_transaction(db, data, usd_rate)
    except IntegrityError:
        db.rollback()

        existing = get_transaction_by_hash(db, data.tx_hash)
        if existing:
            logger.info("Transaction %s stored by a concurrent delivery", data.tx_hash)
            return existing, False

        # the sender's user row was created concurrently and exists now
        logger.warning("Integrity conflict while storing %s, retrying once", data.tx_hash)
        txn = _create_transaction(db, data, usd_rate)

    logger.info(
        "Transaction %s processed: %s/%s from %s",
        txn.tx_hash, txn.type, txn.status, format_address(txn.from_address),
    )
    return txn, True


def update_transaction_status(
    db: Session,
    tx_hash: str,
    status: TransactionStatus,
    error_message: str | None = None,
) -> Transaction:
    """Out-of-band status change, e.g. after confirmation polling."""
    txn = get_transaction_by_hash(db, tx_hash)
    if not txn:
        raise not_found(ErrorCode.TRANSACTION_NOT_FOUND, ErrorMessage.TRANSACTION_NOT_FOUND)

    txn.status = TransactionStatus(status).value
    txn.error_message = error_message

    db.commit()
    db.refresh(txn)

    logger.info("Transaction %s status set to %s", txn.tx_hash, txn.status)
    return txn
