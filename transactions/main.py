import csv
import io
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session, joinedload

from core.database import get_db
from core.enums import TransactionStatus, TransactionType
from core.errors import ErrorCode, ErrorMessage, bad_request, not_found
from core.formatting import as_utc
from core.models import Transaction
from core.networks import is_supported_network
from transactions.schemas import (
    StatusUpdateRequest,
    TransactionListResponse,
    TransactionResponse,
    serialize_transaction,
)
from webhooks.processor import get_transaction_by_hash, update_transaction_status

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])

EXPORT_COLUMNS = [
    "id",
    "txHash",
    "timestamp",
    "network",
    "chainId",
    "type",
    "status",
    "fromAddress",
    "toAddress",
    "tokenSymbol",
    "tokenAmount",
    "fiatCurrency",
    "fiatAmount",
    "gasFeeWei",
    "blockNumber",
]


def filtered_query(
    db: Session,
    type: Optional[TransactionType] = None,
    status: Optional[TransactionStatus] = None,
    network: Optional[str] = None,
    user_id: Optional[str] = None,
):
    query = db.query(Transaction)

    if type:
        query = query.filter(Transaction.type == type.value)
    if status:
        query = query.filter(Transaction.status == status.value)
    if network:
        if not is_supported_network(network):
            raise bad_request(ErrorCode.UNSUPPORTED_NETWORK, ErrorMessage.UNSUPPORTED_NETWORK)
        query = query.filter(Transaction.network == network)
    if user_id:
        query = query.filter(Transaction.user_id == user_id)

    return query


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[TransactionType] = Query(None),
    status: Optional[TransactionStatus] = Query(None),
    network: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    query = filtered_query(db, type, status, network, userId)

    total = query.count()
    txns = (
        query.options(joinedload(Transaction.user))
        .order_by(Transaction.timestamp.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return {
        "success": True,
        "data": {
            "transactions": [serialize_transaction(t) for t in txns],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        },
    }


@router.get("/export")
def export_transactions(
    type: Optional[TransactionType] = Query(None),
    status: Optional[TransactionStatus] = Query(None),
    network: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    txns = (
        filtered_query(db, type, status, network, userId)
        .order_by(Transaction.timestamp.desc())
        .all()
    )

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for t in txns:
        writer.writerow([
            t.id,
            t.tx_hash,
            as_utc(t.timestamp).isoformat(),
            t.network,
            t.chain_id,
            t.type,
            t.status,
            t.from_address,
            t.to_address,
            t.from_token_symbol,
            t.from_token_amount,
            t.to_fiat_currency or "",
            t.to_fiat_amount if t.to_fiat_amount is not None else "",
            t.gas_fee_wei,
            t.block_number,
        ])

    buffer.seek(0)
    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )


@router.get("/{tx_hash}", response_model=TransactionResponse)
def get_transaction(tx_hash: str, db: Session = Depends(get_db)):
    txn = get_transaction_by_hash(db, tx_hash)
    if not txn:
        raise not_found(ErrorCode.TRANSACTION_NOT_FOUND, ErrorMessage.TRANSACTION_NOT_FOUND)

    return {"success": True, "data": serialize_transaction(txn)}


@router.patch("/{tx_hash}/status", response_model=TransactionResponse)
def set_transaction_status(
    tx_hash: str,
    payload: StatusUpdateRequest,
    db: Session = Depends(get_db),
):
    txn = update_transaction_status(db, tx_hash, payload.status, payload.errorMessage)
    return {"success": True, "data": serialize_transaction(txn)}
