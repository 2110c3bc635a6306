from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from core.enums import TransactionStatus
from core.formatting import as_utc
from core.models import Transaction
from core.networks import get_block_explorer_url, get_network_name


class TokenInfo(BaseModel):
    symbol: str
    address: str
    amount: str
    decimals: int


class FiatInfo(BaseModel):
    currency: str
    amount: float
    exchangeRate: float


class GasFee(BaseModel):
    amount: str
    token: str
    usd: Optional[float] = None


class TransactionUser(BaseModel):
    id: str
    walletAddress: str
    email: Optional[str] = None
    role: str


class TransactionItem(BaseModel):
    id: str
    userId: str
    txHash: str
    blockNumber: int
    timestamp: datetime
    type: str
    status: str
    fromToken: TokenInfo
    toFiat: Optional[FiatInfo] = None
    network: str
    networkName: str
    chainId: int
    fromAddress: str
    toAddress: str
    merchantId: Optional[str] = None
    merchantName: Optional[str] = None
    merchantCategory: Optional[str] = None
    gasFee: GasFee
    platformFee: float
    errorMessage: Optional[str] = None
    explorerUrl: str
    user: Optional[TransactionUser] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionList(BaseModel):
    transactions: List[TransactionItem]
    pagination: Pagination


class TransactionListResponse(BaseModel):
    success: bool = True
    data: TransactionList


class TransactionResponse(BaseModel):
    success: bool = True
    data: TransactionItem


class StatusUpdateRequest(BaseModel):
    status: TransactionStatus
    errorMessage: Optional[str] = None


def _float(value) -> float:
    return float(value) if value is not None else 0.0


def serialize_transaction(txn: Transaction, include_user: bool = True) -> dict:
    to_fiat = None
    if txn.to_fiat_currency and txn.to_fiat_amount is not None:
        to_fiat = {
            "currency": txn.to_fiat_currency,
            "amount": float(txn.to_fiat_amount),
            "exchangeRate": _float(txn.exchange_rate),
        }

    user = None
    if include_user and txn.user:
        user = {
            "id": txn.user.id,
            "walletAddress": txn.user.wallet_address,
            "email": txn.user.email,
            "role": txn.user.role,
        }

    return {
        "id": txn.id,
        "userId": txn.user_id,
        "txHash": txn.tx_hash,
        "blockNumber": txn.block_number,
        "timestamp": as_utc(txn.timestamp),
        "type": txn.type,
        "status": txn.status,
        "fromToken": {
            "symbol": txn.from_token_symbol,
            "address": txn.from_token_address,
            "amount": txn.from_token_amount,
            "decimals": txn.from_token_decimals,
        },
        "toFiat": to_fiat,
        "network": txn.network,
        "networkName": get_network_name(txn.network),
        "chainId": txn.chain_id,
        "fromAddress": txn.from_address,
        "toAddress": txn.to_address,
        "merchantId": txn.merchant_id,
        "merchantName": txn.merchant_name,
        "merchantCategory": txn.merchant_category,
        "gasFee": {
            "amount": txn.gas_fee_wei,
            "token": txn.from_token_symbol,
            "usd": float(txn.gas_fee_usd) if txn.gas_fee_usd is not None else None,
        },
        "platformFee": _float(txn.platform_fee_usd),
        "errorMessage": txn.error_message,
        "explorerUrl": get_block_explorer_url(txn.network, txn.tx_hash),
        "user": user,
    }
