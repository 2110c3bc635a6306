from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def to_big_int(value) -> int:
    """
    Accept a JSON integer, a decimal string or a 0x-prefixed hex string.

    Floats and booleans are refused so that wei amounts never go through
    binary floating point.
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid integer quantity")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("quantity must be non-negative")
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        if text.isdigit():
            return int(text)
    raise ValueError(f"not an integer quantity: {value!r}")


BigInt = Annotated[int, BeforeValidator(to_big_int)]

# block numbers are stored in a signed 64-bit column
MAX_BLOCK_NUMBER = 2**63 - 1
BlockNumber = Annotated[int, BeforeValidator(to_big_int), Field(le=MAX_BLOCK_NUMBER)]


class AlchemyActivity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hash: str = Field(..., pattern=r"^0x[0-9a-fA-F]{64}$")
    blockNum: BlockNumber
    fromAddress: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    toAddress: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    value: BigInt = 0
    gasUsed: BigInt = 0
    gasPrice: BigInt = 0
    status: Optional[str] = None
    chainId: BigInt = 1
    timestamp: Optional[datetime] = None
    input: Optional[str] = None


class AlchemyEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    activity: List[AlchemyActivity] = Field(..., min_length=1)


class AlchemyWebhook(BaseModel):
    model_config = ConfigDict(extra="ignore")

    webhookId: Optional[str] = None
    id: Optional[str] = None
    createdAt: Optional[datetime] = None
    type: str
    event: AlchemyEvent


@dataclass(frozen=True)
class ProcessTransactionInput:
    tx_hash: str
    block_number: int
    timestamp: datetime
    network: str
    chain_id: int
    from_address: str
    to_address: str
    value: int
    gas_used: int
    gas_price: int
    status: str  # "success" | "failed"
    has_call_data: bool = False


class WebhookResult(BaseModel):
    processed: bool
    txHash: str
    transactionId: str
    duplicate: bool = False


class WebhookResponse(BaseModel):
    success: bool = True
    data: WebhookResult
