import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import ErrorCode, ErrorMessage, bad_request, internal_error, unauthorized
from webhooks.parser import parse_alchemy_webhook
from webhooks.pricing import get_usd_rate
from webhooks.processor import NATIVE_TOKEN_SYMBOL, get_transaction_by_hash, process_transaction
from webhooks.schemas import WebhookResponse
from webhooks.signature import verify_webhook_signature

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["Webhooks"])


@router.post("/alchemy", response_model=WebhookResponse)
async def alchemy_webhook(
    request: Request,
    x_alchemy_signature: str | None = Header(None),
    db: Session = Depends(get_db),
):
    # verify against the raw bytes, re-serialised JSON would not match
    body = await request.body()

    if not verify_webhook_signature(body, x_alchemy_signature):
        logger.error("Invalid webhook signature")
        raise unauthorized()

    try:
        payload = json.loads(body)
    except ValueError:
        raise bad_request(ErrorCode.INVALID_PAYLOAD, ErrorMessage.INVALID_PAYLOAD)

    logger.info("Received webhook: %s", payload.get("type") if isinstance(payload, dict) else None)

    data = parse_alchemy_webhook(payload)
    if not data:
        raise bad_request(ErrorCode.INVALID_PAYLOAD, ErrorMessage.INVALID_PAYLOAD)

    # redeliveries return the stored row, no price lookup needed
    usd_rate = None
    if not get_transaction_by_hash(db, data.tx_hash):
        usd_rate = await get_usd_rate(NATIVE_TOKEN_SYMBOL)

    try:
        txn, created = process_transaction(db, data, usd_rate)
    except SQLAlchemyError:
        logger.exception("Webhook processing failed for %s", data.tx_hash)
        raise internal_error()

    return {
        "success": True,
        "data": {
            "processed": True,
            "txHash": txn.tx_hash,
            "transactionId": txn.id,
            "duplicate": not created,
        },
    }


@router.get("/alchemy")
def alchemy_webhook_health():
    return {
        "status": "healthy",
        "service": "alchemy-webhook",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
