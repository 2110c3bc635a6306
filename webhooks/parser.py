import logging

from pydantic import ValidationError

from core.formatting import as_utc
from core.networks import UnsupportedNetworkError, get_network_from_chain_id
from webhooks.schemas import AlchemyWebhook, ProcessTransactionInput

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "0x1"


def parse_alchemy_webhook(payload) -> ProcessTransactionInput | None:
    """
    Extract the first activity entry of an Alchemy webhook envelope.

    Returns ``None`` when the envelope does not validate, carries no activity,
    or reports a chain this service does not track.
    """
    try:
        envelope = AlchemyWebhook.model_validate(payload)
    except ValidationError as e:
        logger.error("No usable activity in webhook payload: %d validation error(s)", e.error_count())
        return None

    tx = envelope.event.activity[0]

    try:
        network = get_network_from_chain_id(tx.chainId)
    except UnsupportedNetworkError as e:
        logger.error("Ignoring webhook for %s: %s", tx.hash, e)
        return None

    return ProcessTransactionInput(
        tx_hash=tx.hash.lower(),
        block_number=tx.blockNum,
        timestamp=as_utc(tx.timestamp),
        network=network,
        chain_id=tx.chainId,
        from_address=tx.fromAddress.lower(),
        to_address=tx.toAddress.lower(),
        value=tx.value,
        gas_used=tx.gasUsed,
        gas_price=tx.gasPrice,
        status="success" if tx.status == SUCCESS_STATUS else "failed",
        has_call_data=bool(tx.input and tx.input not in ("0x", "0x0")),
    )
