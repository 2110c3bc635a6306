import hashlib
import hmac
import json

WEBHOOK_SECRET = "whsec_test_secret"
WEBHOOK_URL = "/api/webhooks/alchemy"

SENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"


def sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def tx_hash(n: int) -> str:
    return "0x" + f"{n:064x}"


def make_activity(**overrides) -> dict:
    activity = {
        "hash": "0x" + "ab" * 32,
        "blockNum": "0x12d687",
        "fromAddress": SENDER,
        "toAddress": RECIPIENT,
        "value": "1000000000000000000",
        "gasUsed": "21000",
        "gasPrice": "30000000000",
        "status": "0x1",
        "chainId": "1",
        "timestamp": "2025-01-15T12:00:00Z",
    }
    activity.update(overrides)
    return activity


def make_envelope(*activities) -> dict:
    return {
        "webhookId": "wh_test",
        "id": "whevt_test",
        "createdAt": "2025-01-15T12:00:01Z",
        "type": "ADDRESS_ACTIVITY",
        "event": {
            "network": "ETH_MAINNET",
            "activity": list(activities) if activities else [make_activity()],
        },
    }


def encode(payload) -> bytes:
    return json.dumps(payload).encode()


def ingest(db, n: int, **overrides):
    """Store a transaction through the real pipeline and return it."""
    from webhooks.parser import parse_alchemy_webhook
    from webhooks.processor import process_transaction

    usd_rate = overrides.pop("usd_rate", None)
    data = parse_alchemy_webhook(make_envelope(make_activity(hash=tx_hash(n), **overrides)))
    txn, _ = process_transaction(db, data, usd_rate)
    return txn
