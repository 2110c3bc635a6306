import hashlib
import hmac
import logging

from core.config import settings

logger = logging.getLogger(__name__)

_UNSET = object()


def verify_webhook_signature(body: bytes, signature: str | None, secret=_UNSET) -> bool:
    """
    Check an Alchemy ``x-alchemy-signature`` header against the raw request body.

    The signature is the hex HMAC-SHA256 of the body bytes exactly as received.
    Never raises: anything unexpected counts as a failed verification.
    """
    if secret is _UNSET:
        secret = settings.ALCHEMY_WEBHOOK_SECRET

    if not secret:
        if settings.is_production:
            logger.error("ALCHEMY_WEBHOOK_SECRET is not set in production, rejecting webhook")
            return False
        logger.warning("ALCHEMY_WEBHOOK_SECRET is not set, skipping signature verification")
        return True

    if not signature:
        return False

    try:
        if isinstance(body, str):
            body = body.encode()
        digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
        return hmac.compare_digest(digest, signature.strip().lower())
    except (AttributeError, TypeError, ValueError, UnicodeError) as e:
        logger.warning("Could not verify webhook signature: %s", e)
        return False
