import logging

from core.config import settings
from webhooks.signature import verify_webhook_signature

from helpers import WEBHOOK_SECRET, encode, make_envelope, sign


BODY = encode(make_envelope())


def test_valid_signature_is_accepted():
    assert verify_webhook_signature(BODY, sign(BODY), secret=WEBHOOK_SECRET)


def test_uppercase_hex_signature_is_accepted():
    assert verify_webhook_signature(BODY, sign(BODY).upper(), secret=WEBHOOK_SECRET)


def test_every_single_byte_flip_is_rejected():
    signature = sign(BODY)
    for i in range(0, len(BODY), 7):
        tampered = bytearray(BODY)
        tampered[i] ^= 0x01
        assert not verify_webhook_signature(bytes(tampered), signature, secret=WEBHOOK_SECRET)


def test_wrong_secret_is_rejected():
    assert not verify_webhook_signature(BODY, sign(BODY, "other-secret"), secret=WEBHOOK_SECRET)


def test_missing_signature_fails_closed():
    assert not verify_webhook_signature(BODY, None, secret=WEBHOOK_SECRET)
    assert not verify_webhook_signature(BODY, "", secret=WEBHOOK_SECRET)


def test_malformed_signature_fails_closed():
    assert not verify_webhook_signature(BODY, "not-hex", secret=WEBHOOK_SECRET)
    assert not verify_webhook_signature(BODY, "é" * 64, secret=WEBHOOK_SECRET)


def test_unusable_body_does_not_raise():
    assert not verify_webhook_signature(object(), sign(BODY), secret=WEBHOOK_SECRET)


def test_missing_secret_accepted_outside_production(monkeypatch, caplog):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")

    with caplog.at_level(logging.WARNING, logger="webhooks.signature"):
        assert verify_webhook_signature(BODY, None, secret=None)

    assert "skipping signature verification" in caplog.text


def test_missing_secret_rejected_in_production(monkeypatch, caplog):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    with caplog.at_level(logging.ERROR, logger="webhooks.signature"):
        assert not verify_webhook_signature(BODY, sign(BODY), secret=None)

    assert "rejecting webhook" in caplog.text


def test_secret_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "ALCHEMY_WEBHOOK_SECRET", WEBHOOK_SECRET)

    assert verify_webhook_signature(BODY, sign(BODY))
    assert not verify_webhook_signature(BODY, sign(BODY, "other-secret"))
