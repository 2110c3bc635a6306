from datetime import datetime, timezone
from decimal import Decimal


def format_token_amount(amount_wei: str | int, decimals: int = 18) -> Decimal:
    """Convert a base-unit integer amount into exact token units."""
    return Decimal(f"{int(amount_wei)}e-{decimals}")


def format_address(address: str, start_chars: int = 6, end_chars: int = 4) -> str:
    if not address:
        return ""
    if len(address) <= start_chars + end_chars:
        return address
    return f"{address[:start_chars]}...{address[-end_chars:]}"


def as_utc(value: datetime | None) -> datetime:
    """Timezone-aware UTC datetime; naive values are taken to be UTC already."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
