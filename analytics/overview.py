from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from core.enums import TransactionStatus
from core.formatting import as_utc
from core.models import Transaction
from core.networks import get_chain_id, get_network_name
from transactions.schemas import serialize_transaction

GRANULARITIES = ("hourly", "daily", "weekly", "monthly")

RECENT_TRANSACTIONS_LIMIT = 100


def period_start(ts: datetime, granularity: str) -> datetime:
    if granularity == "hourly":
        return ts.replace(minute=0, second=0, microsecond=0)
    day = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    if granularity == "daily":
        return day
    if granularity == "weekly":
        return day - timedelta(days=day.weekday())
    if granularity == "monthly":
        return day.replace(day=1)
    raise ValueError(f"Unknown granularity: {granularity}")


def period_end(start: datetime, granularity: str) -> datetime:
    if granularity == "hourly":
        return start + timedelta(hours=1)
    if granularity == "daily":
        return start + timedelta(days=1)
    if granularity == "weekly":
        return start + timedelta(days=7)
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def _volume(txn: Transaction) -> Decimal:
    return txn.to_fiat_amount if txn.to_fiat_amount is not None else Decimal("0")


def _gas_usd(txn: Transaction) -> Decimal:
    return txn.gas_fee_usd if txn.gas_fee_usd is not None else Decimal("0")


def _percent(part, whole) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _growth(current, previous) -> float:
    if not previous:
        return 0.0
    return round((float(current) - float(previous)) / float(previous) * 100, 2)


def _fetch(db: Session, start: datetime, end: datetime, include_end: bool = True):
    upper = Transaction.timestamp <= end if include_end else Transaction.timestamp < end
    return (
        db.query(Transaction)
        .filter(Transaction.timestamp >= start, upper)
        .order_by(Transaction.timestamp.desc())
        .all()
    )


def _bucket_metrics(transactions, granularity: str) -> list[dict]:
    buckets = {}

    for txn in transactions:
        start = period_start(as_utc(txn.timestamp), granularity)
        bucket = buckets.get(start)
        if bucket is None:
            bucket = buckets[start] = {
                "periodStart": start,
                "periodEnd": period_end(start, granularity),
                "granularity": granularity,
                "totalTransactions": 0,
                "successfulTransactions": 0,
                "failedTransactions": 0,
                "pendingTransactions": 0,
                "users": set(),
                "volumeUSD": Decimal("0"),
            }

        bucket["totalTransactions"] += 1
        if txn.status == TransactionStatus.COMPLETED.value:
            bucket["successfulTransactions"] += 1
        elif txn.status == TransactionStatus.FAILED.value:
            bucket["failedTransactions"] += 1
        elif txn.status == TransactionStatus.PENDING.value:
            bucket["pendingTransactions"] += 1
        bucket["users"].add(txn.user_id)
        bucket["volumeUSD"] += _volume(txn)

    metrics = []
    for start in sorted(buckets):
        bucket = buckets[start]
        users = bucket.pop("users")
        bucket["activeUsers"] = len(users)
        bucket["volumeUSD"] = float(bucket["volumeUSD"])
        bucket["successRate"] = _percent(bucket["successfulTransactions"], bucket["totalTransactions"])
        metrics.append(bucket)
    return metrics


def _network_stats(transactions) -> list[dict]:
    grouped = defaultdict(list)
    for txn in transactions:
        grouped[txn.network].append(txn)

    return [
        {
            "network": network,
            "name": get_network_name(network),
            "chainId": get_chain_id(network),
            "transactionCount": len(txns),
            "totalVolumeUSD": float(sum((_volume(t) for t in txns), Decimal("0"))),
            "uniqueUsers": len({t.user_id for t in txns}),
            "avgGasFeeUSD": float(sum((_gas_usd(t) for t in txns), Decimal("0")) / len(txns)),
        }
        for network, txns in sorted(grouped.items())
    ]


def _token_stats(transactions) -> list[dict]:
    grouped = defaultdict(list)
    for txn in transactions:
        grouped[txn.from_token_symbol].append(txn)

    stats = []
    for symbol, txns in sorted(grouped.items()):
        volume = sum((_volume(t) for t in txns), Decimal("0"))
        stats.append({
            "symbol": symbol,
            "transactionCount": len(txns),
            "totalVolumeUSD": float(volume),
            "avgTransactionSize": float(volume / len(txns)),
        })
    return stats


def get_overview(db: Session, days_back: int = 30, granularity: str = "daily", now: datetime | None = None):
    """
    Dashboard summary for the last ``days_back`` days.

    Growth figures compare against the window of the same length right
    before it.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity}")

    end = as_utc(now) if now else datetime.now(timezone.utc)
    start = end - timedelta(days=days_back)
    previous_start = start - timedelta(days=days_back)

    transactions = _fetch(db, start, end)
    previous = _fetch(db, previous_start, start, include_end=False)

    total = len(transactions)
    completed = sum(1 for t in transactions if t.status == TransactionStatus.COMPLETED.value)
    volume = sum((_volume(t) for t in transactions), Decimal("0"))
    active_users = len({t.user_id for t in transactions})

    previous_volume = sum((_volume(t) for t in previous), Decimal("0"))
    previous_users = len({t.user_id for t in previous})

    network_distribution = {}
    type_distribution = defaultdict(int)
    for txn in transactions:
        entry = network_distribution.setdefault(txn.network, {"transactions": 0, "volume": 0.0})
        entry["transactions"] += 1
        entry["volume"] += float(_volume(txn))
        type_distribution[txn.type] += 1

    return {
        "summary": {
            "totalTransactions": total,
            "totalVolumeUSD": float(volume),
            "activeUsers": active_users,
            "successRate": _percent(completed, total),
            "growthRate": _growth(total, len(previous)),
            "volumeGrowth": _growth(volume, previous_volume),
            "userGrowth": _growth(active_users, previous_users),
        },
        "periodStart": start,
        "periodEnd": end,
        "metrics": _bucket_metrics(transactions, granularity),
        "networkStats": _network_stats(transactions),
        "tokenStats": _token_stats(transactions),
        "networkDistribution": network_distribution,
        "typeDistribution": dict(type_distribution),
        "transactions": [serialize_transaction(t, include_user=False) for t in transactions[:RECENT_TRANSACTIONS_LIMIT]],
    }
