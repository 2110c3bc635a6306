from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel

from transactions.schemas import TransactionItem


class Summary(BaseModel):
    totalTransactions: int
    totalVolumeUSD: float
    activeUsers: int
    successRate: float
    growthRate: float
    volumeGrowth: float
    userGrowth: float


class PeriodMetrics(BaseModel):
    periodStart: datetime
    periodEnd: datetime
    granularity: str
    totalTransactions: int
    successfulTransactions: int
    failedTransactions: int
    pendingTransactions: int
    activeUsers: int
    volumeUSD: float
    successRate: float


class NetworkStats(BaseModel):
    network: str
    name: str
    chainId: int
    transactionCount: int
    totalVolumeUSD: float
    uniqueUsers: int
    avgGasFeeUSD: float


class TokenStats(BaseModel):
    symbol: str
    transactionCount: int
    totalVolumeUSD: float
    avgTransactionSize: float


class NetworkShare(BaseModel):
    transactions: int
    volume: float


class Overview(BaseModel):
    summary: Summary
    periodStart: datetime
    periodEnd: datetime
    metrics: List[PeriodMetrics]
    networkStats: List[NetworkStats]
    tokenStats: List[TokenStats]
    networkDistribution: Dict[str, NetworkShare]
    typeDistribution: Dict[str, int]
    transactions: List[TransactionItem]


class OverviewResponse(BaseModel):
    success: bool = True
    data: Overview
