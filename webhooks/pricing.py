import logging
from decimal import Decimal, InvalidOperation

import httpx

from core.config import settings

logger = logging.getLogger(__name__)

# token symbol -> CoinGecko asset id
COINGECKO_IDS = {
    "ETH": "ethereum",
    "WETH": "weth",
    "USDC": "usd-coin",
    "USDT": "tether",
    "DAI": "dai",
    "BNB": "binancecoin",
}


async def get_usd_rate(symbol: str = "ETH") -> Decimal | None:
    """USD price of one token unit, or None when it cannot be determined."""
    if not settings.PRICE_FEED_ENABLED:
        return None

    asset_id = COINGECKO_IDS.get(symbol.upper())
    if not asset_id:
        logger.warning("No price feed id for token %s", symbol)
        return None

    params = {"ids": asset_id, "vs_currencies": "usd"}

    try:
        async with httpx.AsyncClient(timeout=settings.PRICE_FEED_TIMEOUT) as client:
            response = await client.get(settings.PRICE_FEED_URL, params=params)
        response.raise_for_status()
        return Decimal(str(response.json()[asset_id]["usd"]))
    except (httpx.HTTPError, KeyError, TypeError, ValueError, InvalidOperation) as e:
        logger.warning("Price feed lookup for %s failed: %s", symbol, e)
        return None
