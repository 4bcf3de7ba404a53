"""Shape a pair record into a display-ready FilteredToken."""

from __future__ import annotations

from typing import Optional

from screening.models import FilteredToken
from screening.predicates import age_days
from tools.dexscreener_client import TokenPair

NA = "N/A"


def _safe_float(value: Optional[str]) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def fmt_usd(value: Optional[float]) -> str:
    """en-US grouping with at most three fraction digits: 1234.5 -> "$1,234.5"."""
    if value is None:
        return NA
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def fmt_price(value: Optional[float]) -> str:
    return f"${value:.6f}" if value is not None else NA


def fmt_pct(value: Optional[float]) -> str:
    return f"{value:.2f}%" if value is not None else NA


def fmt_age(days: Optional[int]) -> str:
    return f"{days} days" if days is not None else NA


def to_filtered_token(pair: TokenPair, now_ms: int) -> FilteredToken:
    days = age_days(pair, now_ms)
    return FilteredToken(
        name=pair.base_token.name,
        symbol=pair.base_token.symbol,
        chain=pair.chain_id,
        dex=pair.dex_id,
        liquidity=fmt_usd(pair.liquidity_usd),
        liquidity_raw=pair.liquidity_usd or 0,
        price=fmt_price(_safe_float(pair.price_usd)),
        market_cap=fmt_usd(pair.market_cap),
        market_cap_raw=pair.market_cap or 0,
        volume_24h=fmt_usd(pair.volume_24h),
        volume_24h_raw=pair.volume_24h or 0,
        price_change_24h=fmt_pct(pair.price_change_24h),
        price_change_raw=pair.price_change_24h or 0,
        age=fmt_age(days),
        age_days=days or 0,
        website=pair.website_url or NA,
        twitter=pair.twitter_url or NA,
        dexscreener_url=pair.url,
    )
