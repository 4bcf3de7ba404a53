"""Strategy-implied ordering of screened tokens."""

from __future__ import annotations

from typing import Iterable, List

from screening.models import FilterCriteria, FilteredToken, is_constraint_set

MOMENTUM_MAX_AGE_DAYS = 30
DEFENSIVE_MIN_MARKET_CAP = 10_000_000

SORT_VOLUME = "volume24hRaw"
SORT_LIQUIDITY = "liquidityRaw"
SORT_MARKET_CAP = "marketCapRaw"


def sort_key_for(criteria: FilterCriteria) -> str:
    """Young-pair screens rank by volume, large-cap screens by liquidity, else by cap."""
    if is_constraint_set(criteria.max_age_days) and criteria.max_age_days < MOMENTUM_MAX_AGE_DAYS:
        return SORT_VOLUME
    if is_constraint_set(criteria.min_market_cap) and criteria.min_market_cap > DEFENSIVE_MIN_MARKET_CAP:
        return SORT_LIQUIDITY
    return SORT_MARKET_CAP


_FIELDS = {
    SORT_VOLUME: "volume_24h_raw",
    SORT_LIQUIDITY: "liquidity_raw",
    SORT_MARKET_CAP: "market_cap_raw",
}


def rank(tokens: Iterable[FilteredToken], criteria: FilterCriteria) -> List[FilteredToken]:
    field = _FIELDS[sort_key_for(criteria)]
    # sorted() stays stable with reverse=True, so ties keep candidate order
    return sorted(tokens, key=lambda token: getattr(token, field), reverse=True)
