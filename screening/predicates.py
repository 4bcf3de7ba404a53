"""Numeric predicates applied to a pair record."""

from __future__ import annotations

from typing import Optional

from screening.models import FilterCriteria, is_constraint_set
from tools.dexscreener_client import TokenPair

MS_PER_DAY = 24 * 60 * 60 * 1000


def age_ms(pair: TokenPair, now_ms: int) -> Optional[int]:
    if not pair.pair_created_at:
        return None
    return now_ms - pair.pair_created_at


def age_days(pair: TokenPair, now_ms: int) -> Optional[int]:
    elapsed = age_ms(pair, now_ms)
    if elapsed is None:
        return None
    # int() truncates toward zero, also for pairs stamped slightly in the future
    return int(elapsed / MS_PER_DAY)


def _at_least(value: Optional[float], bound: Optional[float]) -> bool:
    if not is_constraint_set(bound):
        return True
    return value is not None and value >= bound


def _at_most(value: Optional[float], bound: Optional[float]) -> bool:
    if not is_constraint_set(bound):
        return True
    return value is not None and value <= bound


def meets_volume(pair: TokenPair, criteria: FilterCriteria) -> bool:
    return _at_least(pair.volume_24h, criteria.min_volume_24h)


def meets_liquidity(pair: TokenPair, criteria: FilterCriteria) -> bool:
    return _at_least(pair.liquidity_usd, criteria.min_liquidity)


def meets_market_cap(pair: TokenPair, criteria: FilterCriteria) -> bool:
    return _at_least(pair.market_cap, criteria.min_market_cap) and _at_most(
        pair.market_cap, criteria.max_market_cap
    )


def meets_age(pair: TokenPair, criteria: FilterCriteria, now_ms: int) -> bool:
    if not is_constraint_set(criteria.max_age_days):
        return True
    elapsed = age_ms(pair, now_ms)
    return elapsed is not None and elapsed <= criteria.max_age_days * MS_PER_DAY


def matches(pair: TokenPair, criteria: FilterCriteria, now_ms: int) -> bool:
    return (
        meets_volume(pair, criteria)
        and meets_liquidity(pair, criteria)
        and meets_market_cap(pair, criteria)
        and meets_age(pair, criteria, now_ms)
    )
