"""Static catalog of the selectable screening strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from screening.models import FilterCriteria


class StrategyType(str, Enum):
    AGGRESSIVE = "Aggressive"
    GROWTH = "Growth"
    INFLATION_FIGHTING = "Inflation Fighting"


@dataclass(frozen=True)
class Strategy:
    id: StrategyType
    title: str
    description: str
    prompt_context: str
    default_criteria: FilterCriteria

    @property
    def slug(self) -> str:
        return self.title.lower().replace(" ", "-")


STRATEGIES: Tuple[Strategy, ...] = (
    Strategy(
        id=StrategyType.AGGRESSIVE,
        title="Aggressive",
        description="High risk, high reward. Targets new launches with high volatility.",
        prompt_context=(
            "Look for tokens with low market cap (<$5M), high volume relative to liquidity, "
            "and very young age (<7 days)."
        ),
        default_criteria=FilterCriteria(max_market_cap=5_000_000, min_volume_24h=50_000, max_age_days=7),
    ),
    Strategy(
        id=StrategyType.GROWTH,
        title="Growth",
        description="Balanced approach. Targets established projects with upward momentum.",
        prompt_context=(
            "Look for tokens with mid market cap ($5M - $50M), consistent volume, "
            "and established positive price action."
        ),
        default_criteria=FilterCriteria(min_market_cap=5_000_000, max_market_cap=50_000_000, min_volume_24h=100_000),
    ),
    Strategy(
        id=StrategyType.INFLATION_FIGHTING,
        title="Inflation Fighting",
        description="Defensive strategy. Targets high liquidity and established track records.",
        prompt_context=(
            "Look for tokens with high market cap (>$50M), very high liquidity, "
            "and older age (>90 days)."
        ),
        default_criteria=FilterCriteria(min_market_cap=50_000_000, min_liquidity=1_000_000),
    ),
)


def find_strategy(key: str) -> Optional[Strategy]:
    """Look up a strategy by enum value, title or slug, ignoring case."""
    wanted = (key or "").strip().lower().replace("_", "-")
    for strategy in STRATEGIES:
        names = {strategy.id.value.lower(), strategy.title.lower(), strategy.slug, strategy.id.name.lower().replace("_", "-")}
        if wanted in names:
            return strategy
    return None
