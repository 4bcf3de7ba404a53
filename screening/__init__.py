"""Pure helpers for filtering, ranking and formatting screened tokens."""

from .models import FilterCriteria, FilteredToken
from .strategies import STRATEGIES, Strategy, StrategyType, find_strategy

__all__ = [
    "FilterCriteria",
    "FilteredToken",
    "STRATEGIES",
    "Strategy",
    "StrategyType",
    "find_strategy",
]
