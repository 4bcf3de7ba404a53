"""Heuristic Agent: catalog-driven criteria and templated summary when no LLM key is set."""

from __future__ import annotations

from typing import List, Optional

from agents.strategy_agent import CriteriaDecision
from screening.models import FilteredToken
from screening.strategies import STRATEGIES, Strategy
from tools.filter_tool import TOOL_NAME

DECLINE_TEXT = "I couldn't process that request."


class HeuristicStrategyAgent:
    """Deterministic stand-in for the chat model.

    Picks the catalog defaults of the strategy named in the prompt and writes
    a short top-3 digest of whatever the screen returned.
    """

    model_label = "heuristic"

    def __init__(self, top_n: int = 3) -> None:
        self.top_n = top_n

    @staticmethod
    def _match(prompt: str) -> Optional[Strategy]:
        text = (prompt or "").lower()
        # longest title first so "Inflation Fighting" wins over any shorter overlap
        for strategy in sorted(STRATEGIES, key=lambda s: len(s.title), reverse=True):
            if strategy.title.lower() in text:
                return strategy
        return None

    def decide_criteria(self, prompt: str) -> CriteriaDecision:
        strategy = self._match(prompt)
        if strategy is None:
            return CriteriaDecision(text=DECLINE_TEXT)
        return CriteriaDecision(args=strategy.default_criteria.to_args(), call_id=TOOL_NAME)

    def summarize(
        self,
        prompt: str,
        decision: CriteriaDecision,
        tool_result: str,
        tokens: List[FilteredToken],
    ) -> str:
        strategy = self._match(prompt)
        heading = f"{strategy.title} screen" if strategy else "Screen"
        if not tokens:
            return (
                f"{heading}: no tokens matched the current criteria.\n"
                "Consider relaxing the constraints (lower volume or liquidity floors, wider market cap range)."
            )

        lines = [f"{heading}: {len(tokens)} token(s) matched. Top candidates:"]
        for idx, token in enumerate(tokens[: self.top_n], start=1):
            lines.append(
                f"{idx}. {token.symbol} ({token.chain}) - mcap {token.market_cap}, "
                f"24h vol {token.volume_24h}, liquidity {token.liquidity}, 24h {token.price_change_24h}"
            )
        lines.append("Data is a point-in-time DexScreener snapshot; verify before acting.")
        return "\n".join(lines)
