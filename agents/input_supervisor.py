"""Input Supervisor: resolve the selected strategy and build the agent prompt."""

from __future__ import annotations

from typing import Dict, Optional

from screening.strategies import STRATEGIES, Strategy, find_strategy


class InputSupervisorAgent:
    """Normalises a strategy selection into the prompt the agent reasons over."""

    def __init__(self) -> None:
        pass

    @staticmethod
    def resolve(selection: str) -> Strategy:
        strategy = find_strategy(selection)
        if strategy is None:
            choices = ", ".join(s.slug for s in STRATEGIES)
            raise ValueError(f"Unknown strategy {selection!r}; choose one of: {choices}")
        return strategy

    @staticmethod
    def build_prompt(strategy: Strategy) -> str:
        return (
            f"I want to execute the {strategy.title} strategy. {strategy.prompt_context.rstrip('.')}. "
            "Use the filterTokens tool to find the best assets right now."
        )

    def run(self, state: Dict) -> Dict:
        params: Dict = state.get("params", {})
        prompt: Optional[str] = (params.get("prompt") or "").strip() or None
        selection = params.get("strategy")
        if selection:
            strategy = self.resolve(selection)
            state["strategy"] = strategy
            prompt = prompt or self.build_prompt(strategy)
        if not prompt:
            raise ValueError("Either a strategy or a prompt is required")
        state["prompt"] = prompt
        return state
