"""LangGraph-based orchestrator for one strategy run: decide -> screen -> summarize."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypedDict

from langgraph.graph import END, START, StateGraph
from pydantic import BaseModel

from agents.heuristic_agent import DECLINE_TEXT, HeuristicStrategyAgent
from agents.input_supervisor import InputSupervisorAgent
from agents.strategy_agent import (
    CriteriaDecision,
    ModelUnavailable,
    OpenAIStrategyAgent,
    StrategyAgent,
    describe_args,
)
from agents.token_screener import TokenScreenerAgent
from screening.models import FilterCriteria, FilteredToken
from screening.strategies import Strategy
from settings import Settings
from tools.filter_tool import (
    MalformedToolResult,
    get_langchain_tools,
    parse_tool_result,
    run_filter_tool,
    tool_error,
)

logger = logging.getLogger(__name__)

LogFn = Callable[[str], None]

MODEL_NOT_FOUND_TEXT = (
    "Error: The AI model is currently unavailable (404). Please try again later or check API configuration."
)
MODEL_ERROR_TEXT = "An error occurred while communicating with the AI Agent."
EMPTY_SUMMARY_TEXT = "Analysis complete."


class AgentResult(BaseModel):
    text: str
    tokens: Optional[List[FilteredToken]] = None
    criteria: Optional[FilterCriteria] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text": self.text}
        if self.tokens is not None:
            payload["tokens"] = [token.to_payload() for token in self.tokens]
        return payload


class RunState(TypedDict, total=False):
    params: Dict
    strategy: Strategy
    prompt: str
    decision: CriteriaDecision
    tool_result: str
    tokens: Optional[List[FilteredToken]]
    text: str
    done: bool


def _model_error_text(exc: ModelUnavailable) -> str:
    if exc.status_code == 404:
        return MODEL_NOT_FOUND_TEXT
    return MODEL_ERROR_TEXT


def build_strategy_agent(settings: Settings, screener: TokenScreenerAgent) -> StrategyAgent:
    if settings.llm_enabled:
        return OpenAIStrategyAgent(
            tools=get_langchain_tools(screener),
            model=settings.openai_model,
            temperature=settings.temperature,
            api_key=settings.openai_api_key,
        )
    logger.info("OPENAI_API_KEY not set; using the heuristic strategy agent")
    return HeuristicStrategyAgent()


class AgentOrchestrator:
    """Wires the supervisor, strategy agent and token screener into one graph."""

    def __init__(self, agent: StrategyAgent, screener: TokenScreenerAgent) -> None:
        self.agent = agent
        self.screener = screener
        self.supervisor = InputSupervisorAgent()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentOrchestrator":
        screener = TokenScreenerAgent.from_settings(settings)
        return cls(build_strategy_agent(settings, screener), screener)

    def _build_graph(self, log: LogFn):
        graph: StateGraph[RunState] = StateGraph(RunState)

        def supervisor_node(state: RunState) -> RunState:
            self.supervisor.run(state)  # type: ignore[arg-type]
            update: RunState = {"prompt": state["prompt"]}
            if state.get("strategy") is not None:
                strategy = state["strategy"]
                log(f"System initiated. Selected Protocol: {strategy.title.upper()}")
                update["strategy"] = strategy
            return update

        def decide_node(state: RunState) -> RunState:
            log(f"Reasoning with {self.agent.model_label}...")
            try:
                decision = self.agent.decide_criteria(state["prompt"])
            except ModelUnavailable as exc:
                logger.exception("Agent error while choosing criteria")
                return {"text": _model_error_text(exc), "tokens": None, "done": True}
            if not decision.wants_tool:
                return {"decision": decision, "text": decision.text or DECLINE_TEXT, "tokens": None, "done": True}
            return {"decision": decision}

        def screen_node(state: RunState) -> RunState:
            decision = state["decision"]
            log(f"Agent invoking tool: filterTokens({describe_args(decision)})")
            raw = run_filter_tool(self.screener, decision.args)
            error = tool_error(raw)
            if error:
                log(f"Tool failed: {error}")
                return {"tool_result": raw, "text": error, "tokens": None, "done": True}
            try:
                tokens = parse_tool_result(raw)
            except MalformedToolResult:
                logger.exception("Failed to parse tool result for UI")
                tokens = []
            log(f"Tool execution complete. Found {len(tokens)} tokens. Synthesizing response...")
            return {"tool_result": raw, "tokens": tokens}

        def summarize_node(state: RunState) -> RunState:
            tokens = state.get("tokens") or []
            try:
                text = self.agent.summarize(state["prompt"], state["decision"], state["tool_result"], tokens)
            except ModelUnavailable as exc:
                logger.exception("Agent error while summarizing")
                return {"text": _model_error_text(exc), "tokens": None, "done": True}
            return {"text": text or EMPTY_SUMMARY_TEXT}

        def _after(state: RunState) -> str:
            return "stop" if state.get("done") else "next"

        graph.add_node("supervisor", supervisor_node)
        graph.add_node("decide", decide_node)
        graph.add_node("screen", screen_node)
        graph.add_node("summarize", summarize_node)

        graph.add_edge(START, "supervisor")
        graph.add_edge("supervisor", "decide")
        graph.add_conditional_edges("decide", _after, {"next": "screen", "stop": END})
        graph.add_conditional_edges("screen", _after, {"next": "summarize", "stop": END})
        graph.add_edge("summarize", END)
        return graph.compile()

    def run(
        self,
        prompt: Optional[str] = None,
        strategy: Optional[str] = None,
        on_log: Optional[LogFn] = None,
    ) -> AgentResult:
        def log(message: str) -> None:
            logger.info(message)
            if on_log is not None:
                on_log(message)

        log("Initializing Agent...")
        app = self._build_graph(log)
        initial_state: RunState = {"params": {"prompt": prompt, "strategy": strategy}}
        final_state = app.invoke(initial_state)
        decision = final_state.get("decision")
        return AgentResult(
            text=final_state.get("text") or EMPTY_SUMMARY_TEXT,
            tokens=final_state.get("tokens"),
            criteria=decision.criteria if decision is not None else None,
        )


def run_agent(prompt: str, settings: Settings, on_log: Optional[LogFn] = None) -> AgentResult:
    return AgentOrchestrator.from_settings(settings).run(prompt=prompt, on_log=on_log)
