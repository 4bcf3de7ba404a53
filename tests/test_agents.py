"""Tests for the supervisor and strategy agents."""

import pytest
from langchain_core.messages import AIMessage, SystemMessage, ToolMessage

from agents.heuristic_agent import DECLINE_TEXT, HeuristicStrategyAgent
from agents.input_supervisor import InputSupervisorAgent
from agents.strategy_agent import (
    SYSTEM_INSTRUCTION,
    CriteriaDecision,
    ModelUnavailable,
    OpenAIStrategyAgent,
    describe_args,
)
from screening.models import FilteredToken
from screening.strategies import find_strategy
from tools.filter_tool import TOOL_NAME, get_langchain_tools


class FakeChatModel:
    """Replays scripted responses; Exceptions in the script are raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.bound = []
        self.calls = []

    def bind_tools(self, tools):
        self.bound.append(tools)
        return self

    def invoke(self, messages):
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class NotFound(Exception):
    status_code = 404


def _tool_call(args, call_id="call_1"):
    return AIMessage(content="", tool_calls=[{"name": "filterTokens", "args": args, "id": call_id}])


@pytest.fixture
def filter_tools(fake_client_cls, build_screener):
    return get_langchain_tools(build_screener(fake_client_cls([], {})))


# ---------------------------------------------------------------------------
# Input supervisor
# ---------------------------------------------------------------------------


def test_supervisor_builds_prompt_from_strategy():
    state = InputSupervisorAgent().run({"params": {"strategy": "aggressive"}})

    assert state["strategy"].title == "Aggressive"
    assert state["prompt"].startswith("I want to execute the Aggressive strategy. Look for tokens")
    assert state["prompt"].endswith("Use the filterTokens tool to find the best assets right now.")
    assert ".." not in state["prompt"]


def test_supervisor_keeps_explicit_prompt():
    state = InputSupervisorAgent().run({"params": {"strategy": "growth", "prompt": "  only solana please "}})
    assert state["prompt"] == "only solana please"
    assert state["strategy"].title == "Growth"


def test_supervisor_rejects_unknown_or_empty_input():
    with pytest.raises(ValueError, match="Unknown strategy"):
        InputSupervisorAgent().run({"params": {"strategy": "yolo"}})
    with pytest.raises(ValueError):
        InputSupervisorAgent().run({"params": {}})


# ---------------------------------------------------------------------------
# Heuristic agent
# ---------------------------------------------------------------------------


def test_heuristic_uses_catalog_defaults():
    prompt = InputSupervisorAgent.build_prompt(find_strategy("inflation-fighting"))

    decision = HeuristicStrategyAgent().decide_criteria(prompt)

    assert decision.wants_tool
    assert decision.args == {"minMarketCap": 50_000_000, "minLiquidity": 1_000_000}
    assert decision.criteria.min_liquidity == 1_000_000


def test_heuristic_declines_without_a_strategy():
    decision = HeuristicStrategyAgent().decide_criteria("what's the weather?")
    assert not decision.wants_tool
    assert decision.text == DECLINE_TEXT
    assert decision.criteria is None


def test_heuristic_summary_lists_top_three():
    tokens = [FilteredToken(symbol=f"T{i}", chain="solana", market_cap=f"${i}") for i in range(5)]
    agent = HeuristicStrategyAgent()
    prompt = "I want to execute the Growth strategy."

    text = agent.summarize(prompt, agent.decide_criteria(prompt), "[]", tokens)

    assert text.startswith("Growth screen: 5 token(s) matched.")
    assert "1. T0 (solana)" in text
    assert "3. T2" in text
    assert "T3" not in text


def test_heuristic_summary_suggests_relaxing_when_empty():
    agent = HeuristicStrategyAgent()
    text = agent.summarize("Aggressive", agent.decide_criteria("Aggressive"), "[]", [])
    assert "relaxing the constraints" in text


# ---------------------------------------------------------------------------
# OpenAI-backed agent
# ---------------------------------------------------------------------------


def test_openai_agent_reads_tool_call(filter_tools):
    llm = FakeChatModel(_tool_call({"chain": "solana", "minMarketCap": 5_000_000}))
    agent = OpenAIStrategyAgent(filter_tools, model="gpt-test", llm=llm)

    decision = agent.decide_criteria("Growth please")

    assert llm.bound == [filter_tools]
    assert [tool.name for tool in llm.bound[0]] == [TOOL_NAME]
    assert isinstance(llm.calls[0][0], SystemMessage)
    assert llm.calls[0][0].content == SYSTEM_INSTRUCTION
    assert decision.call_id == "call_1"
    assert decision.criteria.chain_filter == "solana"
    assert decision.criteria.min_market_cap == 5_000_000
    assert describe_args(decision) == '{"chain": "solana", "minMarketCap": 5000000}'


def test_openai_agent_text_reply_means_no_tool(filter_tools):
    agent = OpenAIStrategyAgent(filter_tools, llm=FakeChatModel(AIMessage(content="I only screen tokens.")))

    decision = agent.decide_criteria("hello")

    assert not decision.wants_tool
    assert decision.text == "I only screen tokens."


def test_openai_agent_summary_feeds_tool_result_back(filter_tools):
    first = _tool_call({"maxAgeDays": 7})
    llm = FakeChatModel(first, AIMessage(content=[{"type": "text", "text": "Top pick: BONK."}]))
    agent = OpenAIStrategyAgent(filter_tools, llm=llm)
    decision = agent.decide_criteria("Aggressive")

    text = agent.summarize("Aggressive", decision, '[{"symbol": "BONK"}]', [])

    messages = llm.calls[1]
    assert messages[2] is first
    assert isinstance(messages[3], ToolMessage)
    assert messages[3].tool_call_id == "call_1"
    assert messages[3].content == '[{"symbol": "BONK"}]'
    assert text == "Top pick: BONK."


def test_openai_agent_summary_synthesises_tool_call_message(filter_tools):
    llm = FakeChatModel(AIMessage(content="done"))
    agent = OpenAIStrategyAgent(filter_tools, llm=llm)

    agent.summarize("p", CriteriaDecision(args={"chain": "bsc"}), "[]", [])

    synthetic = llm.calls[0][2]
    assert isinstance(synthetic, AIMessage)
    assert synthetic.tool_calls[0]["name"] == "filterTokens"
    assert synthetic.tool_calls[0]["args"] == {"chain": "bsc"}


def test_openai_agent_wraps_failures(filter_tools):
    llm = FakeChatModel(NotFound("model gone"), RuntimeError("socket closed"))
    agent = OpenAIStrategyAgent(filter_tools, llm=llm)

    with pytest.raises(ModelUnavailable) as not_found:
        agent.decide_criteria("Growth")
    with pytest.raises(ModelUnavailable) as generic:
        agent.summarize("Growth", CriteriaDecision(args={}), "[]", [])

    assert not_found.value.status_code == 404
    assert generic.value.status_code is None


def test_model_unavailable_status_from_message_or_response():
    class Response:
        status_code = 503

    class WithResponse(Exception):
        response = Response()

    assert ModelUnavailable.from_exception(WithResponse("busy")).status_code == 503
    assert ModelUnavailable.from_exception(ValueError("Error code: 404 - model not found")).status_code == 404
