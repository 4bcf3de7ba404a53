"""Strategy Agent: an LLM picks filterTokens arguments and summarises the result."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import BaseTool
from langchain_openai import ChatOpenAI

from screening.models import FilterCriteria, FilteredToken
from tools.filter_tool import TOOL_NAME, FilterTokensInput

SYSTEM_INSTRUCTION = """You are OSSY, an advanced AI Agent for on-chain token research.
Your primary function is to analyze cryptocurrency tokens using real-time data from DexScreener.

You have access to a tool named "filterTokens" which screens the DexScreener boosted-token feed.

When a user selects a strategy (Aggressive, Growth, Inflation Fighting), you must:
1. Determine the optimal numerical parameters for the filterTokens tool based on that strategy.
   - Aggressive: High risk. Low caps, new tokens.
   - Growth: Medium risk. Established, rising volume.
   - Inflation Fighting: Low risk. High liquidity, high cap, old tokens.
2. Call the tool.
3. Analyze the JSON data returned by the tool.
4. Provide a concise, professional financial summary of the findings, highlighting the top 3 potential candidates.

Be strictly data-driven. Do not hallucinate token data. If no tokens are found, suggest relaxing the constraints."""


class ModelUnavailable(RuntimeError):
    """The language model endpoint failed or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: Exception) -> "ModelUnavailable":
        status = getattr(exc, "status_code", None)
        if status is None:
            status = getattr(getattr(exc, "response", None), "status_code", None)
        if status is None and "404" in str(exc):
            status = 404
        return cls(f"{exc.__class__.__name__}: {exc}", status_code=status)


@dataclass
class CriteriaDecision:
    """Outcome of the reasoning step.

    ``args`` is None when the model answered without calling filterTokens; in
    that case ``text`` carries its reply.
    """

    args: Optional[Dict[str, Any]] = None
    text: str = ""
    call_id: Optional[str] = None
    message: Any = None

    @property
    def wants_tool(self) -> bool:
        return self.args is not None

    @property
    def criteria(self) -> Optional[FilterCriteria]:
        if self.args is None:
            return None
        try:
            return FilterTokensInput.model_validate(self.args).to_criteria()
        except ValueError:
            return None


class StrategyAgent(Protocol):
    model_label: str

    def decide_criteria(self, prompt: str) -> CriteriaDecision:
        ...

    def summarize(
        self,
        prompt: str,
        decision: CriteriaDecision,
        tool_result: str,
        tokens: List[FilteredToken],
    ) -> str:
        ...


def _content_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if content is None:
        return ""
    if isinstance(content, list):
        parts = [part.get("text", "") if isinstance(part, dict) else str(part) for part in content]
        return "".join(parts).strip()
    return str(content).strip()


class OpenAIStrategyAgent:
    """Tool-calling agent backed by an OpenAI chat model.

    ``tools`` are the LangChain tools bound for the reasoning step, normally
    ``tools.filter_tool.get_langchain_tools(screener)``.
    """

    def __init__(
        self,
        tools: Sequence[BaseTool],
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        api_key: Optional[str] = None,
        llm: Any = None,
    ) -> None:
        self.tools = list(tools)
        self.model = model
        self.model_label = model
        self.llm = llm or ChatOpenAI(model=model, temperature=temperature, api_key=api_key)

    def decide_criteria(self, prompt: str) -> CriteriaDecision:
        messages = [SystemMessage(content=SYSTEM_INSTRUCTION), HumanMessage(content=prompt)]
        try:
            response = self.llm.bind_tools(self.tools).invoke(messages)
        except Exception as exc:
            raise ModelUnavailable.from_exception(exc) from exc

        for call in getattr(response, "tool_calls", None) or []:
            if call.get("name") == TOOL_NAME:
                return CriteriaDecision(
                    args=dict(call.get("args") or {}),
                    call_id=call.get("id") or TOOL_NAME,
                    message=response,
                )
        return CriteriaDecision(text=_content_text(response), message=response)

    def summarize(
        self,
        prompt: str,
        decision: CriteriaDecision,
        tool_result: str,
        tokens: List[FilteredToken],
    ) -> str:
        call_id = decision.call_id or TOOL_NAME
        tool_call_message = decision.message
        if not isinstance(tool_call_message, AIMessage):
            tool_call_message = AIMessage(
                content="",
                tool_calls=[{"name": TOOL_NAME, "args": decision.args or {}, "id": call_id}],
            )
        messages = [
            SystemMessage(content=SYSTEM_INSTRUCTION),
            HumanMessage(content=prompt),
            tool_call_message,
            ToolMessage(content=tool_result, tool_call_id=call_id),
        ]
        try:
            response = self.llm.invoke(messages)
        except Exception as exc:
            raise ModelUnavailable.from_exception(exc) from exc
        return _content_text(response)


def describe_args(decision: CriteriaDecision) -> str:
    return json.dumps(decision.args or {}, sort_keys=True)
