"""The ``filterTokens`` agent capability: JSON arguments in, JSON string out."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field, ValidationError

from screening.models import FilterCriteria, FilteredToken
from tools.dexscreener_client import DataSourceUnavailable

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from agents.token_screener import TokenScreenerAgent

logger = logging.getLogger(__name__)

TOOL_NAME = "filterTokens"
TOOL_DESCRIPTION = (
    "Filter cryptocurrency tokens from DexScreener based on financial criteria like volume, "
    "liquidity, market cap, and age."
)
RATE_LIMIT_MESSAGE = "Error filtering tokens. The DexScreener API might be rate-limiting requests."


class FilterTokensInput(BaseModel):
    """Argument schema shown to the model; field names follow the wire contract."""

    chain: Optional[str] = Field(
        default=None, description='Filter tokens by blockchain (e.g., "solana", "ethereum", "bsc")'
    )
    minVolume24h: Optional[float] = Field(default=None, description="Minimum 24-hour trading volume in USD")
    minLiquidity: Optional[float] = Field(default=None, description="Minimum liquidity in USD")
    minMarketCap: Optional[float] = Field(default=None, description="Minimum market capitalization in USD")
    maxMarketCap: Optional[float] = Field(default=None, description="Maximum market capitalization in USD")
    maxAgeDays: Optional[float] = Field(default=None, description="Maximum age of the token pair in days")

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria.model_validate(self.model_dump(exclude_none=True))


class MalformedToolResult(ValueError):
    """The tool output could not be read back as a list of tokens."""


def _error(message: str) -> str:
    return json.dumps({"error": message})


def tool_error(raw: str) -> Optional[str]:
    """Return the message of an ``{"error": ...}`` result, else None."""
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return None


def parse_tool_result(raw: str) -> List[FilteredToken]:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedToolResult("filterTokens result is not valid JSON") from exc
    if not isinstance(payload, list):
        raise MalformedToolResult("filterTokens result is not a JSON array")
    try:
        return [FilteredToken.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise MalformedToolResult("filterTokens result holds malformed token rows") from exc


def run_filter_tool(screener: "TokenScreenerAgent", args: Optional[Dict[str, Any]]) -> str:
    try:
        criteria = FilterTokensInput.model_validate(args or {}).to_criteria()
    except ValidationError as exc:
        logger.warning("Rejected filterTokens arguments %s: %s", args, exc)
        return _error(f"Invalid filterTokens arguments: {exc.error_count()} error(s)")

    logger.info("filterTokens called with %s", criteria.to_args())
    try:
        tokens = screener.filter_tokens(criteria)
    except DataSourceUnavailable:
        logger.exception("Error filtering tokens")
        return _error(RATE_LIMIT_MESSAGE)
    return json.dumps([token.to_payload() for token in tokens])


def get_langchain_tools(screener: "TokenScreenerAgent") -> List[BaseTool]:
    return [
        StructuredTool.from_function(
            name=TOOL_NAME,
            description=TOOL_DESCRIPTION,
            func=lambda **tool_kwargs: run_filter_tool(screener, tool_kwargs),
            args_schema=FilterTokensInput,
        ),
    ]
