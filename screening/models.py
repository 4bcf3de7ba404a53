"""Criteria and output records shared by the pipeline, the agents and the UI."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def is_constraint_set(value: Optional[float]) -> bool:
    """A numeric constraint of None or 0 places no restriction on its dimension."""
    return value is not None and value != 0


class FilterCriteria(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain: Optional[str] = None
    min_volume_24h: Optional[float] = Field(default=None, alias="minVolume24h")
    min_liquidity: Optional[float] = Field(default=None, alias="minLiquidity")
    min_market_cap: Optional[float] = Field(default=None, alias="minMarketCap")
    max_market_cap: Optional[float] = Field(default=None, alias="maxMarketCap")
    max_age_days: Optional[float] = Field(default=None, alias="maxAgeDays")

    @property
    def chain_filter(self) -> Optional[str]:
        chain = (self.chain or "").strip()
        return chain.lower() if chain else None

    def to_args(self) -> Dict[str, Any]:
        """camelCase arguments with unset fields dropped, as the tool boundary expects."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FilteredToken(BaseModel):
    """Display-ready token row.

    Each ``*_raw`` number and its formatted twin come from the same source
    value. Missing values are 0 and "N/A" respectively.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    symbol: str = ""
    chain: str = ""
    dex: str = ""
    liquidity: str = "N/A"
    liquidity_raw: float = Field(default=0, alias="liquidityRaw")
    price: str = "N/A"
    market_cap: str = Field(default="N/A", alias="marketCap")
    market_cap_raw: float = Field(default=0, alias="marketCapRaw")
    volume_24h: str = Field(default="N/A", alias="volume24h")
    volume_24h_raw: float = Field(default=0, alias="volume24hRaw")
    price_change_24h: str = Field(default="N/A", alias="priceChange24h")
    price_change_raw: float = Field(default=0, alias="priceChangeRaw")
    age: str = "N/A"
    age_days: int = Field(default=0, alias="ageDays")
    website: str = "N/A"
    twitter: str = "N/A"
    dexscreener_url: str = Field(default="", alias="dexScreenerUrl")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
