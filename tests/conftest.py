"""Shared fixtures: DexScreener payload builders and an in-memory market data client."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Union

import pytest

from agents.token_screener import TokenScreenerAgent
from tools.dexscreener_client import BoostedCandidate, DataSourceUnavailable, TokenPair

NOW_MS = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


def _boost(address: str, chain: str = "solana") -> Dict:
    return {
        "url": f"https://dexscreener.com/{chain}/{address}",
        "chainId": chain,
        "tokenAddress": address,
        "amount": 100,
        "totalAmount": 500,
        "description": f"{address} promo",
    }


def _pair(
    symbol: str,
    chain: str = "solana",
    market_cap: Optional[float] = 1_000_000,
    volume: Optional[float] = 100_000,
    liquidity: Optional[float] = 50_000,
    price_change: Optional[float] = 1.5,
    age_days: Optional[float] = 10,
    price_usd: Optional[str] = "0.0123",
) -> Dict:
    payload: Dict = {
        "chainId": chain,
        "dexId": "raydium",
        "url": f"https://dexscreener.com/{chain}/{symbol.lower()}-pair",
        "pairAddress": f"{symbol.lower()}-pair",
        "baseToken": {"address": f"{symbol.lower()}-mint", "name": f"{symbol} Token", "symbol": symbol},
        "info": {
            "websites": [{"url": f"https://{symbol.lower()}.xyz"}],
            "socials": [
                {"platform": "telegram", "url": f"https://t.me/{symbol.lower()}"},
                {"platform": "twitter", "url": f"https://x.com/{symbol.lower()}"},
            ],
        },
    }
    if price_usd is not None:
        payload["priceUsd"] = price_usd
    if market_cap is not None:
        payload["marketCap"] = market_cap
    if volume is not None:
        payload["volume"] = {"h24": volume}
    if liquidity is not None:
        payload["liquidity"] = {"usd": liquidity}
    if price_change is not None:
        payload["priceChange"] = {"h24": price_change}
    if age_days is not None:
        payload["pairCreatedAt"] = int(NOW_MS - age_days * DAY_MS)
    return payload


class FakeDexClient:
    """Serves canned boosts and pair payloads; an Exception value is raised on lookup."""

    def __init__(
        self,
        boosts: List[Dict],
        pairs: Dict[str, Union[Dict, Exception, None]],
        list_error: Optional[Exception] = None,
    ) -> None:
        self.boosts = boosts
        self.pairs = pairs
        self.list_error = list_error
        self.detail_calls: List[str] = []
        self._lock = threading.Lock()

    def list_boosted(self) -> List[BoostedCandidate]:
        if self.list_error is not None:
            raise self.list_error
        return [BoostedCandidate.model_validate(item) for item in self.boosts]

    def get_pair_detail(self, token_address: str) -> Optional[TokenPair]:
        with self._lock:
            self.detail_calls.append(token_address)
        value = self.pairs.get(token_address)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return None
        return TokenPair.model_validate(value)


@pytest.fixture
def make_boost():
    return _boost


@pytest.fixture
def make_pair():
    return _pair


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def build_screener():
    def _build(client: FakeDexClient, **kwargs) -> TokenScreenerAgent:
        params = {"max_jitter_seconds": 0, "clock": lambda: NOW_MS}
        params.update(kwargs)
        return TokenScreenerAgent(client=client, **params)

    return _build


@pytest.fixture
def fake_client_cls():
    return FakeDexClient


@pytest.fixture
def feed_down() -> DataSourceUnavailable:
    return DataSourceUnavailable("Failed to fetch boosted tokens")
