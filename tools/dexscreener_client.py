"""DexScreener HTTP client: boosted listings and per-token pair details."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from settings import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

BOOSTS_PATH = "/token-boosts/top/v1"
TOKEN_PAIRS_PATH = "/latest/dex/tokens/{address}"


class DexScreenerError(RuntimeError):
    """Base class for market data failures."""


class DataSourceUnavailable(DexScreenerError):
    """The boosted-candidate list could not be retrieved; the run cannot continue."""


class DetailUnavailable(DexScreenerError):
    """A single candidate's pair detail could not be retrieved."""


class BoostedCandidate(BaseModel):
    """Token promoted through the paid "top boosts" feed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: Optional[str] = None
    chain_id: str = Field(alias="chainId")
    token_address: str = Field(alias="tokenAddress")
    amount: Optional[float] = None
    total_amount: Optional[float] = Field(default=None, alias="totalAmount")
    description: Optional[str] = None


class BaseTokenInfo(BaseModel):
    address: Optional[str] = None
    name: str = ""
    symbol: str = ""


class LiquidityInfo(BaseModel):
    usd: Optional[float] = None


class VolumeInfo(BaseModel):
    h24: Optional[float] = None


class PriceChangeInfo(BaseModel):
    h24: Optional[float] = None


class WebsiteLink(BaseModel):
    url: Optional[str] = None


class SocialLink(BaseModel):
    platform: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None


class PairInfo(BaseModel):
    websites: List[WebsiteLink] = Field(default_factory=list)
    socials: List[SocialLink] = Field(default_factory=list)


class TokenPair(BaseModel):
    """Trading pair record returned by the token lookup endpoint.

    Market statistics are optional because DexScreener omits them for thin or
    freshly created pools; the screening predicates treat a missing value as
    "not satisfied".
    """

    model_config = ConfigDict(populate_by_name=True)

    chain_id: str = Field(alias="chainId")
    dex_id: str = Field(default="", alias="dexId")
    url: str = ""
    pair_address: Optional[str] = Field(default=None, alias="pairAddress")
    base_token: BaseTokenInfo = Field(alias="baseToken")
    price_usd: Optional[str] = Field(default=None, alias="priceUsd")
    liquidity: Optional[LiquidityInfo] = None
    volume: Optional[VolumeInfo] = None
    price_change: Optional[PriceChangeInfo] = Field(default=None, alias="priceChange")
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    pair_created_at: Optional[int] = Field(default=None, alias="pairCreatedAt")
    info: Optional[PairInfo] = None

    @property
    def liquidity_usd(self) -> Optional[float]:
        return self.liquidity.usd if self.liquidity else None

    @property
    def volume_24h(self) -> Optional[float]:
        return self.volume.h24 if self.volume else None

    @property
    def price_change_24h(self) -> Optional[float]:
        return self.price_change.h24 if self.price_change else None

    @property
    def website_url(self) -> Optional[str]:
        if self.info:
            for site in self.info.websites:
                if site.url:
                    return site.url
        return None

    @property
    def twitter_url(self) -> Optional[str]:
        if self.info:
            for social in self.info.socials:
                kind = (social.platform or social.type or "").lower()
                if kind == "twitter" and social.url:
                    return social.url
        return None


class TokenPairsResponse(BaseModel):
    pairs: Optional[List[TokenPair]] = None


class DexScreenerClient:
    """Thin wrapper around the two public endpoints used by the screener.

    Both calls go out with a bounded timeout and no retries; failures are
    raised to the caller rather than turned into partial records.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_json(self, path: str) -> Any:
        response = requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def list_boosted(self) -> List[BoostedCandidate]:
        try:
            payload = self._get_json(BOOSTS_PATH)
        except (requests.RequestException, ValueError) as exc:
            logger.error("Boosted token request failed: %s", exc)
            raise DataSourceUnavailable("Failed to fetch boosted tokens") from exc

        if not isinstance(payload, list):
            raise DataSourceUnavailable("Boosted tokens response was not a list")
        try:
            return [BoostedCandidate.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise DataSourceUnavailable("Boosted tokens response was malformed") from exc

    def get_pair_detail(self, token_address: str) -> Optional[TokenPair]:
        path = TOKEN_PAIRS_PATH.format(address=token_address)
        try:
            payload = self._get_json(path)
            parsed = TokenPairsResponse.model_validate(payload)
        except (requests.RequestException, ValueError) as exc:
            # pydantic's ValidationError is a ValueError subclass
            raise DetailUnavailable(f"Pair lookup failed for {token_address}: {exc}") from exc

        if not parsed.pairs:
            return None
        return parsed.pairs[0]
