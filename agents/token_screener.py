"""Token Screener: boosted candidates -> pair details -> filter -> rank."""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from screening import formatting, predicates, ranking
from screening.models import FilterCriteria, FilteredToken
from settings import Settings
from tools.dexscreener_client import BoostedCandidate, DexScreenerClient, TokenPair

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class TokenScreenerAgent:
    """Runs one snapshot screen over the boosted-token feed.

    Each call owns its own fetch set; nothing is cached between calls, so
    concurrent screens do not interfere.
    """

    def __init__(
        self,
        client: Optional[DexScreenerClient] = None,
        max_candidates: int = 20,
        max_workers: int = 8,
        max_jitter_seconds: float = 0.2,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.client = client or DexScreenerClient()
        self.max_candidates = max_candidates
        self.max_workers = max_workers
        self.max_jitter_seconds = max_jitter_seconds
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "TokenScreenerAgent":
        params = {
            "client": DexScreenerClient(settings.dexscreener_base_url, settings.request_timeout),
            "max_candidates": settings.max_candidates,
            "max_workers": settings.max_workers,
            "max_jitter_seconds": settings.max_jitter_seconds,
        }
        params.update(overrides)
        return cls(**params)

    def shortlist(self, criteria: FilterCriteria) -> List[BoostedCandidate]:
        candidates = self.client.list_boosted()
        chain = criteria.chain_filter
        if chain:
            candidates = [c for c in candidates if c.chain_id.lower() == chain]
        return candidates[: max(0, self.max_candidates)]

    def _fetch_detail(self, candidate: BoostedCandidate) -> Optional[TokenPair]:
        if self.max_jitter_seconds > 0:
            time.sleep(random.uniform(0, self.max_jitter_seconds))
        try:
            return self.client.get_pair_detail(candidate.token_address)
        except Exception as exc:
            logger.warning("Skipping %s: %s", candidate.token_address, exc)
            return None

    def fetch_details(self, candidates: List[BoostedCandidate]) -> List[Optional[TokenPair]]:
        if not candidates:
            return []
        workers = max(1, min(self.max_workers, len(candidates)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order regardless of completion order
            return list(executor.map(self._fetch_detail, candidates))

    def filter_tokens(self, criteria: FilterCriteria) -> List[FilteredToken]:
        """Screen the boosted feed; raises DataSourceUnavailable if the feed is down."""
        candidates = self.shortlist(criteria)
        pairs = self.fetch_details(candidates)
        now_ms = self.clock()

        kept: List[FilteredToken] = []
        for pair in pairs:
            if pair is None or not predicates.matches(pair, criteria, now_ms):
                continue
            kept.append(formatting.to_filtered_token(pair, now_ms))

        logger.info("Screened %d candidates, %d matched %s", len(candidates), len(kept), criteria.to_args())
        return ranking.rank(kept, criteria)

    def run(self, state: Dict) -> Dict:
        criteria = state.get("criteria") or FilterCriteria()
        state["tokens"] = self.filter_tokens(criteria)
        return state
