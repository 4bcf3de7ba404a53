"""Markdown Reporter: serialise one strategy run into a Markdown report."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from screening.models import FilterCriteria, FilteredToken

_CRITERIA_LABELS = [
    ("chain", "Chain"),
    ("min_volume_24h", "Min 24h volume (USD)"),
    ("min_liquidity", "Min liquidity (USD)"),
    ("min_market_cap", "Min market cap (USD)"),
    ("max_market_cap", "Max market cap (USD)"),
    ("max_age_days", "Max pair age (days)"),
]


def _number(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,}"


class MarkdownReporterAgent:
    """Writes the summary, criteria and ranked token table to ``reports/``."""

    def __init__(self, reports_dir: Optional[str] = None) -> None:
        default_dir = reports_dir or Path.cwd() / "reports"
        self.reports_dir = Path(default_dir)
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _criteria_section(criteria: Optional[FilterCriteria]) -> str:
        if criteria is None:
            return "- No filter was applied."
        lines = []
        for field, label in _CRITERIA_LABELS:
            value = getattr(criteria, field)
            if value in (None, "", 0):
                continue
            shown = value if isinstance(value, str) else _number(value)
            lines.append(f"- {label}: {shown}")
        return "\n".join(lines) or "- No constraints (all boosted candidates)."

    @staticmethod
    def _escape(cell: str) -> str:
        return cell.replace("|", "\\|")

    @classmethod
    def _token_table(cls, tokens: Iterable[FilteredToken]) -> str:
        md = [
            "| # | Token | Chain | Price | 24h Change | Liquidity | Mkt Cap | 24h Volume | Age | Link |",
            "|--:|:------|:------|------:|-----------:|----------:|--------:|-----------:|----:|:-----|",
        ]
        for idx, token in enumerate(tokens, start=1):
            link = f"[chart]({token.dexscreener_url})" if token.dexscreener_url else "NA"
            md.append(
                f"| {idx} | {cls._escape(token.symbol)} ({cls._escape(token.name)}) | {token.chain} | "
                f"{token.price} | {token.price_change_24h} | {token.liquidity} | {token.market_cap} | "
                f"{token.volume_24h} | {token.age} | {link} |"
            )
        return "\n".join(md)

    def compose(
        self,
        title: str,
        summary: str,
        criteria: Optional[FilterCriteria],
        tokens: Optional[List[FilteredToken]],
    ) -> str:
        content = [
            f"# {title} Screen",
            f"_Generated {datetime.utcnow().strftime('%Y-%m-%d %H:%M')} UTC from a DexScreener snapshot._",
            "",
            "## Agent Analysis",
            summary,
            "",
            "## Criteria",
            self._criteria_section(criteria),
            "",
        ]
        if tokens is None:
            content.append("## Identified Assets\nNo screen results (the run ended before screening).")
        elif not tokens:
            content.append("## Identified Assets\nNo Tokens Found. All candidates were filtered out by the criteria.")
        else:
            content.append(f"## Identified Assets ({len(tokens)} matches)")
            content.append(self._token_table(tokens))
        return "\n".join(content)

    def write_report(self, slug: str, content: str) -> Path:
        stamp = datetime.utcnow().strftime("%Y%m%d")
        path = self.reports_dir / f"{stamp}_{slug}.md"
        path.write_text(content, encoding="utf-8")
        return path

    def run(
        self,
        title: str,
        summary: str,
        criteria: Optional[FilterCriteria],
        tokens: Optional[List[FilteredToken]],
    ) -> Path:
        slug = title.lower().replace(" ", "-") or "custom"
        return self.write_report(slug, self.compose(title, summary, criteria, tokens))
