"""Tests for the Markdown run report."""

from __future__ import annotations

from pathlib import Path

from agents.markdown_reporter import MarkdownReporterAgent
from screening.models import FilterCriteria, FilteredToken


def test_criteria_keep_fractions_and_group_whole_numbers(tmp_path: Path):
    reporter = MarkdownReporterAgent(reports_dir=str(tmp_path))
    criteria = FilterCriteria(chain="solana", max_age_days=0.5, min_liquidity=1_250_000.75, min_volume_24h=50_000)

    content = reporter.compose("Aggressive", "summary", criteria, [])

    assert "- Chain: solana" in content
    assert "- Max pair age (days): 0.5" in content
    assert "- Min liquidity (USD): 1,250,000.75" in content
    assert "- Min 24h volume (USD): 50,000" in content
    assert "No Tokens Found" in content


def test_run_writes_dated_report(tmp_path: Path):
    reporter = MarkdownReporterAgent(reports_dir=str(tmp_path))
    token = FilteredToken(symbol="A|B", name="Pipe", chain="bsc", dexscreener_url="https://dexscreener.com/bsc/ab")

    path = reporter.run("Inflation Fighting", "Top pick: A|B.", None, [token])

    assert path.parent == tmp_path
    assert path.name.endswith("_inflation-fighting.md")
    content = path.read_text(encoding="utf-8")
    assert "- No filter was applied." in content
    assert "## Identified Assets (1 matches)" in content
    assert "| 1 | A\\|B (Pipe) | bsc |" in content
    assert "[chart](https://dexscreener.com/bsc/ab)" in content
