"""CLI entry point: run one screening strategy headless and write a Markdown report."""

from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from agents.markdown_reporter import MarkdownReporterAgent
from graph.orchestrator import AgentOrchestrator
from screening.strategies import STRATEGIES, find_strategy
from settings import load_settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="AI-assisted DexScreener boosted-token screener",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        default=None,
        choices=[strategy.slug for strategy in STRATEGIES],
        help="Strategy to execute (aggressive, growth, inflation-fighting)",
    )
    parser.add_argument(
        "--prompt",
        type=str,
        default=None,
        help="Free-form instruction for the agent; overrides the strategy's default prompt",
    )
    parser.add_argument(
        "--reports-dir",
        type=str,
        default=None,
        help="Optional override for the reports output directory",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the UI payload ({text, tokens}) as JSON instead of the summary",
    )
    args = parser.parse_args(argv)
    if not args.strategy and not args.prompt:
        parser.error("one of --strategy or --prompt is required")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    orchestrator = AgentOrchestrator.from_settings(settings)
    result = orchestrator.run(
        prompt=args.prompt,
        strategy=args.strategy,
        on_log=lambda message: print(f"> {message}"),
    )

    if args.json:
        print(json.dumps(result.to_payload(), indent=2))
    else:
        print()
        print(result.text)

    strategy = find_strategy(args.strategy) if args.strategy else None
    title = strategy.title if strategy else "Custom"
    reporter = MarkdownReporterAgent(reports_dir=args.reports_dir)
    report_path = reporter.run(title, result.text, result.criteria, result.tokens)
    print(f"Report generated at {report_path}")


if __name__ == "__main__":
    main()
