"""Chart and table builders for the Streamlit page."""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from screening.models import FilteredToken

POSITIVE_COLOR = "#34d399"
NEGATIVE_COLOR = "#f87171"
MIN_CHART_POINTS = 2

CHART_COLUMNS = ["symbol", "market_cap", "volume_24h", "liquidity", "price_change", "direction"]
TABLE_COLUMNS = [
    "Token",
    "Name",
    "Chain",
    "Price",
    "24h Change",
    "Liquidity",
    "Mkt Cap",
    "24h Volume",
    "Age",
    "Website",
    "Twitter",
    "DexScreener",
]


def chart_frame(tokens: Sequence[FilteredToken]) -> pd.DataFrame:
    """x = market cap, y = volume, size = liquidity, colour = sign of the 24h move."""
    rows = [
        {
            "symbol": token.symbol,
            "market_cap": token.market_cap_raw,
            "volume_24h": token.volume_24h_raw,
            "liquidity": token.liquidity_raw,
            "price_change": token.price_change_raw,
            "direction": "up" if token.price_change_raw >= 0 else "down",
        }
        for token in tokens
    ]
    return pd.DataFrame(rows, columns=CHART_COLUMNS)


def scatter_figure(tokens: Sequence[FilteredToken]) -> Optional[go.Figure]:
    if len(tokens) < MIN_CHART_POINTS:
        return None
    frame = chart_frame(tokens)
    fig = px.scatter(
        frame,
        x="market_cap",
        y="volume_24h",
        size="liquidity",
        color="direction",
        color_discrete_map={"up": POSITIVE_COLOR, "down": NEGATIVE_COLOR},
        hover_name="symbol",
        hover_data={"price_change": ":.2f", "direction": False},
        log_x=True,
        log_y=True,
        size_max=40,
        template="plotly_dark",
        labels={"market_cap": "Market Cap ($)", "volume_24h": "Volume 24h ($)", "liquidity": "Liquidity ($)"},
    )
    fig.update_layout(
        title="Market Analysis (log scale: cap vs volume)",
        paper_bgcolor="#09090b",
        plot_bgcolor="#09090b",
        height=400,
        margin=dict(l=20, r=20, t=50, b=20),
        showlegend=False,
    )
    return fig


def _link(value: str) -> Optional[str]:
    return None if not value or value == "N/A" else value


def _signed(token: FilteredToken) -> str:
    prefix = "+" if token.price_change_raw > 0 else ""
    return f"{prefix}{token.price_change_24h}"


def token_table(tokens: Sequence[FilteredToken]) -> pd.DataFrame:
    rows: List[dict] = []
    for token in tokens:
        rows.append(
            {
                "Token": token.symbol,
                "Name": token.name,
                "Chain": token.chain.upper(),
                "Price": token.price,
                "24h Change": _signed(token),
                "Liquidity": token.liquidity,
                "Mkt Cap": token.market_cap,
                "24h Volume": token.volume_24h,
                "Age": token.age,
                "Website": _link(token.website),
                "Twitter": _link(token.twitter),
                "DexScreener": _link(token.dexscreener_url),
            }
        )
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)
