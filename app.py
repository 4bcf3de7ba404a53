"""
Streamlit UI for the boosted-token strategy screener.

Pick a strategy card; the agent chooses filterTokens criteria, screens the
DexScreener boosted feed and summarises the matches.

Launch with:
    streamlit run app.py
"""

import html
import logging
from typing import List

import streamlit as st

st.set_page_config(
    page_title="OSSY | Token Strategy Screener",
    page_icon="🧠",
    layout="wide",
)

from graph.orchestrator import AgentOrchestrator, AgentResult
from screening.strategies import STRATEGIES, Strategy, find_strategy
from settings import load_settings
from ui.components import scatter_figure, token_table

SETTINGS = load_settings()
logging.basicConfig(level=SETTINGS.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("app")

CRITICAL_ERROR_TEXT = "I encountered a critical error while connecting to the DexScreener agent."

PAGE_CSS = """
<style>
html, body, [data-testid="stAppViewContainer"] { background: #09090b; color: #f4f4f5; }
.agent-card {
    border: 1px solid rgba(168, 85, 247, 0.25);
    background: rgba(59, 7, 100, 0.12);
    border-radius: 12px;
    padding: 18px 22px;
}
.agent-card h4 { color: #f3e8ff; margin-top: 0; }
.strategy-desc { color: #a1a1aa; font-size: 13px; min-height: 40px; }
</style>
"""

# ═══════════════════════════════════════════════════════════════════════════
# SESSION STATE
# ═══════════════════════════════════════════════════════════════════════════

for key, default in (("processing", False), ("pending", None), ("selected", None), ("logs", []), ("result", None)):
    if key not in st.session_state:
        st.session_state[key] = default


@st.cache_resource
def get_orchestrator() -> AgentOrchestrator:
    return AgentOrchestrator.from_settings(SETTINGS)


def _select(strategy: Strategy) -> None:
    if st.session_state.processing:
        return
    st.session_state.pending = strategy.slug
    st.session_state.selected = strategy.slug
    st.session_state.processing = True


def _run_pending(log_box) -> None:
    strategy = find_strategy(st.session_state.pending)
    st.session_state.pending = None
    logs: List[str] = []

    def on_log(message: str) -> None:
        logs.append(f"> {message}")
        log_box.code("\n".join(logs), language=None)

    try:
        with st.spinner("Scanning blockchain data..."):
            result = get_orchestrator().run(strategy=strategy.slug, on_log=on_log)
        on_log("Process completed successfully.")
    except Exception:
        logger.exception("Agent run failed")
        on_log("CRITICAL ERROR: Agent failed to execute.")
        result = AgentResult(text=CRITICAL_ERROR_TEXT)
    finally:
        st.session_state.processing = False

    st.session_state.logs = logs
    st.session_state.result = result
    st.rerun()


# ═══════════════════════════════════════════════════════════════════════════
# LAYOUT
# ═══════════════════════════════════════════════════════════════════════════

st.markdown(PAGE_CSS, unsafe_allow_html=True)
st.title("Select your Alpha Strategy")
st.caption(
    "OSSY scans the DexScreener boosted-token feed and filters it to match your risk profile. "
    f"Agent: {'OpenAI ' + SETTINGS.openai_model if SETTINGS.llm_enabled else 'heuristic (no OPENAI_API_KEY)'}"
)

cards = st.columns(len(STRATEGIES))
for column, strategy in zip(cards, STRATEGIES):
    with column:
        with st.container(border=True):
            active = " · Active" if st.session_state.selected == strategy.slug else ""
            st.subheader(f"{strategy.title}{active}")
            st.markdown(f'<div class="strategy-desc">{strategy.description}</div>', unsafe_allow_html=True)
            st.button(
                "Deploy Agent",
                key=f"deploy-{strategy.slug}",
                on_click=_select,
                args=(strategy,),
                disabled=st.session_state.processing,
                use_container_width=True,
            )

if st.session_state.pending or st.session_state.result is not None:
    left, right = st.columns([1, 2])

    with left:
        log_box = st.empty()
        if st.session_state.pending:
            _run_pending(log_box)
        log_box.code("\n".join(st.session_state.logs) or "_", language=None)

        result = st.session_state.result
        if result is not None:
            body = "".join(f"<p>{html.escape(line)}</p>" for line in result.text.split("\n") if line.strip())
            st.markdown(f'<div class="agent-card"><h4>Agent Analysis</h4>{body}</div>', unsafe_allow_html=True)

    with right:
        result = st.session_state.result
        if result is not None and result.tokens is not None:
            figure = scatter_figure(result.tokens)
            if figure is not None:
                st.plotly_chart(figure, use_container_width=True)

            header, count = st.columns([3, 1])
            header.markdown("### Identified Assets")
            count.caption(f"{len(result.tokens)} Matches Found")

            if not result.tokens:
                st.info(
                    "No Tokens Found. The agent logic filtered out all candidates based on the strict criteria."
                )
            else:
                st.dataframe(
                    token_table(result.tokens),
                    hide_index=True,
                    use_container_width=True,
                    column_config={
                        "Website": st.column_config.LinkColumn("Website", display_text="site"),
                        "Twitter": st.column_config.LinkColumn("Twitter", display_text="twitter"),
                        "DexScreener": st.column_config.LinkColumn("DexScreener", display_text="chart"),
                    },
                )
