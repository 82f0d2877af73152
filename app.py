"""
maxhash Mining Pool Dashboard
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Streamlit page for pool-wide and per-miner ckpool statistics.
"""

import streamlit as st
import os
import sys
import logging
import html as html_mod
from datetime import datetime, timezone

# ── Path setup ──
ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, ROOT)

from config import (
    CKPOOL_LOG_DIR, STATS_CACHE_TTL, LOG_FORMAT,
    HASHRATE_WINDOWS, load_log_level,
)
from src.observability import configure_logging
from src.stats import (
    StatsService, StatsReadError, StatsNotFoundError,
    pool_display, user_display, workers_frame,
)
from src.utils import is_valid_bitcoin_address

logger = logging.getLogger(__name__)

configure_logging(load_log_level(), LOG_FORMAT)


# ══════════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════════

def render_metric_card(label: str, value: str, caption: str = "") -> str:
    """
    Generate HTML for a metric card.
    HTML-escapes inputs since stats files and worker names are untrusted.
    """
    label = html_mod.escape(str(label))
    value = html_mod.escape(str(value))
    caption_html = f'<div class="caption">{html_mod.escape(str(caption))}</div>' if caption else ""

    return f"""
    <div class="metric-card">
        <div class="label">{label}</div>
        <div class="value">{value}</div>
        {caption_html}
    </div>
    """


def _fmt_timestamp(ts: int) -> str:
    if not ts:
        return "never"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _render_cards(cards):
    cols = st.columns(len(cards))
    for col, (label, value, caption) in zip(cols, cards):
        col.markdown(render_metric_card(label, value, caption), unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# PAGE CONFIG & THEME
# ══════════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="maxhash Pool Dashboard",
    page_icon="⛏️",
    layout="wide",
)

st.markdown("""
<style>
    .dashboard-header {
        background: linear-gradient(135deg, #1a1a2e 0%, #302b63 100%);
        padding: 1.5rem 2rem;
        border-radius: 16px;
        margin-bottom: 1.5rem;
        border: 1px solid rgba(255,255,255,0.08);
    }
    .dashboard-header h1 { color: #ffffff; font-size: 1.8rem; font-weight: 800; margin: 0; }
    .dashboard-header p  { color: rgba(255,255,255,0.6); margin: 0.3rem 0 0 0; }

    .metric-card {
        background: rgba(255,255,255,0.04);
        border: 1px solid rgba(255,255,255,0.08);
        border-radius: 12px;
        padding: 1rem 1.2rem;
    }
    .metric-card .label   { color: #9e9e9e; font-size: 0.75rem; font-weight: 600; letter-spacing: 0.5px; }
    .metric-card .value   { color: #f7931a; font-size: 1.6rem; font-weight: 800; }
    .metric-card .caption { color: #757575; font-size: 0.75rem; }

    .section-header {
        font-size: 1.1rem;
        font-weight: 700;
        color: #e0e0e0;
        padding: 0.8rem 0 0.5rem 0;
        border-bottom: 2px solid rgba(247, 147, 26, 0.3);
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# DATA LOADING
# ══════════════════════════════════════════════════════════════════
@st.cache_resource
def get_service() -> StatsService:
    return StatsService(CKPOOL_LOG_DIR)


@st.cache_data(ttl=STATS_CACHE_TTL, show_spinner="Reading pool stats...")
def load_pool_stats():
    """Pool stats as a plain dict so st.cache_data can pickle it."""
    stats = get_service().pool_stats()
    return stats.model_dump(), pool_display(stats)


@st.cache_data(ttl=STATS_CACHE_TTL, show_spinner="Reading miner stats...")
def load_user_stats(address: str):
    stats = get_service().user_stats(address)
    return stats, user_display(stats), workers_frame(stats)


with st.sidebar:
    st.markdown("### ⛏️ Miner Lookup")
    address = st.text_input("Payout Bitcoin address", value="").strip()
    if st.button("🔄 Refresh", use_container_width=True):
        st.cache_data.clear()
    st.markdown("---")
    st.caption(f"Stats source: {CKPOOL_LOG_DIR}")


# ══════════════════════════════════════════════════════════════════
# HEADER
# ══════════════════════════════════════════════════════════════════
st.markdown("""
<div class="dashboard-header">
    <h1>⛏️ maxhash Pool Dashboard</h1>
    <p>Live ckpool statistics • Hashrate • Difficulty • Best shares</p>
</div>
""", unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# POOL OVERVIEW
# ══════════════════════════════════════════════════════════════════
try:
    pool, pool_fmt = load_pool_stats()
except StatsReadError as e:
    logger.error("Failed to load pool stats: %s", e)
    st.error("⚠️ Failed to get pool stats.")
    st.info("The ckpool log directory may be unreadable or the pool may still be starting.")
    st.stop()

st.markdown('<div class="section-header">Pool Overview</div>', unsafe_allow_html=True)
_render_cards([
    ("USERS", str(pool["users"]), f'{pool["idle"]} idle'),
    ("WORKERS", str(pool["workers"]), f'{pool["disconnected"]} disconnected'),
    ("NETWORK DIFF", pool_fmt["diff"], ""),
    ("BEST SHARE", pool_fmt["bestshare"], ""),
    ("LAST UPDATE", _fmt_timestamp(pool["lastupdate"]), ""),
])

st.markdown('<div class="section-header">Pool Hashrate</div>', unsafe_allow_html=True)
_render_cards([
    (window.upper(), pool[f"hashrate{window}"], "")
    for window in HASHRATE_WINDOWS
])

st.caption(
    f'Accepted: {pool["accepted"]:,} • Rejected: {pool["rejected"]:,} • '
    f'Shares/s (1m): {pool["sps1m"]:.2f}'
)


# ══════════════════════════════════════════════════════════════════
# MINER DETAIL
# ══════════════════════════════════════════════════════════════════
if address:
    st.markdown('<div class="section-header">Miner</div>', unsafe_allow_html=True)

    if not is_valid_bitcoin_address(address):
        st.error("Invalid Bitcoin address.")
        st.stop()

    try:
        user, user_fmt, workers_df = load_user_stats(address)
    except StatsNotFoundError:
        st.warning("No shares recorded for this address yet.")
        st.stop()
    except StatsReadError as e:
        logger.error("Failed to load user stats: %s", e)
        st.error("⚠️ Failed to get user stats.")
        st.stop()

    _render_cards([
        ("HASHRATE 1M", user.hashrate1m, ""),
        ("HASHRATE 1D", user.hashrate1d, ""),
        ("BEST SHARE", user_fmt["bestshare"], ""),
        ("BEST EVER", user_fmt["bestever"], ""),
        ("LAST SHARE", _fmt_timestamp(user.lastshare), ""),
    ])

    st.markdown(f"**Workers ({user.workers})**")
    st.dataframe(workers_df, use_container_width=True, hide_index=True)
