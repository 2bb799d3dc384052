"""
Olympic Medal Dashboard
Run with:  streamlit run medal_dashboard_app.py
The medal backend must be reachable at MEDAL_API_BASE (default http://127.0.0.1:8000).
"""

import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from medal_api import MedalApiClient, MedalApiError
from medal_config import configure_logging, get_settings
from medal_views import (ALL_COUNTRIES, chart_series, donut_degrees,
                         filtered_table, snapshot_frame, top_leaders)
from prediction_state import PredictionSlot

cfg = get_settings()
configure_logging(cfg.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Olympic Games — Statistics & AI Prediction",
                   page_icon="🏅", layout="wide")

st.markdown("""<style>
  .stApp { background-color: #0d1b2a; color: #e8edf2; }
  section[data-testid="stSidebar"] {
      background: linear-gradient(180deg, #1a2d44 0%, #0d1b2a 100%);
      border-right: 1px solid #2a4060; }
  .leader-card { background: linear-gradient(135deg,#1e3a5f,#162d48);
      border:1px solid #2a5080; border-radius:12px; padding:18px 20px;
      text-align:center; margin-bottom:6px; }
  .donut { width:120px; height:120px; border-radius:50%; margin:0 auto 10px;
      display:flex; align-items:center; justify-content:center; }
  .donut-inner { width:88px; height:88px; border-radius:50%; background:#162d48;
      display:flex; align-items:center; justify-content:center; }
  .kpi-number { font-size:2rem; font-weight:700; color:#7ec8e3; line-height:1; }
  .kpi-label { font-size:.8rem; color:#8aafc8; margin:6px 0;
      text-transform:uppercase; letter-spacing:.08em; }
  .medals { display:inline-flex; gap:14px; }
  h1{color:#e8edf2!important} h2,h3{color:#b8d4e8!important} label{color:#8aafc8!important}
</style>""", unsafe_allow_html=True)

# Icon fills per medal, ribbon drawn in two blues
MEDAL_FILL = {"gold": "#FBBF24", "silver": "#D1D5DB", "bronze": "#F59E0B"}
BAR_COLOR = "rgba(78,168,222,0.75)"
DONUT_COLOR = "#4EA8DE"

_L = dict(
    paper_bgcolor="#111e2d",
    plot_bgcolor="#0d1b2a",
    font=dict(color="#e8edf2", family="Inter,sans-serif"),
    margin=dict(t=60, b=40, l=60, r=20),
    showlegend=False,
    xaxis=dict(showgrid=False, tickfont=dict(color="#ffffff"), title=None),
    yaxis=dict(gridcolor="rgba(255,255,255,0.15)", tickfont=dict(color="#ffffff"), title=None),
)


def medal_icon(kind="gold", size=16):
    """Inline SVG medal with a ribbon, for use inside unsafe_allow_html markdown."""
    fill = MEDAL_FILL.get(kind, MEDAL_FILL["bronze"])
    return (f'<svg width="{size}" height="{size}" viewBox="0 0 24 24" fill="none" aria-hidden="true" '
            f'style="display:inline-block;vertical-align:middle">'
            f'<path d="M7 2h4l1 4-3 2-2-6z" fill="#60A5FA" opacity="0.9"/>'
            f'<path d="M13 2h4l-2 6-3-2 1-4z" fill="#3B82F6" opacity="0.9"/>'
            f'<circle cx="12" cy="15" r="6" fill="{fill}"/>'
            f'<circle cx="12" cy="15" r="4" fill="black" opacity="0.12"/></svg>')


def leader_card(col, row):
    deg = donut_degrees(row["pct"])
    medals = "".join(f'<span>{medal_icon(k)} {row[k]}</span>' for k in ("gold", "silver", "bronze"))
    col.markdown(
        f'<div class="leader-card">'
        f'<div class="donut" style="background: conic-gradient({DONUT_COLOR} {deg}deg, rgba(255,255,255,.25) 0deg)">'
        f'<div class="donut-inner"><div class="kpi-number">{row["total"]}</div></div></div>'
        f'<div class="kpi-label">{row["country"]}</div>'
        f'<span class="medals">{medals}</span></div>', unsafe_allow_html=True)


def client(api_base=None):
    return MedalApiClient(api_base or cfg.api_base, timeout=cfg.request_timeout)


@st.cache_data(ttl=300, show_spinner="Loading countries…")
def load_countries(api_base):
    return client(api_base).countries()


@st.cache_data(ttl=300, show_spinner="Loading medal summary…")
def load_summary(api_base):
    return client(api_base).summary()


# ── Data ─────────────────────────────────────
try:
    countries = st.session_state["countries"] = load_countries(cfg.api_base)
except MedalApiError as e:
    logger.error("Country list unavailable: %s", e)
    st.warning(f"Country list unavailable: {e}")
    # keep showing the last list that loaded
    countries = st.session_state.get("countries", [])

try:
    summary = st.session_state["summary"] = load_summary(cfg.api_base)
except MedalApiError as e:
    logger.error("Medal summary unavailable: %s", e)
    st.error(f"Medal summary unavailable: {e}")
    summary = st.session_state.get("summary", snapshot_frame([]))

# ── Sidebar ──────────────────────────────────
with st.sidebar:
    st.markdown("## 🏅 Filters")
    sel = st.selectbox("Country", [ALL_COUNTRIES] + countries, key="filter_country",
                       format_func=lambda c: "All Countries" if c == ALL_COUNTRIES else c)
    st.caption(f"Backend · {cfg.api_base}")

# ── Header ───────────────────────────────────
st.markdown("# Olympic Games — Statistics & AI Prediction")
st.caption("Explore historical medals and generate AI predictions.")

# ── Leaders ──────────────────────────────────
st.markdown("### Overall Medal Leaders")
leaders = top_leaders(summary, cfg.leader_count, cfg.donut_ceiling)
if leaders.empty:
    st.info("No medal data to show.")
else:
    for col, (_, row) in zip(st.columns(cfg.leader_count), leaders.iterrows()):
        leader_card(col, row)
st.markdown("---")

# ── Table ────────────────────────────────────
st.markdown(f"### Total Medals by Country (Top {cfg.table_limit})")
st.dataframe(
    filtered_table(summary, sel, cfg.table_limit).rename(columns={
        "country": "Country", "gold": "🥇", "silver": "🥈", "bronze": "🥉", "total": "Total"
    }),
    hide_index=True, use_container_width=True
)

# ── Chart ────────────────────────────────────
st.markdown("### Statistics")
labels, values = chart_series(summary, cfg.chart_limit)
if not labels:
    st.info("No medal data to chart.")
else:
    fig = px.bar(pd.DataFrame({"country": labels, "total": values}), x="country", y="total",
                 title=f"Top {cfg.chart_limit} Countries — Total Olympic Medals",
                 labels={"country": "", "total": "Total Medals"})
    fig.update_traces(marker_color=BAR_COLOR,
                      hovertemplate="<b>%{x}</b><br>%{y} medals<extra></extra>")
    fig.update_layout(**_L, height=420, bargap=0.35)
    st.plotly_chart(fig, use_container_width=True)

# ── Prediction ───────────────────────────────
st.markdown("### AI Olympic Prediction")
slot = st.session_state.setdefault("prediction", PredictionSlot())

L, R = st.columns(2, gap="large")
with L:
    pc = st.selectbox("Country", countries, key="pred_country")
    yr = st.number_input("Year", value=cfg.default_year, step=1, key="pred_year")
    clicked = st.button("Predict Medals", disabled=slot.is_busy or not pc, use_container_width=True)
    if clicked:
        with st.spinner("Predicting..."):
            slot.run(lambda: client().predict(pc, yr))

with R:
    if slot.error:
        st.error(slot.error)
    if slot.result is None:
        st.caption("Select a country and year.")
    else:
        p = slot.result
        st.markdown(
            f'<div class="leader-card"><div class="kpi-number">{p.total}</div>'
            f'<span class="medals"><span>🥇 {p.gold}</span><span>🥈 {p.silver}</span>'
            f'<span>🥉 {p.bronze}</span></span></div>', unsafe_allow_html=True)

st.caption("Olympic AI Project — Streamlit + FastAPI + RandomForest")
