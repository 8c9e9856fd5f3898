# Operator console - live Reno vs Mario comparison

import logging
import time

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from congestion.registry import default_registry
from congestion.tunables import Tunables
from sim.environment import Environment
from sim.sender import Sender
from sim.link import Link
from sim.receiver import Receiver

logging.basicConfig(level=logging.INFO)

TICK_MS = 10
BASE_RTT = 5.0

# 1. Page Configuration & Dark Theme Style
st.set_page_config(page_title="TCP MARIO // OPERATOR CONSOLE", layout="wide")

st.markdown("""
    <style>
    .stApp { background-color: #0e1117; color: #ffffff; }
    [data-testid="stSidebar"] { background-color: #161b22; border-right: 1px solid #30363d; }

    .metric-card {
        background-color: #1e2130;
        padding: 15px;
        border-radius: 10px;
        border: 1px solid #30363d;
        text-align: center;
        flex: 1;
    }
    .reno-card { border-top: 4px solid #ff4b4b; box-shadow: 0 4px 10px rgba(255, 75, 75, 0.1); }
    .mario-card { border-top: 4px solid #00d488; box-shadow: 0 4px 10px rgba(0, 212, 136, 0.1); }

    .card-label { font-size: 12px; color: #8b949e; text-transform: uppercase; letter-spacing: 1px; }
    .card-value { font-size: 24px; font-weight: bold; font-family: 'Courier New', monospace; margin-top: 5px; }
    </style>
    """, unsafe_allow_html=True)

# 2. Sidebar: operator tunables + network
if "tunables" not in st.session_state:
    st.session_state.tunables = Tunables.from_env()
tunables = st.session_state.tunables

with st.sidebar:
    st.markdown("<h2 style='color: #00d488; font-family: monospace;'>● MARIO TUNABLES</h2>", unsafe_allow_html=True)
    tunables.bandwidth = st.number_input(
        Tunables.sysctl_key("bandwidth"), min_value=0, max_value=(1 << 32) - 1,
        value=tunables.bandwidth or 4,
        help="Seeds the initial window (x128) and scales the calibrated one.",
    )
    tunables.factor = st.number_input(
        Tunables.sysctl_key("factor"), min_value=0, max_value=(1 << 32) - 1,
        value=tunables.factor,
        help="Divisor of the calibrated window. 0 skips calibration.",
    )

    st.markdown("---")
    st.markdown("<h2 style='color: #00d488; font-family: monospace;'>● NETWORK ARGS</h2>", unsafe_allow_html=True)
    noise = st.slider("Wireless Noise (%)", 0.0, 0.5, 0.02, help="Random packet loss probability.")
    capacity = st.slider("Link Capacity", 1, 20, 4)
    queue_limit = st.slider("Queue Length (pkts)", 5, 50, 15, help="Max packets in router queue.")
    sim_steps = st.slider("Simulation Length", 50, 2000, 300)

# 3. Header
c1, c2 = st.columns([2, 1])
with c1:
    st.markdown("<h2 style='color: #00d488; font-family: monospace;'>● TCP MARIO // <span style='color: white;'>OPERATOR CONSOLE</span></h2>", unsafe_allow_html=True)
with c2:
    st.markdown(f"<div style='text-align: right; color: #8b949e; font-family: monospace; padding-top: 10px;'>{tunables}</div>", unsafe_allow_html=True)


# 4. Simulation Initialization
def init_sims():
    registry = default_registry()
    env_r = Environment(
        Sender(registry.create("reno"), tick_ms=TICK_MS),
        Link(capacity, queue_limit, BASE_RTT, noise), Receiver(),
    )
    env_m = Environment(
        Sender(registry.create("mario", tunables=tunables), tick_ms=TICK_MS),
        Link(capacity, queue_limit, BASE_RTT, noise), Receiver(),
    )
    return env_r, env_m


# 5. Dashboard Setup
if 'run' not in st.session_state: st.session_state.run = False

def start_sim(): st.session_state.run = True

st.button("START COMPARISON", on_click=start_sim, use_container_width=True)

if st.session_state.run:
    env_r, env_m = init_sims()

    st.markdown("<div class='card-label'>Live Performance Averages</div>", unsafe_allow_html=True)
    m_cols = st.columns(6)
    m_placeholders = [col.empty() for col in m_cols]

    plot_time = st.empty()
    calib_box = st.empty()

    history = []
    totals = {"R_Thr": 0, "R_Cwnd": 0, "R_Loss": 0, "M_Thr": 0, "M_Cwnd": 0, "M_Loss": 0}

    for t in range(1, sim_steps + 1):
        m_r = env_r.step()
        m_m = env_m.step()

        totals["R_Thr"] += m_r['throughput']; totals["R_Cwnd"] += m_r['cwnd']; totals["R_Loss"] += m_r['loss']
        totals["M_Thr"] += m_m['throughput']; totals["M_Cwnd"] += m_m['cwnd']; totals["M_Loss"] += m_m['loss']

        history.append({
            "t": t, "R_Thr": m_r['throughput'], "M_Thr": m_m['throughput'],
            "R_Cwnd": m_r['cwnd'], "M_Cwnd": m_m['cwnd'],
            "R_RTT": m_r['avg_rtt'], "M_RTT": m_m['avg_rtt'],
            "R_Loss": m_r['loss'], "M_Loss": m_m['loss'],
        })

        card_contents = [
            ("Reno Thr", totals["R_Thr"]/t, "#ff4b4b", "reno"),
            ("Reno CWND", totals["R_Cwnd"]/t, "#ff4b4b", "reno"),
            ("Reno Loss", totals["R_Loss"]/t, "#ff4b4b", "reno"),
            ("Mario Thr", totals["M_Thr"]/t, "#00d488", "mario"),
            ("Mario CWND", totals["M_Cwnd"]/t, "#00d488", "mario"),
            ("Mario Loss", totals["M_Loss"]/t, "#00d488", "mario"),
        ]

        for i, (label, val, color, style) in enumerate(card_contents):
            m_placeholders[i].markdown(f"""
                <div class="metric-card {style}-card">
                    <div class="card-label">{label}</div>
                    <div class="card-value" style="color: {color};">{val:.1f}</div>
                </div>
            """, unsafe_allow_html=True)

        if t % 10 == 0 or t == sim_steps:
            df = pd.DataFrame(history)

            fig_time = make_subplots(rows=4, cols=1, shared_xaxes=True, vertical_spacing=0.05,
                                     subplot_titles=("Throughput", "Congestion Window", "Avg RTT", "Packet Loss"))

            colors = {'R': '#ff4b4b', 'M': '#00d488'}
            for row, metric in enumerate(("Thr", "Cwnd", "RTT", "Loss"), start=1):
                fig_time.add_trace(go.Scatter(x=df['t'], y=df[f'R_{metric}'], name='Reno', line=dict(color=colors['R'])), row=row, col=1)
                fig_time.add_trace(go.Scatter(x=df['t'], y=df[f'M_{metric}'], name='Mario', line=dict(color=colors['M'])), row=row, col=1)

            fig_time.update_layout(height=900, paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
                                   font_color="#8b949e", showlegend=False, margin=dict(l=10, r=10, t=40, b=10))
            plot_time.plotly_chart(fig_time, use_container_width=True)

            state = env_m.sender.conn.ca_state
            calib_box.markdown(
                f"<div class='card-label'>Mario calibration: samples={state.sample_count} "
                f"avg_rtt={state.average_rtt}ms base_window={state.base_window}</div>",
                unsafe_allow_html=True,
            )

        time.sleep(0.01)

    env_r.sender.close()
    env_m.sender.close()
