# =========================
# File: streamlit_app.py
# =========================
# DrillSense dashboard: planned vs actual path, deviation cards and table.
# Run with: streamlit run streamlit_app.py

import io
import logging

import pandas as pd
import streamlit as st

from config_types import AngularBands, ColorPolicy, SceneConfig, ThresholdConfig
from deviation import analyze, results_frame, summarize
from logging_config import setup_logging
from scene3d import build_scene, scene_to_figure
from wellpath import DEMO_ACTUAL, DEMO_PLANNED, paths_from_frame

st.set_page_config(page_title="DrillSense", layout="wide")

setup_logging(logging.INFO)
logger = logging.getLogger("streamlit_app")

STATUS_DOT = {"ok": "🟢", "caution": "🟡", "critical": "🔴", "undefined": "⚪"}

# ---- Layout: Sidebar for inputs, main area for plots ----
st.sidebar.header("Thresholds")
lateral_thr = st.sidebar.number_input("Lateral deviation threshold (cm)", value=15.0, min_value=0.0, step=1.0)
angular_thr = st.sidebar.number_input("Angular deviation threshold (deg)", value=2.0, min_value=0.0, step=0.1)
caution_deg = st.sidebar.number_input("Dial caution band from (deg)", value=3.0, min_value=0.0, step=0.5)
critical_deg = st.sidebar.number_input("Dial critical band above (deg)", value=5.0, min_value=0.0, step=0.5)

st.sidebar.header("Colours")
c_within = st.sidebar.color_picker("Within threshold", "#EAB308")
c_beyond = st.sidebar.color_picker("Beyond threshold", "#EF4444")
c_planned = st.sidebar.color_picker("Planned path", "#10B981")

st.sidebar.header("Trajectory")
src = st.sidebar.radio("Source", ["Sample data", "Upload CSV"], horizontal=True)
positive_down = False
file = None
if src == "Upload CSV":
    st.sidebar.caption("CSV columns: planned_x, planned_y, planned_z, actual_x, actual_y, actual_z (m)")
    file = st.sidebar.file_uploader("Upload paths CSV", type=["csv"])
    positive_down = st.sidebar.checkbox("z is positive depth (downward)", value=False)

st.sidebar.header("Survey readings")
inclination = st.sidebar.number_input("Inclination (deg)", value=5.0, step=0.1)
azimuth = st.sidebar.number_input("Azimuth (deg)", value=25.0, step=0.1)
toolface = st.sidebar.number_input("Toolface orientation (deg)", value=5.0, step=0.1)
dls = st.sidebar.number_input("Dogleg severity (deg/30m)", value=2.1, step=0.1)
hole_depth = st.sidebar.number_input("Hole depth (m)", value=15.0, step=0.5)

try:
    thresholds = ThresholdConfig(lateral_threshold_cm=lateral_thr, angular_threshold_deg=angular_thr)
    bands = AngularBands(caution_deg=caution_deg, critical_deg=critical_deg)
    palette = ColorPolicy(within=c_within, beyond=c_beyond, planned=c_planned)

    if file is not None:
        planned, actual = paths_from_frame(pd.read_csv(file), positive_down=positive_down)
    else:
        planned, actual = DEMO_PLANNED, DEMO_ACTUAL

    deviations = analyze(planned, actual, thresholds)
    summary = summarize(deviations, bands, dogleg_severity=dls)
    scene = build_scene(planned, actual, deviations, palette, SceneConfig())
    table = results_frame(planned, actual, deviations)
except (KeyError, ValueError) as e:
    logger.warning("Could not analyze trajectory: %s", e)
    st.error(f"Could not analyze trajectory: {e}")
    st.stop()

# -------------------- TOP ROW --------------------
col_dial, col_depth, col_params = st.columns([3, 3, 6])

with col_dial:
    st.subheader("Deviation from Planned Path")
    ang_txt = "n/a" if summary.current_angular_deg is None else f"{summary.current_angular_deg:.1f}°"
    st.markdown(f"### {STATUS_DOT[summary.angular_status]} {ang_txt}")
    st.caption(f"<{bands.caution_deg:g}° ok · {bands.caution_deg:g}°–{bands.critical_deg:g}° caution · "
               f">{bands.critical_deg:g}° critical")

with col_depth:
    st.subheader("Hole Depth")
    st.metric("meters", f"{hole_depth:g}")

with col_params:
    st.subheader("Trajectory & Position Parameters")
    r1 = st.columns(4)
    r1[0].metric("Inclination", f"{inclination:g}°")
    r1[1].metric("Azimuth", f"{azimuth:g}°")
    r1[2].metric("Toolface orientation", f"{toolface:g}°")
    r1[3].metric("TVD", f"{-actual[-1].z:.2f} m")
    r2 = st.columns(4)
    r2[0].metric("Lateral deviation", f"{summary.current_lateral_cm:.0f} cm")
    r2[1].metric("Angular deviation", ang_txt)
    r2[2].metric("Dogleg severity", f"{summary.dogleg_severity:g}°/30m")
    r2[3].metric("Samples beyond threshold", f"{summary.exceedance_count}/{summary.sample_count}")

# -------------------- 3D PATH --------------------
col_plot, col_cards = st.columns([2, 1])

with col_plot:
    st.subheader("3D Path")
    st.plotly_chart(scene_to_figure(scene), use_container_width=True, config={"displayModeBar": False})

with col_cards:
    st.markdown("#### Lateral Deviation")
    st.markdown(f"**{summary.current_lateral_cm:.0f} cm**")
    st.progress(min(summary.current_lateral_cm / max(2 * thresholds.lateral_threshold_cm, 1e-9), 1.0))
    st.caption(f"Target: <{thresholds.lateral_threshold_cm:g} cm · max {summary.max_lateral_cm:.1f} cm "
               f"at sample {summary.max_lateral_index}")

    st.markdown("#### Angular Deviation")
    st.markdown(f"**{ang_txt}**")
    ang_val = summary.current_angular_deg or 0.0
    st.progress(min(ang_val / max(2 * thresholds.angular_threshold_deg, 1e-9), 1.0))
    st.caption(f"Target: <{thresholds.angular_threshold_deg:g}°")

# -------------------- TABLE & EXPORT --------------------
st.subheader("Deviation by sample")
st.dataframe(table.round(3), use_container_width=True)

st.download_button("Download deviations (csv)", data=table.to_csv(index=False),
                   file_name="deviations.csv", mime="text/csv")

buf = io.BytesIO()
with pd.ExcelWriter(buf, engine="xlsxwriter") as xw:
    table.to_excel(xw, index=False, sheet_name="Deviations")
    pd.DataFrame({
        "lateral_threshold_cm": [thresholds.lateral_threshold_cm],
        "angular_threshold_deg": [thresholds.angular_threshold_deg],
        "max_lateral_cm": [summary.max_lateral_cm],
        "exceedances": [summary.exceedance_count],
        "dogleg_severity_deg_per_30m": [summary.dogleg_severity],
    }).to_excel(xw, index=False, sheet_name="Summary")
st.download_button("Download Excel (XLSX)", buf.getvalue(), file_name="deviations.xlsx",
                   mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
