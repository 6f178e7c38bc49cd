# app_health.py
from datetime import timedelta

import streamlit as st

from health_charts import (
    active_time_chart, calories_vs_steps_chart, cumulative_distance_chart,
    daily_distance_chart, daily_steps_chart, export_charts, build_all_charts,
    floors_chart, heart_rate_distribution_chart, heart_rate_scatter_chart,
    monthly_breakdown_chart, render_overview_png, step_distribution_chart,
)
from health_io import ExportError, load_exports
from health_paths import CHARTS, DEFAULT_BINS, ensure_dirs, export_sources
from health_preprocess import filter_window, prepare_all, summarize

st.set_page_config(page_title="HealthPulse — Samsung Health Explorer", layout="wide")
st.markdown("<h1 style='text-align:center;'>❤️ HealthPulse — Visualizing Samsung Health App Data</h1>", unsafe_allow_html=True)
st.markdown("**Pipeline:** load exports → clean & convert units → cumulative distance & calendar labels → date window → charts")


@st.cache_data
def load_raw(sources):
    return load_exports(dict(sources))


# ----------------- Sidebar: sources -----------------
defaults = export_sources()
with st.sidebar:
    st.markdown("### ⚙️ Data sources")
    st.caption("Local path or URL of each Samsung Health CSV export.")
    sources = {
        "pedometer": st.text_input("Pedometer day summary", defaults["pedometer"]),
        "heart_rate": st.text_input("Heart rate", defaults["heart_rate"]),
        "floors": st.text_input("Floors climbed", defaults["floors"]),
    }

# -------------------- 1️⃣ Obtaining input data --------------------
st.header("1️⃣ Obtaining input data")
st.markdown(
    """
Activity data is exported from the Samsung Health app as one CSV file per data type.
The first line of each file is a banner, so the **second row** is used as the header.
Files are read directly from the paths/URLs in the sidebar.
"""
)
try:
    with st.spinner("Reading exports..."):
        raw = load_raw(tuple(sorted(sources.items())))
except ExportError as e:
    st.error(f"Could not load exports: {e}")
    st.stop()

# -------------------- 2️⃣ Exploring the structure --------------------
st.header("2️⃣ Exploring the structure of the data")
shape, desc = summarize(raw["pedometer"])
st.write(f"Pedometer export: **{shape[0]} rows × {shape[1]} columns**")
with st.expander("Column statistics (describe)"):
    st.dataframe(desc.astype(str))

# -------------------- 3️⃣ Clean & organize --------------------
st.header("3️⃣ Clean and organize the data")
try:
    frames = prepare_all(raw)
except ValueError as e:
    st.error(f"Export has an unexpected layout: {e}")
    st.stop()

ped, heart, floors = frames["pedometer"], frames["heart_rate"], frames["floors"]
st.info("Distance converted to km, active time to minutes; rows without source_info dropped; sorted by time.")
st.write(f"Rows before: {len(raw['pedometer'])}, after de-dup: {len(ped)}")
st.subheader("Cumulative distance & calendar labels (first rows)")
st.dataframe(ped.head(20), use_container_width=True)

if ped.empty:
    st.warning("Pedometer export has no usable rows.")
    st.stop()

# -------------------- 4️⃣ Time range --------------------
st.header("4️⃣ Select time range to plot activity data")
first_day = ped["create_time"].min().date()
last_day = ped["create_time"].max().date() + timedelta(days=1)
c1, c2, c3 = st.columns(3)
with c1:
    start_date = st.date_input("Select start date", value=first_day)
with c2:
    end_date = st.date_input("Select end date", value=last_day)
with c3:
    bins = st.slider("Histogram bins", 10, 100, DEFAULT_BINS, step=5)

if start_date > end_date:
    st.error("Start date must not be after end date.")
    st.stop()

ped_f = filter_window(ped, start_date, end_date)
heart_f = filter_window(heart, start_date, end_date)
floors_f = filter_window(floors, start_date, end_date)
st.write(f"Rows in window — pedometer: {len(ped_f)}, heart rate: {len(heart_f)}, floors: {len(floors_f)}")

if ped_f.empty:
    st.warning("No pedometer data in the selected window.")
else:
    # ---------------- Steps ----------------
    st.header("🦶 Daily steps in a given time period")
    st.plotly_chart(daily_steps_chart(ped_f, start_date, end_date), use_container_width=True)

    st.markdown("Distribution of steps between different years:")
    st.plotly_chart(step_distribution_chart(ped_f, start_date, end_date, bins=bins), use_container_width=True)

    st.header("📅 Monthly breakdown between different years")
    st.plotly_chart(monthly_breakdown_chart(ped_f, start_date, end_date), use_container_width=True)

    # ---------------- Distance ----------------
    st.header("📏 Daily distance in a given time period")
    st.markdown("Bars are colored by distance, so longer days stand out.")
    st.plotly_chart(daily_distance_chart(ped_f, start_date, end_date), use_container_width=True)

    st.header("📈 Cumulative distance for the selected time period")
    st.plotly_chart(cumulative_distance_chart(ped_f, start_date, end_date), use_container_width=True)

    # ---------------- Active time ----------------
    st.header("⏱ Distribution of active time for the selected time period")
    st.plotly_chart(active_time_chart(ped_f, start_date, end_date, "day_type", bins=bins), use_container_width=True)
    st.plotly_chart(active_time_chart(ped_f, start_date, end_date, "day", bins=bins), use_container_width=True)

    st.header("🔥 Correlation between number of steps and calories")
    st.markdown("2D histogram scatterplot: marker size is proportional to the number of days in each cell.")
    st.plotly_chart(calories_vs_steps_chart(ped_f, start_date, end_date), use_container_width=True)

    st.download_button("Download filtered pedometer CSV",
                       data=ped_f.to_csv(index=False).encode("utf-8"),
                       file_name=f"pedometer_{start_date}_{end_date}.csv",
                       mime="text/csv")

# ---------------- Heart rate ----------------
st.header("❤️ Visualizing heart rate data")
st.write(f"Heart rate export: **{len(heart)} samples**")
if heart_f.empty:
    st.info("No heart rate samples in the selected window.")
else:
    st.plotly_chart(heart_rate_scatter_chart(heart_f, start_date, end_date), use_container_width=True)
    st.markdown("Most samples are taken at rest, so they cluster around the resting range of 60-100 bpm.")
    st.plotly_chart(heart_rate_distribution_chart(heart_f, start_date, end_date), use_container_width=True)

# ---------------- Floors ----------------
st.header("🏢 Number of floors climbed over the selected time range")
if floors_f.empty:
    st.info("No floors data in the selected window.")
else:
    st.plotly_chart(floors_chart(floors_f, start_date, end_date), use_container_width=True)

# ---------------- Export ----------------
st.markdown("---")
if st.button("💾 Export charts (HTML + overview PNG)"):
    ensure_dirs()
    window = {"pedometer": ped_f, "heart_rate": heart_f, "floors": floors_f}
    paths = export_charts(build_all_charts(window, start_date, end_date, bins=bins), CHARTS)
    png = render_overview_png(window, CHARTS / f"overview_{start_date}_{end_date}.png")
    st.success(f"Exported {len(paths)} charts and {png.name} to {CHARTS}")
    st.image(str(png))
