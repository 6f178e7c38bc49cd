import calendar
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import plotly.express as px

from health_paths import CHART_HEIGHT, CHART_WIDTH, DEFAULT_BINS, TIME_COL

log = logging.getLogger(__name__)

YEAR_COLORS = ["#675193", "#ca8861"]
MONTH_ORDER = list(calendar.month_name)[1:]
DAY_ORDER = list(calendar.day_name)


def _title(text, start, end):
    return f"{text} from {pd.Timestamp(start):%Y-%m-%d} to {pd.Timestamp(end):%Y-%m-%d}"


def _style(fig, title, x_title, y_title):
    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        width=CHART_WIDTH, height=CHART_HEIGHT,
    )
    fig.update_xaxes(title_text=x_title, title_font=dict(size=14), tickfont=dict(size=12))
    fig.update_yaxes(title_text=y_title, title_font=dict(size=14), tickfont=dict(size=12))
    return fig


# ----------------- Pedometer -----------------
def daily_steps_chart(ped, start, end):
    fig = px.area(ped, x=TIME_COL, y="step_count")
    fig.update_traces(line=dict(color="seagreen"), fillcolor="rgba(46,139,87,0.35)")
    return _style(fig, _title("Daily steps", start, end), "Time", "Daily steps")


def step_distribution_chart(ped, start, end, bins=DEFAULT_BINS):
    d = ped.assign(year=ped["year"].astype(str))
    fig = px.histogram(d, x="step_count", color="year", nbins=bins, barmode="stack")
    return _style(fig, _title("Step count distribution", start, end), "Number of steps", "Number of counts")


def monthly_breakdown(ped):
    """Total steps per (year, month), months in calendar order."""
    g = ped.groupby(["year", "month"], as_index=False)["step_count"].sum()
    g["year"] = g["year"].astype(str)
    g["month"] = pd.Categorical(g["month"], categories=MONTH_ORDER, ordered=True)
    return g.sort_values(["month", "year"]).reset_index(drop=True)


def monthly_breakdown_chart(ped, start, end):
    g = monthly_breakdown(ped)
    months = [m for m in MONTH_ORDER if m in set(g["month"].astype(str))]
    fig = px.bar(
        g.assign(month=g["month"].astype(str)), x="year", y="step_count", color="year",
        facet_col="month", category_orders={"month": months},
        color_discrete_sequence=YEAR_COLORS,
    )
    fig.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))
    fig = _style(fig, _title("Monthly breakdown of step count", start, end), None, None)
    fig.update_xaxes(title_text="")
    fig.update_yaxes(showgrid=False)
    fig.update_yaxes(title_text="Number of steps", col=1)
    return fig


def daily_distance_chart(ped, start, end):
    fig = px.bar(ped, x=TIME_COL, y="distance", color="distance")
    return _style(fig, _title("Daily distance", start, end), "Time", "Daily distance [km]")


def cumulative_distance_chart(ped, start, end):
    fig = px.area(ped, x=TIME_COL, y="cumul_distance")
    return _style(fig, _title("Cumulative distance", start, end), "Time", "Aggregate daily distance [km]")


def active_time_chart(ped, start, end, color_by="day_type", bins=DEFAULT_BINS):
    if color_by not in ("day_type", "day"):
        raise ValueError(f"color_by must be 'day_type' or 'day', got {color_by!r}")
    orders = {"day": DAY_ORDER, "day_type": ["weekday", "weekend"]}
    fig = px.histogram(ped, x="active_time", color=color_by, nbins=bins,
                       category_orders={color_by: orders[color_by]})
    return _style(fig, _title("Active time distribution", start, end),
                  "Measured active time [minutes]", "Number of counts")


def binned_counts(df, x, y, bins=30):
    """2D histogram of (x, y): one row per non-empty cell with its midpoints and count."""
    d = df[[x, y]].dropna()
    if d.empty:
        return pd.DataFrame({x: [], y: [], "count": []})
    xb = pd.cut(d[x], bins=bins)
    yb = pd.cut(d[y], bins=bins)
    g = d.groupby([xb, yb], observed=True).size().reset_index(name="count")
    g[x] = [float(iv.mid) for iv in g[x]]
    g[y] = [float(iv.mid) for iv in g[y]]
    return g[g["count"] > 0].reset_index(drop=True)


def calories_vs_steps_chart(ped, start, end, bins=30):
    g = binned_counts(ped, "step_count", "calorie", bins=bins)
    fig = px.scatter(g, x="step_count", y="calorie", size="count")
    return _style(fig, _title("2D histogram scatterplot calories vs step count", start, end),
                  "Number of steps", "Calories")


# ----------------- Heart rate & floors -----------------
def heart_rate_scatter_chart(hr, start, end):
    fig = px.scatter(hr, x=TIME_COL, y="heart_rate", size="heart_rate", size_max=12)
    return _style(fig, _title("Heart rate", start, end), "Time", "Measured heart rate [bpm]")


def heart_rate_distribution_chart(hr, start, end):
    counts = hr["heart_rate"].dropna().value_counts().sort_index()
    d = pd.DataFrame({"heart_rate": counts.index.to_numpy(dtype=float), "count": counts.to_numpy()})
    fig = px.bar(d, x="heart_rate", y="count", color="heart_rate")
    return _style(fig, _title("Heart rate distribution", start, end),
                  "Measured heart rate [bpm]", "Number of counts")


def floors_chart(floors, start, end):
    fig = px.bar(floors, x=TIME_COL, y="floor")
    return _style(fig, _title("Floors climbed", start, end), "Time", "Number of floors")


def build_all_charts(frames, start, end, bins=DEFAULT_BINS):
    ped, hr, fl = frames["pedometer"], frames["heart_rate"], frames["floors"]
    return {
        "daily_steps": daily_steps_chart(ped, start, end),
        "step_distribution": step_distribution_chart(ped, start, end, bins=bins),
        "monthly_breakdown": monthly_breakdown_chart(ped, start, end),
        "daily_distance": daily_distance_chart(ped, start, end),
        "cumulative_distance": cumulative_distance_chart(ped, start, end),
        "active_time_day_type": active_time_chart(ped, start, end, "day_type", bins=bins),
        "active_time_day": active_time_chart(ped, start, end, "day", bins=bins),
        "calories_vs_steps": calories_vs_steps_chart(ped, start, end),
        "heart_rate": heart_rate_scatter_chart(hr, start, end),
        "heart_rate_distribution": heart_rate_distribution_chart(hr, start, end),
        "floors": floors_chart(fl, start, end),
    }


# ----------------- Export -----------------
def export_charts(figures, out_dir):
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        p = out_dir / f"{name}.html"
        fig.write_html(str(p), include_plotlyjs="cdn")
        paths.append(p)
    log.info("Exported %d charts to %s", len(paths), out_dir)
    return paths


def render_overview_png(frames, path):
    """Static three-panel overview (steps, heart rate, floors) saved as PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
    panels = [
        ("pedometer", "step_count", "Daily steps", "seagreen"),
        ("heart_rate", "heart_rate", "Heart rate (bpm)", "firebrick"),
        ("floors", "floor", "Floors climbed", "tab:blue"),
    ]
    for ax, (name, col, title, color) in zip(axes, panels):
        df = frames[name]
        if df.empty:
            ax.text(0.5, 0.5, f"No {name} data", ha="center", transform=ax.transAxes)
        elif name == "heart_rate":
            ax.scatter(df[TIME_COL], df[col], s=4, color=color)
        else:
            ax.plot(df[TIME_COL], df[col], color=color)
        ax.set_title(title)
    fig.autofmt_xdate()
    fig.tight_layout()
    fig.savefig(path, dpi=100)
    plt.close(fig)
    return path
