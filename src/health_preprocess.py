"""Cleaning and enrichment of Samsung Health exports.

Every function takes a DataFrame and returns a new one; the raw frames are
never modified in place.
"""
import logging

import numpy as np
import pandas as pd

from health_paths import TIME_COL, TIME_FORMAT, WEEKEND_DAYS

log = logging.getLogger(__name__)

HEART_RATE_COLUMNS = {
    "com.samsung.health.heart_rate.create_time": "create_time",
    "com.samsung.health.heart_rate.heart_rate": "heart_rate",
}
PEDOMETER_NUMERIC = ["step_count", "distance", "active_time", "calorie"]


def _require(df, cols, what):
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{what} export is missing columns: {missing}")


def parse_timestamps(series):
    return pd.to_datetime(series, format=TIME_FORMAT, errors="coerce")


def _parse_and_sort(df, what):
    df[TIME_COL] = parse_timestamps(df[TIME_COL])
    bad = int(df[TIME_COL].isna().sum())
    if bad:
        log.warning("%s: dropping %d rows with unparseable %s", what, bad, TIME_COL)
        df = df.dropna(subset=[TIME_COL])
    # stable sort keeps export order for equal timestamps
    return df.sort_values(TIME_COL, kind="mergesort").reset_index(drop=True)


def clean_pedometer(raw):
    _require(raw, [TIME_COL, "source_info"] + PEDOMETER_NUMERIC, "Pedometer")
    df = raw.copy()
    for c in PEDOMETER_NUMERIC:
        df[c] = pd.to_numeric(df[c], errors="coerce")

    df["distance"] = df["distance"] / 1000        # m -> km
    df["active_time"] = df["active_time"] / 60000  # ms -> minutes

    # rows without source_info are the duplicated per-device summaries
    before = len(df)
    df = df.dropna(subset=["source_info"]).copy()
    log.info("Pedometer rows before: %d, after de-dup: %d", before, len(df))
    return _parse_and_sort(df, "Pedometer")


def clean_heart_rate(raw):
    df = raw.rename(columns=HEART_RATE_COLUMNS)
    _require(df, [TIME_COL, "heart_rate"], "Heart rate")
    df["heart_rate"] = pd.to_numeric(df["heart_rate"], errors="coerce")
    return _parse_and_sort(df, "Heart rate")


def clean_floors(raw):
    _require(raw, [TIME_COL, "floor"], "Floors")
    df = raw.copy()
    df["floor"] = pd.to_numeric(df["floor"], errors="coerce")
    return _parse_and_sort(df, "Floors")


# ----------------- Derived columns -----------------
def cumulative_distance(distances):
    """Running total: out[i] == sum(distances[0..i]), missing entries count as 0."""
    s = pd.Series(distances, dtype=float)
    return s.fillna(0.0).cumsum().to_numpy()


def day_type(timestamp):
    return "weekend" if pd.Timestamp(timestamp).day_name() in WEEKEND_DAYS else "weekday"


def calendar_labels(timestamps):
    ts = pd.Series(pd.to_datetime(timestamps)).reset_index(drop=True)
    day = ts.dt.day_name()
    return pd.DataFrame({
        "day_type": np.where(day.isin(WEEKEND_DAYS), "weekend", "weekday"),
        "day": day,
        "month": ts.dt.month_name(),
        "year": ts.dt.year.astype(int),
    })


def add_derived_columns(pedometer):
    """Insert cumul_distance, day_type, day, month and year at the front.

    The frame must already be sorted by create_time, otherwise the running
    total would not follow the calendar.
    """
    if not pedometer[TIME_COL].is_monotonic_increasing:
        raise ValueError("pedometer rows must be sorted by create_time")

    df = pedometer.reset_index(drop=True)
    labels = calendar_labels(df[TIME_COL])
    derived = pd.concat(
        [pd.DataFrame({"cumul_distance": cumulative_distance(df["distance"])}), labels],
        axis=1,
    )
    return pd.concat([derived, df.drop(columns=derived.columns, errors="ignore")], axis=1)


# ----------------- Time window -----------------
def filter_window(df, start, end):
    """Rows strictly between start and end; dates are taken at midnight."""
    start, end = pd.Timestamp(start), pd.Timestamp(end)
    if start > end:
        raise ValueError(f"start {start:%Y-%m-%d} is after end {end:%Y-%m-%d}")
    mask = (df[TIME_COL] > start) & (df[TIME_COL] < end)
    return df.loc[mask].reset_index(drop=True)


def summarize(df):
    return df.shape, df.describe(include="all")


def prepare_all(raw_frames):
    ped = add_derived_columns(clean_pedometer(raw_frames["pedometer"]))
    return {
        "pedometer": ped,
        "heart_rate": clean_heart_rate(raw_frames["heart_rate"]),
        "floors": clean_floors(raw_frames["floors"]),
    }
