import os
from pathlib import Path

# ----------------- Paths & setup -----------------
BASE = Path(os.environ.get("HEALTHPULSE_HOME", Path.home() / "HealthPulseProject"))
RAW = BASE / "data_raw"
PROC = BASE / "data_processed"
CHARTS = BASE / "charts"

# Samsung Health exports used for the demo (April 2021 dump)
DATA_URL = "https://raw.githubusercontent.com/vnegi10/Health_data_analysis/master/data"
DEFAULT_SOURCES = {
    "pedometer": f"{DATA_URL}/com.samsung.shealth.tracker.pedometer_day_summary.202104030009.csv",
    "heart_rate": f"{DATA_URL}/com.samsung.shealth.tracker.heart_rate.202104030009.csv",
    "floors": f"{DATA_URL}/com.samsung.health.floors_climbed.202104030009.csv",
}
SOURCE_ENV = {
    "pedometer": "HEALTHPULSE_PEDOMETER",
    "heart_rate": "HEALTHPULSE_HEART_RATE",
    "floors": "HEALTHPULSE_FLOORS",
}

# export layout: line 1 is a banner, line 2 the header
HEADER_ROW = 1
TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
TIME_COL = "create_time"

WEEKEND_DAYS = ("Saturday", "Sunday")

CHART_WIDTH = 850
CHART_HEIGHT = 500
DEFAULT_BINS = 50


def ensure_dirs():
    for d in (RAW, PROC, CHARTS):
        d.mkdir(parents=True, exist_ok=True)


def export_sources(overrides=None):
    """Resolve the three export locations: explicit override > env var > default URL."""
    overrides = overrides or {}
    sources = {}
    for name, default in DEFAULT_SOURCES.items():
        sources[name] = overrides.get(name) or os.environ.get(SOURCE_ENV[name]) or default
    return sources
