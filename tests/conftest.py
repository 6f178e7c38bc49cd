import pytest

from health_io import read_export
from health_preprocess import prepare_all

PEDOMETER_CSV = """com.samsung.shealth.tracker.pedometer_day_summary,6313002,3
create_time,step_count,distance,active_time,calorie,source_info,
2021-04-04 09:00:00.000,10000,8000,5400000,400.0,phone,
2021-03-29 09:00:00.000,4000,3000,1800000,150.0,phone,
2021-04-03 09:00:00.000,12000,9500,7200000,500.0,watch,
2021-04-03 09:00:00.000,12000,9500,7200000,500.0,,
2021-04-05 09:00:00.000,6000,4500,2400000,250.0,phone,
"""

HEART_RATE_CSV = """com.samsung.shealth.tracker.heart_rate,6313002,3
com.samsung.health.heart_rate.create_time,com.samsung.health.heart_rate.heart_rate,
2021-04-03 12:00:00.000,72,
2021-04-01 08:00:00.000,65,
2021-04-06 08:00:00.000,80,
2021-04-02 08:00:00.000,72,
"""

FLOORS_CSV = """com.samsung.health.floors_climbed,6313002,3
create_time,floor,
2021-04-02 10:00:00.000,3,
2021-03-30 10:00:00.000,65,
"""


@pytest.fixture
def export_files(tmp_path):
    """Write the three sample exports and return {name: path}."""
    files = {}
    for name, text in (("pedometer", PEDOMETER_CSV), ("heart_rate", HEART_RATE_CSV), ("floors", FLOORS_CSV)):
        p = tmp_path / f"{name}.csv"
        p.write_text(text)
        files[name] = p
    return files


@pytest.fixture
def raw_frames(export_files):
    return {name: read_export(p) for name, p in export_files.items()}


@pytest.fixture
def frames(raw_frames):
    return prepare_all(raw_frames)
