import pandas as pd
import pytest

import run_preprocess


@pytest.fixture(autouse=True)
def no_home_dirs(monkeypatch):
    monkeypatch.setattr(run_preprocess, "ensure_dirs", lambda: None)


def _args(export_files, *extra):
    return [
        "--pedometer", str(export_files["pedometer"]),
        "--heart-rate", str(export_files["heart_rate"]),
        "--floors", str(export_files["floors"]),
        *extra,
    ]


class TestRunPreprocess:
    def test_writes_cleaned_csvs(self, export_files, tmp_path, capsys):
        out = tmp_path / "proc"
        code = run_preprocess.main(_args(export_files, "--out", str(out)))

        assert code == 0
        ped = pd.read_csv(out / "pedometer_clean.csv")
        assert len(ped) == 4
        assert (out / "heart_rate_clean.csv").exists()
        assert (out / "floors_clean.csv").exists()
        assert "4 cleaned rows" in capsys.readouterr().out

    def test_exports_charts_for_window(self, export_files, tmp_path):
        charts = tmp_path / "charts"
        code = run_preprocess.main(_args(
            export_files, "--out", str(tmp_path / "proc"),
            "--start", "2021-03-01", "--end", "2021-04-30", "--charts-dir", str(charts),
        ))

        assert code == 0
        assert len(list(charts.glob("*.html"))) == 11
        assert (charts / "overview_2021-03-01_2021-04-30.png").exists()

    def test_missing_export_fails(self, export_files, tmp_path, capsys):
        export_files["floors"].unlink()
        code = run_preprocess.main(_args(export_files, "--out", str(tmp_path / "proc")))

        assert code == 1
        assert "not found" in capsys.readouterr().out

    def test_reversed_window_fails(self, export_files, tmp_path):
        code = run_preprocess.main(_args(
            export_files, "--out", str(tmp_path / "proc"),
            "--start", "2021-04-30", "--end", "2021-03-01",
        ))
        assert code == 1
