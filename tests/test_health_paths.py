import importlib
from pathlib import Path

import health_paths


class TestExportSources:
    def test_defaults_are_the_demo_urls(self, monkeypatch):
        for env in health_paths.SOURCE_ENV.values():
            monkeypatch.delenv(env, raising=False)

        assert health_paths.export_sources() == health_paths.DEFAULT_SOURCES

    def test_env_overrides_default(self, monkeypatch):
        monkeypatch.setenv("HEALTHPULSE_FLOORS", "/data/floors.csv")
        sources = health_paths.export_sources()
        assert sources["floors"] == "/data/floors.csv"

    def test_explicit_override_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("HEALTHPULSE_PEDOMETER", "/env/ped.csv")
        sources = health_paths.export_sources({"pedometer": "/cli/ped.csv", "floors": None})
        assert sources["pedometer"] == "/cli/ped.csv"
        assert sources["floors"] is not None


class TestDirectories:
    def test_home_env_moves_all_dirs(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HEALTHPULSE_HOME", str(tmp_path / "hp"))
        try:
            mod = importlib.reload(health_paths)
            assert mod.BASE == tmp_path / "hp"
            assert mod.PROC == tmp_path / "hp" / "data_processed"

            mod.ensure_dirs()
            for d in (mod.RAW, mod.PROC, mod.CHARTS):
                assert Path(d).is_dir()
        finally:
            monkeypatch.delenv("HEALTHPULSE_HOME")
            importlib.reload(health_paths)
