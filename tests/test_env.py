"""
Tests for environment-driven settings.
"""

from pathlib import Path

from jobboard.env import Settings, load_env


class TestSettings:
    """Test Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for var in ("JOBBOARD_DB_PATH", "JOBBOARD_LOG_LEVEL", "JOBBOARD_LOG_DIR"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings.from_env()

        assert settings.db_path == Path("data/jobboard.db")
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("logs")

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("JOBBOARD_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("JOBBOARD_LOG_LEVEL", "debug")
        monkeypatch.setenv("JOBBOARD_LOG_DIR", str(tmp_path / "logs"))

        settings = Settings.from_env()

        assert settings.db_path == tmp_path / "x.db"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == tmp_path / "logs"


class TestLoadEnv:
    """Test .env loading."""

    def test_loads_dotenv_file(self, monkeypatch, tmp_path):
        # Register the variable so teardown restores its original state
        monkeypatch.setenv("JOBBOARD_DB_PATH", "placeholder")
        monkeypatch.delenv("JOBBOARD_DB_PATH")
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("JOBBOARD_DB_PATH=from_file.db\n")

        load_env()

        assert Settings.from_env().db_path == Path("from_file.db")

    def test_environment_wins_over_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("JOBBOARD_DB_PATH", "from_env.db")
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("JOBBOARD_DB_PATH=from_file.db\n")

        load_env()

        assert Settings.from_env().db_path == Path("from_env.db")

    def test_missing_file_is_fine(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        load_env()
