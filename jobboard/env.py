import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/jobboard.db"
DEFAULT_LOG_DIR = "logs"


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str
    log_dir: Path

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=Path(os.getenv("JOBBOARD_DB_PATH", DEFAULT_DB_PATH)),
            log_level=os.getenv("JOBBOARD_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(os.getenv("JOBBOARD_LOG_DIR", DEFAULT_LOG_DIR)),
        )
