"""Runtime configuration loaded from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """Settings shared by the web app, the CLI and the services."""

    data_dir: Path = DATA_DIR
    db_name: str = "gymflow.db"
    log_level: str = "INFO"
    default_calories_per_rep: float = 0.5
    free_workout_dedup_seconds: int = 30

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


def get_settings() -> Settings:
    """Build settings from GYMFLOW_* environment variables."""
    data_dir = os.getenv("GYMFLOW_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir) if data_dir else DATA_DIR,
        db_name=os.getenv("GYMFLOW_DB_NAME", "gymflow.db"),
        log_level=os.getenv("GYMFLOW_LOG_LEVEL", "INFO").upper(),
        default_calories_per_rep=float(
            os.getenv("GYMFLOW_DEFAULT_CALORIES_PER_REP", "0.5")
        ),
        free_workout_dedup_seconds=int(
            os.getenv("GYMFLOW_FREE_WORKOUT_DEDUP_SECONDS", "30")
        ),
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and the web server."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
