"""Configuration settings for the flashcard app."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
WORDS_FILE = Path(os.getenv("WORDS_FILE", str(DATA_DIR / "words.json")))

# Spacing settings
GAP_BASE_RATIO = 0.02  # first gap is 2% of the list length
GAP_CAP_RATIO = 0.6  # gap never exceeds 60% of the list length


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    words_file: Path = WORDS_FILE


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///wordwatch.db")
    echo: bool = _env_flag("DATABASE_ECHO", "false")


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Spacing schedule settings."""
    gap_base_ratio: float = float(os.getenv("GAP_BASE_RATIO", str(GAP_BASE_RATIO)))
    gap_cap_ratio: float = float(os.getenv("GAP_CAP_RATIO", str(GAP_CAP_RATIO)))


@dataclass
class PracticeSettings:
    """Practice session settings."""
    word_list_name: str = os.getenv("WORD_LIST_NAME", "words")
    feedback_delay: float = float(os.getenv("FEEDBACK_DELAY", "0.35"))  # seconds
    persist_progress: bool = _env_flag("PERSIST_PROGRESS", "true")


def get_metrics_port() -> Optional[int]:
    """Get the metrics port from environment variable."""
    port = os.getenv("METRICS_PORT", "")
    return int(port) if port else None


@dataclass
class MonitoringSettings:
    """Metrics endpoint settings."""
    port: Optional[int] = field(default_factory=get_metrics_port)


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_practice_settings() -> PracticeSettings:
    """Get practice settings."""
    return PracticeSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    practice: PracticeSettings = field(default_factory=get_practice_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not 0 < self.learning.gap_base_ratio <= 1:
            raise ValueError("GAP_BASE_RATIO must be in (0, 1]")

        if not 0 < self.learning.gap_cap_ratio <= 1:
            raise ValueError("GAP_CAP_RATIO must be in (0, 1]")

        if self.learning.gap_base_ratio > self.learning.gap_cap_ratio:
            raise ValueError("GAP_BASE_RATIO cannot be greater than GAP_CAP_RATIO")

        if self.practice.feedback_delay < 0:
            raise ValueError("FEEDBACK_DELAY cannot be negative")

        if not self.practice.word_list_name:
            raise ValueError("WORD_LIST_NAME is required")


# Create global settings instance
settings = Settings()
settings.validate()
