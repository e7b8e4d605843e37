"""
Centralized configuration management for the salary dashboard.

Handles environment variables, dataset location, view transition
settings and application metadata.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


ROOT_DIR = Path(__file__).parent.parent


@dataclass
class TransitionConfig:
    """Animation timings and emphasis styling shared by the views."""

    bar_duration_ms: int = 500
    line_duration_ms: int = 300

    bar_emphasized_opacity: float = 1.0
    bar_muted_opacity: float = 0.5
    line_emphasized_opacity: float = 0.7
    line_muted_opacity: float = 0.05
    line_muted_color: str = "#ddd"

    @classmethod
    def from_env(cls) -> "TransitionConfig":
        """Load transition timings from environment variables."""
        return cls(
            bar_duration_ms=int(os.getenv("BAR_TRANSITION_MS", "500")),
            line_duration_ms=int(os.getenv("LINE_TRANSITION_MS", "300")),
        )


@dataclass
class AppConfig:
    """Application-level configuration."""

    title: str = "Data Science Salaries Dashboard"
    page_icon: str = "📊"
    layout: str = "wide"

    # Data handling
    dataset_path: Path = field(default_factory=lambda: ROOT_DIR / "data" / "ds_salaries.csv")
    sample_size: int = 600

    # Line view geometry, used to invert brush pixel extents
    line_view_height: int = 400

    log_level: str = "INFO"
    log_to_file: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load app config from environment variables."""
        dataset_path = os.getenv("SALARIES_CSV")
        return cls(
            title=os.getenv("APP_TITLE", "Data Science Salaries Dashboard"),
            dataset_path=Path(dataset_path) if dataset_path else ROOT_DIR / "data" / "ds_salaries.csv",
            sample_size=int(os.getenv("SAMPLE_SIZE", "600")),
            line_view_height=int(os.getenv("LINE_VIEW_HEIGHT", "400")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_to_file=os.getenv("LOG_TO_FILE", "false").lower() in {"1", "true", "yes"},
        )


class Config:
    """Global configuration manager."""

    _instance: Optional["Config"] = None

    def __init__(self):
        self.app = AppConfig.from_env()
        self.transitions = TransitionConfig.from_env()
        self.root_dir = ROOT_DIR
        self.logs_dir = self.root_dir / "logs"

    @classmethod
    def load(cls) -> "Config":
        """Singleton pattern - load or return existing config."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next load() re-reads the environment."""
        cls._instance = None
