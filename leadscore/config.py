"""Configuration settings for the lead scoring engine."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    default_output_name: str = "ranked_companies.csv"

    # Batch scoring
    batch_workers: int = 1
    parallel_min_batch_size: int = 2000
    max_batch_size: int = 50_000

    # Signal policy thresholds (days / percent)
    freshness_window_days: int = 90
    staleness_after_days: int = 180
    low_completeness_below: int = 50

    # Logging
    log_level: str = "INFO"

    @property
    def default_output_path(self) -> Path:
        return self.data_dir / self.default_output_name

    class Config:
        env_prefix = "LEADSCORE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
