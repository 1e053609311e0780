"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Paths
    DATA_DIR: Path = Path.home() / ".stagedit"  # Per-application data directory
    APPLIED_FILENAME: str = "_applied.png"  # Single slot, overwritten per apply
    RECENT_FILES_FILENAME: str = "recent_files.json"

    # Recent files
    MAX_RECENT_FILES: int = 10

    # Server settings
    HOST: str = "127.0.0.1"
    PORT: int = 8090
    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": "STAGEDIT_"}

    @property
    def applied_path(self) -> Path:
        """Location of the last applied preview image."""
        return self.DATA_DIR / self.APPLIED_FILENAME

    @property
    def recent_files_path(self) -> Path:
        """Location of the recent files list."""
        return self.DATA_DIR / self.RECENT_FILES_FILENAME


settings = Settings()
