"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    project_root: Path = Field(
        default=Path(),
        description="Path to project root containing flowdesk.yml",
    )

    state_file: Path = Field(
        default=Path(".flowdesk") / "state.json",
        description="Durable key-value store for active timers (relative to project_root)",
    )

    tick_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between elapsed-time ticks while a timer runs",
    )

    api_base_url: str | None = Field(
        default=None,
        description="Backend REST API base URL; in-memory collaborators are used when unset",
    )

    api_token: str | None = Field(
        default=None,
        description="Bearer token for the backend API",
    )

    api_timeout: float = Field(
        default=30.0,
        description="Backend request timeout in seconds",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "FLOWDESK_",
    }

    @property
    def state_path(self) -> Path:
        """Resolved path of the durable state file."""
        if self.state_file.is_absolute():
            return self.state_file
        return self.project_root / self.state_file
