"""
Application configuration via pydantic-settings.

Loads values from the environment (prefix ``SHORTS2TEXT_``) or a .env file
with defaults suited to a local transcription server.
Use ``get_settings()`` to obtain the cached singleton instance; the job
controller itself always receives its settings explicitly.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shorts2text.core.models import OutputFormat


class Settings(BaseSettings):
    """Shorts2Text settings loaded from environment / .env file.

    Attributes:
        api_base_url: Root URL of the remote transcription service.
        polling_interval_ms: Fixed delay between one poll response and the next request.
        max_polling_attempts: Hard ceiling on status polls for a single job.
        default_output_format: Format selected when the controller starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHORTS2TEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Remote service ---
    api_base_url: str = "http://localhost:8000"
    request_timeout_s: float = Field(default=30.0, gt=0)  # Per-request httpx timeout

    # --- Polling ---
    polling_interval_ms: int = Field(default=1500, gt=0)
    max_polling_attempts: int = Field(default=240, ge=1)  # ~6 minutes at 1.5s/attempt

    # --- Presentation ---
    default_output_format: OutputFormat = OutputFormat.plain
    ticker_interval_ms: int = Field(default=100, gt=0, lt=500)  # Must beat the 500ms blink

    # --- Application ---
    log_level: str = "INFO"  # Python logging level

    @property
    def polling_interval_s(self) -> float:
        return self.polling_interval_ms / 1000

    @property
    def ticker_interval_s(self) -> float:
        return self.ticker_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
