"""Application configuration using pydantic-settings.

All swap tuning knobs (slippage ceiling, deadline window, retry policy)
live here so the API and the execution engine read the same values.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=5000, description="API server port")
    cors_origins: str = Field(
        default="https://bento-swap-base.vercel.app,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Routing engine (Symbiosis)
    # ======================
    symbiosis_api_url: str = Field(
        default="https://api.symbiosis.finance/crosschain",
        description="Symbiosis cross-chain API base URL",
    )
    symbiosis_client_id: str = Field(
        default="api-swap-bridge",
        description="Client identity sent to the routing engine (empty = unrestricted)",
    )
    symbiosis_timeout: float = Field(default=30.0, description="Routing engine HTTP timeout (seconds)")

    # ======================
    # Swap parameters
    # ======================
    default_slippage_bps: int = Field(default=300, description="Default slippage (300 = 3%)")
    max_slippage_bps: int = Field(default=300, description="Hard slippage ceiling in basis points")
    deadline_minutes: int = Field(default=20, description="Swap deadline window in minutes")
    default_select_mode: str = Field(default="best_return", description="Default aggregator mode")

    # ======================
    # Retry policy
    # ======================
    retry_rounds: int = Field(default=3, description="Tier 1 rounds over all aggregator modes")
    retry_delay_seconds: float = Field(default=2.0, description="Pause between failed rounds")
    slippage_step_bps: int = Field(default=100, description="Slippage increase per failed round")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "cors_origins": self.allowed_origins,
            "routing": {
                "api_url": self.symbiosis_api_url,
                "client_id": self.symbiosis_client_id or "(unrestricted)",
                "timeout": self.symbiosis_timeout,
            },
            "swap": {
                "default_slippage_bps": self.default_slippage_bps,
                "max_slippage_bps": self.max_slippage_bps,
                "deadline_minutes": self.deadline_minutes,
                "default_select_mode": self.default_select_mode,
            },
            "retry": {
                "rounds": self.retry_rounds,
                "delay_seconds": self.retry_delay_seconds,
                "slippage_step_bps": self.slippage_step_bps,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
