# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[5]
_ENV_FILE = _PROJECT_ROOT / ".env"

_PACKAGED_KNOWLEDGE = Path(__file__).resolve().parents[1] / "data" / "knowledge.yaml"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "homerates"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Extraction defaults (UI convenience, not calculation inputs) --
    DEFAULT_MONTHLY_INS: float = Field(
        default=100.0,
        description="Monthly homeowner's insurance assumed when a query omits it.",
    )
    DEFAULT_MONTHLY_HOA: float = Field(
        default=0.0,
        description="Monthly HOA dues assumed when a query omits them.",
    )

    # -- Tax --
    DEFAULT_TAX_RATE: float = Field(
        default=0.0,
        description="Annual tax rate (decimal) used when neither an override nor a ZIP lookup applies.",
    )

    # -- Parsing --
    MIN_PARSE_CONFIDENCE: float = Field(
        default=0.65,
        ge=0,
        le=1,
        description="Minimum engine confidence for the payment router to accept a parse.",
    )

    # -- Scenario --
    DEFAULT_SCENARIO_TERM_YEARS: int = 30
    CASH_FLOW_ESCALATION_PCT: float = Field(
        default=0.0,
        description="Annual rent/expense growth applied to the cash-flow table. 0 keeps it flat.",
    )

    # -- Knowledge dataset --
    KNOWLEDGE_PATH: Path = Field(
        default=_PACKAGED_KNOWLEDGE,
        description="YAML file with ZIP->county, county tax rates and loan limits.",
    )

    # -- Market snapshot --
    MARKET_TEN_YEAR_YIELD: float | None = Field(
        default=4.16,
        description="10-year Treasury yield (percent) reported by the market snapshot.",
    )
    MARKET_MORT30_AVG: float | None = Field(
        default=6.27,
        description="30-year fixed average (percent) reported by the market snapshot.",
    )


settings = Settings()
