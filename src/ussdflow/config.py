from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .diagnostics import UssdFlowError


class ConfigError(UssdFlowError):
    """Configuration-related error."""
    pass


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    format: str = (
        "%(asctime)-20s %(name)-30s "
        "%(levelname)-8s: %(message)s"
    )


class LayoutSettings(BaseModel):
    column_width: int = Field(
        300, gt=0, description="Horizontal distance between flow depths."
    )
    row_step: int = Field(
        100, gt=0, description="Vertical distance between consecutively placed screens."
    )


class EnrichmentSettings(BaseModel):
    max_concurrency: int | None = Field(
        default=None,
        description="Maximum number of relation fetches in flight (None = unbounded).",
    )
    timeout_s: float | None = Field(
        default=None,
        description="Timeout per relation fetch in seconds (None = no timeout).",
    )

    @field_validator("max_concurrency")
    @classmethod
    def _positive_concurrency(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {value}")
        return value

    @field_validator("timeout_s")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError(f"timeout_s must be > 0, got {value}")
        return value


class GraphSettings(BaseModel):
    """
    Edge identity policy.

    - "kind":  menu and router edges carry their kind and selection key in
               the id, so they never collide with the default edge.
    - "merge": every edge is identified by "<source>-><target>" only; a later
               edge to the same target replaces the earlier one.
    """
    edge_identity: Literal["kind", "merge"] = Field(
        "kind", description="How edge ids are formed."
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Canonical configuration for the screen-flow graph builder.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="USSDFLOW_",  # USSDFLOW_LOGGING__LEVEL, USSDFLOW_LAYOUT__ROW_STEP, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    app_name: str = "ussdflow"
    debug: bool = False

    logging: LoggingSettings = LoggingSettings()
    layout: LayoutSettings = LayoutSettings()  # type: ignore[call-arg]
    enrichment: EnrichmentSettings = EnrichmentSettings()
    graph: GraphSettings = GraphSettings()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    Invalid values surface as ConfigError.
    """
    try:
        return AppSettings(**overrides)
    except ValueError as exc:
        raise ConfigError(f"Invalid ussdflow configuration: {exc}") from exc
