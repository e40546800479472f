"""Runtime settings for the calculator and its HTTP app."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bitcalc.arith import DivZeroMode


class Settings(BaseSettings):
    """Runtime configuration, read from ``BITCALC_*`` env vars or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="BITCALC_",
        env_file=".env",
        extra="ignore",
    )

    # Arithmetic
    div_zero_mode: DivZeroMode = Field(
        default=DivZeroMode.SENTINEL,
        description="Division by zero policy: 'sentinel' returns ('0', '0'), 'error' raises",
    )

    # Verification
    verify_on_startup: bool = Field(
        default=True,
        description="Build the app's calculator through the verifying factory",
    )
    verify_width: int = Field(
        default=4, ge=1, le=8,
        description="Longest operand checked exhaustively by the factory",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # API
    api_title: str = "Bit-String Calculator API"
    api_version: str = "0.1.0"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
