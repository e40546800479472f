"""Application factory and entry point.

Run with:
    uvicorn bitcalc.app:app --reload
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from bitcalc.api import router, set_calculator
from bitcalc.calculator import BitCalculator
from bitcalc.config import Settings, get_settings
from bitcalc.factory import VerifiedFactory

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def create_app(
    calculator: BitCalculator | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional calculator for testing; otherwise builds one from
    the settings, through the verifying factory unless that is disabled.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)

    if calculator is None:
        if settings.verify_on_startup:
            calculator = VerifiedFactory.from_settings(settings)
        else:
            calculator = BitCalculator(div_zero_mode=settings.div_zero_mode)

    set_calculator(calculator)

    app = FastAPI(
        title=settings.api_title,
        description=(
            "Arbitrary-precision unsigned arithmetic on explicit bit strings: "
            "normalization, conversion, comparison, addition, subtraction, "
            "multiplication and division with remainder."
        ),
        version=settings.api_version,
    )
    app.include_router(router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Default app instance for `uvicorn bitcalc.app:app`
app = create_app()
