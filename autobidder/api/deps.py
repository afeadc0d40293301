"""Dependency wiring for FastAPI endpoints."""

from __future__ import annotations

import logging

from autobidder.config import Settings, load_settings
from autobidder.engine import PricingEngine
from autobidder.factory import create_default_engine

logger = logging.getLogger(__name__)


def create_engine(settings: Settings | None = None) -> PricingEngine:
    """Create a PricingEngine from settings, reading the environment if none are given.

    Raises ConfigurationRejectedError if an ``AUTOBIDDER_*`` variable is
    invalid.
    """
    if settings is None:
        settings = load_settings()
    logger.info(
        "Creating pricing engine (max expression length %d, max depth %d)",
        settings.max_expression_length,
        settings.max_expression_depth,
    )
    return create_default_engine(settings)
