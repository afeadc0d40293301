"""Application settings read from the environment.

Recognised variables (all optional):

- ``AUTOBIDDER_MAX_EXPRESSION_LENGTH``: longest formula text the evaluator
  accepts (default 2000).
- ``AUTOBIDDER_MAX_EXPRESSION_DEPTH``: deepest nesting the evaluator accepts
  (default 32, at most 64).
- ``AUTOBIDDER_CORS_ORIGINS``: comma-separated origins allowed by the API
  (default ``http://localhost:3000``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError

from autobidder.exceptions import ConfigurationRejectedError
from autobidder.pricing.expression import EvaluatorLimits

_ENV_PREFIX = "AUTOBIDDER_"


class Settings(BaseModel):
    """Runtime settings for the pricing engine and API."""

    max_expression_length: int = Field(default=2000, ge=1, le=100_000)
    max_expression_depth: int = Field(default=32, ge=1, le=64)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @property
    def evaluator_limits(self) -> EvaluatorLimits:
        return EvaluatorLimits(
            max_length=self.max_expression_length,
            max_depth=self.max_expression_depth,
        )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``AUTOBIDDER_*`` environment variables.

    Raises:
        ConfigurationRejectedError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}
    for field in ("max_expression_length", "max_expression_depth"):
        raw = env.get(_ENV_PREFIX + field.upper())
        if raw:
            values[field] = raw
    origins = env.get(_ENV_PREFIX + "CORS_ORIGINS")
    if origins:
        values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    try:
        return Settings(**values)
    except ValidationError as exc:
        msg = f"Invalid Autobidder settings: {exc}"
        raise ConfigurationRejectedError(msg) from exc
