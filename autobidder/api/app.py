"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Load .env from the project root
_project_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_project_root / ".env")

from autobidder.data.sink import InMemoryQuoteSink
from autobidder.engine import ENGINE_VERSION, FormulaCheck
from autobidder.exceptions import FormulaNotFoundError, QuoteAssemblyError
from autobidder.formatting import format_price
from autobidder.models.formula import Formula  # noqa: TCH001 (FastAPI resolves at runtime)
from autobidder.models.quote import (  # noqa: TCH001
    CustomerInfo,
    PricingConfig,
    ServiceSelection,
)

if TYPE_CHECKING:
    from autobidder.config import Settings
    from autobidder.data.sink import QuoteSink
    from autobidder.engine import PricingEngine

logger = logging.getLogger(__name__)


class CalculateRequest(BaseModel):
    """Answers for a single calculator."""

    answers: dict[str, Any] = Field(default_factory=dict)


class QuoteRequest(BaseModel):
    """A multi-service quote submission."""

    customer: CustomerInfo
    services: list[ServiceSelection] = Field(min_length=1)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    source: str = "Calculator Form"


def create_app(
    *,
    engine: PricingEngine | None = None,
    quote_sink: QuoteSink | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine
        Optional pre-built pricing engine for dependency injection (e.g.
        tests). If not provided, one is created from settings on first
        request.
    quote_sink
        Where submitted quotes are handed off. Defaults to an in-memory
        sink.
    settings
        Optional settings; when omitted they are read from the environment
        on first use.
    """
    app = FastAPI(title="Autobidder", version=ENGINE_VERSION)

    cors_origins = (
        settings.cors_origins if settings is not None else ["http://localhost:3000"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.engine = engine
    app.state.quote_sink = quote_sink if quote_sink is not None else InMemoryQuoteSink()

    def _get_engine() -> PricingEngine:
        eng: PricingEngine | None = app.state.engine
        if eng is not None:
            return eng
        from autobidder.api.deps import create_engine

        eng = create_engine(settings)
        app.state.engine = eng
        return eng

    def _get_formula(formula_id: int) -> Formula:
        try:
            return _get_engine().repository.require(formula_id)
        except FormulaNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # Formulas
    # ------------------------------------------------------------------

    @app.get("/api/formulas")
    def list_formulas() -> list[dict[str, Any]]:
        return [f.model_dump(mode="json") for f in _get_engine().repository.list_active()]

    @app.get("/api/formulas/{formula_id}")
    def get_formula(formula_id: int) -> dict[str, Any]:
        return _get_formula(formula_id).model_dump(mode="json")

    @app.get("/api/embed/{embed_id}")
    def get_embedded_formula(embed_id: str) -> dict[str, Any]:
        formula = _get_engine().repository.get_by_embed_id(embed_id)
        if formula is None or not formula.is_active:
            raise HTTPException(status_code=404, detail="Calculator not found")
        return formula.model_dump(mode="json")

    @app.post("/api/formulas/check")
    def check_formula(formula: Formula) -> FormulaCheck:
        return _get_engine().check_formula(formula)

    # ------------------------------------------------------------------
    # POST /api/formulas/{formula_id}/calculate
    # ------------------------------------------------------------------

    @app.post("/api/formulas/{formula_id}/calculate")
    def calculate(formula_id: int, request: CalculateRequest) -> dict[str, Any]:
        formula = _get_formula(formula_id)
        pricing = _get_engine().price_service(formula, request.answers)
        return {
            "formula_id": formula_id,
            "calculated_price": pricing.calculated_price,
            "price_available": pricing.price_available,
            "price_formatted": format_price(pricing.calculated_price),
            "error": pricing.error,
        }

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    @app.post("/api/quotes", status_code=201)
    def create_quote(request: QuoteRequest) -> dict[str, Any]:
        eng = _get_engine()
        try:
            record = eng.quote(
                request.customer,
                request.services,
                request.pricing,
                source=request.source,
            )
        except FormulaNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except QuoteAssemblyError as exc:
            logger.warning("Rejected quote for %s: %s", request.customer.email, exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        app.state.quote_sink.submit(record)
        return {
            "quote": record.model_dump(mode="json"),
            "summary_dict": record.to_summary_dict(),
            "export_dict": record.to_export_dict(),
        }

    @app.get("/api/quotes")
    def list_quotes() -> list[dict[str, Any]]:
        sink = app.state.quote_sink
        if not hasattr(sink, "list_records"):
            return []
        return [r.model_dump(mode="json") for r in sink.list_records()]

    return app
