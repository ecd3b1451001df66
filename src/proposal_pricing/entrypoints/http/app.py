from fastapi import FastAPI

from proposal_pricing.entrypoints.http.exception_handlers import register_exception_handlers
from proposal_pricing.entrypoints.http.routes.financing import router as financing_router
from proposal_pricing.entrypoints.http.routes.health import router as health_router
from proposal_pricing.entrypoints.http.routes.offers import router as offers_router
from proposal_pricing.entrypoints.http.routes.pricing import router as pricing_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Proposal Pricing API",
        description="""
        Live pricing for home-improvement proposals.

        ## Features
        - Recompute totals and monthly payments for addon, offer and upsell selections
        - Quote monthly payments under a financing plan
        - List the offers available to a proposal

        ## Monetary Values
        All money is exchanged as decimal strings and rounded to cents.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(pricing_router, prefix="/v1")
    app.include_router(financing_router, prefix="/v1")
    app.include_router(offers_router, prefix="/v1")

    return app


app = build_app()
