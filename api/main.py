"""
FastAPI Backend for the FuelEU Ledger.

Provides REST API endpoints for:
- Compliance balance computation per ship and year
- Banking of surplus CB and application of banked surplus
- Pooling of CB across ships
- Route listing, baseline selection and baseline comparison

Version: 1.0.0
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import settings
from api.health import API_VERSION
from api.middleware import setup_middleware
from api.routers import banking, compliance, pools, routes, system
from src.compliance.errors import ComplianceError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Application factory for the FuelEU Ledger API.

    Creates and configures the FastAPI application with middleware, routers
    and error handlers.

    Returns:
        FastAPI: Configured application instance
    """
    application = FastAPI(
        title="FuelEU Ledger API",
        description="""
## FuelEU Maritime Compliance API

Tracks per-ship greenhouse-gas compliance balances under FuelEU Maritime
(EU 2023/1805).

### Features
- Compliance balance (CB) from GHG intensity and fuel consumption
- Banking of surplus CB and application of banked surplus (Art. 20)
- Pooling of CB across ships with fairness rules (Art. 21)
- Route comparison against a baseline route
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    setup_middleware(application, debug=settings.debug)

    # CORS middleware - use configured origins only
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @application.exception_handler(ComplianceError)
    async def compliance_error_handler(request: Request, exc: ComplianceError):
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__, request.method, request.url.path, exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})

    application.include_router(system.router)
    application.include_router(compliance.router)
    application.include_router(banking.router)
    application.include_router(pools.router)
    application.include_router(routes.router)

    return application


# Create the application
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
    )
