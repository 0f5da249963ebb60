"""calckit API - calculator definitions and evaluation service.

This API serves declarative calculator definitions to renderers:
- Calculator definitions (inputs, outputs, SEO metadata, help content)
- Evaluation of a calculator's outputs for submitted values
- Registered formula metadata
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calckit import __version__
from calckit.api.routes import calculators, formulas, meta
from calckit.calculators.registry import get_calculator_registry
from calckit.formulas.registry import get_formula_registry

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Pre-load registries
    logger.info("Loading formulas...")
    formula_registry = get_formula_registry()
    logger.info(f"Loaded {formula_registry.count()} formulas")

    logger.info("Loading calculator definitions...")
    calculator_registry = get_calculator_registry()
    logger.info(f"Loaded {calculator_registry.count()} calculators")

    logger.info("calckit API ready")
    yield
    # Shutdown
    logger.info("Shutting down calckit API")


# Create FastAPI app
app = FastAPI(
    title="calckit API",
    description="""
## Calculator Definitions Service

Serves static calculator definitions and evaluates their outputs.
The service is stateless: every evaluation starts from the submitted values.

### Key Endpoints

- `GET /v1/calculators` - List all calculators
- `GET /v1/calculators/{id}` - Get full calculator definition
- `GET /v1/calculators/{id}/content` - Get help content
- `POST /v1/calculators/{id}/evaluate` - Evaluate outputs
- `GET /v1/formulas` - List registered formulas
""",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /v1 prefix
app.include_router(calculators.router, prefix="/v1")
app.include_router(formulas.router, prefix="/v1")
app.include_router(meta.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "calckit API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "calculators": "/v1/calculators",
            "formulas": "/v1/formulas",
            "meta": "/v1/meta/definitions-version",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    calculator_registry = get_calculator_registry()
    formula_registry = get_formula_registry()
    return {
        "status": "healthy",
        "calculators_loaded": calculator_registry.count(),
        "formulas_loaded": formula_registry.count(),
        "categories": calculator_registry.list_categories(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
