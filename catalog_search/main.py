"""
Catalog Search Microservice
Main FastAPI application
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import sys

from catalog_search.config import settings
from catalog_search.errors import InputError, SearchFailure
from catalog_search.models.responses import SearchFailureResponse
from catalog_search.router.search import router as search_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Catalog Search",
    description="Federated search over players, teams, sets, series and cards",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(search_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Catalog Search",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "catalog-search",
        "version": "1.0.0"
    }


@app.exception_handler(InputError)
async def input_error_handler(request: Request, exc: InputError):
    """Rejected before any store access"""
    logger.info(f"Rejected search input: {exc.message}")
    body = SearchFailureResponse(error=exc.code, message=exc.message, round_trip_count=0)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(SearchFailure)
async def search_failure_handler(request: Request, exc: SearchFailure):
    """Store still failing after retries"""
    logger.error(f"Search failure in {exc.phase} after {exc.elapsed_ms}ms: {exc.cause}")
    body = SearchFailureResponse(**exc.to_dict())
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error": str(exc) if settings.debug else "An error occurred"
        }
    )


@app.on_event("startup")
async def startup_event():
    """Startup event handler"""
    logger.info("Catalog Search starting up...")
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    logger.info(
        f"Category caps: person={settings.person_limit}, team={settings.organization_limit}, "
        f"set={settings.release_limit}, series={settings.series_limit}, card={settings.item_limit}"
    )


def run():
    """Console entry point for the HTTP server"""
    import uvicorn

    uvicorn.run(
        "catalog_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level
    )


if __name__ == "__main__":
    run()
