"""FastAPI application main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from xerosync import __version__
from xerosync.api.deps import get_engine
from xerosync.api.routes import health, orders
from xerosync.infrastructure.database import close_database, init_database
from xerosync.infrastructure.logging import configure_logging

logger = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_engine()
    await init_database(engine)
    yield
    await close_database(engine)


app = FastAPI(
    title="Xero Sync API",
    description="Sends commerce orders to Xero as invoices and payments",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(orders.router, prefix="/api/v1")


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle ValueError exceptions.

    Args:
        request: FastAPI request
        exc: ValueError exception

    Returns:
        JSONResponse with 400 status
    """
    logger.warning(f"Bad request on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )
