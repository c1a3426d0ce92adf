"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eatmefirst.api import lookup, products, recipes
from eatmefirst.config import get_settings
from eatmefirst.database import init_db
from eatmefirst.exceptions import (
    InvalidTransitionError,
    InventoryError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

ERROR_STATUS_CODES = {
    ValidationError: 422,  # constant name differs across Starlette releases
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield


app = FastAPI(
    title="EatMeFirst API",
    description="Food inventory tracker with expiry reminders and recipe suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:8081", "http://localhost:19006"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Map core errors to HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": exc.code})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests with the same body as core validation errors."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"][1:]) or None
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[ValidationError],
        content={"detail": f"{field}: {error['msg']}", "code": ValidationError.code},
    )


# Register routers
app.include_router(products.router)
app.include_router(lookup.router)
app.include_router(recipes.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
