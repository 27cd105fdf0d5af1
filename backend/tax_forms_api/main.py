"""
FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tax_forms_api.core.config import settings
from tax_forms_api.core.logging import configure_logging
from tax_forms_api.api import router as api_router
from tax_forms_api.api.schemas.tax_forms import TaxFormStatusErrorResponse
from tax_forms_api.db.database import dispose_engine
from tax_forms_api.services.status_policy import TaxFormStatusError

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info(f"Starting {settings.APP_NAME} (env={settings.ENV})")

    # NOTE: Database schema is managed by Alembic migrations.
    # Run `alembic upgrade head` before starting the app.

    yield

    await dispose_engine()
    logger.info("Shut down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Tax assessment forms and their approval workflow",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaxFormStatusError)
async def tax_form_status_error_handler(request: Request, exc: TaxFormStatusError):
    """Illegal workflow transitions are conflicts with the form's current state"""
    body = TaxFormStatusErrorResponse(
        detail=exc.message,
        current_status=exc.current_status,
        target_status=exc.target_status,
    )
    return JSONResponse(status_code=409, content=jsonable_encoder(body))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are answered with 400 rather than FastAPI's default 422"""
    # The rejected input is left out: NaN/Infinity are not representable in a JSON response
    errors = [{k: v for k, v in error.items() if k != "input"} for error in exc.errors()]
    return JSONResponse(status_code=400, content=jsonable_encoder({"detail": errors}))


# API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "app": settings.APP_NAME}
