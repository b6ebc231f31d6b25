# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.api import api_router, pages_router
from app.core.config import settings
from app.core.errors import (
    AppError,
    app_error_handler,
    database_error_handler,
    validation_error_handler,
)
from app.core.limiter import limiter
from app.core.route_gate import route_gate_middleware

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Masterclass service starting up (env={settings.ENV})")
    yield
    logger.info("Masterclass service shutting down")


app = FastAPI(
    title="Masterclass Registration Service",
    version="1.0.0",
    description="""
        Browse masterclasses, register for them and track payment status.

        ## Authentication

        Most endpoints require a JWT issued by the auth service via the
        `Authorization: Bearer <token>` header. Internal endpoints take an
        `X-Internal-Api-Key` header instead.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(route_gate_middleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(api_router, prefix="/api")
app.include_router(pages_router)


@app.get("/")
def read_root():
    return {"status": "Masterclass service is running"}
