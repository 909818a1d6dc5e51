import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.interview import interview_router
from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import (
    AppError,
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.logger import setup_logger

setup_logger(log_level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO, clear_log=True)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: AI Mock Interview")
    init_db()
    yield
    logger.info("Application shutdown")

app = FastAPI(
    title="AI Mock Interview",
    description="Generates mock interview questions with an LLM and stores them per user.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(AppError, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for simplicity in development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(interview_router, prefix="/api/v1", tags=["interview"])


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok"}
