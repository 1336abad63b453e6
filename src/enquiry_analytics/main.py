import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .core import config
from .core import logging_config  # noqa: F401  (configures the "enquiry_analytics" logger)
from .core.errors import ReportQueryError
from .features.enquiries.store import EnquiryStore
from .features.reports.router import router as reports_router
from .features.transcripts.router import router as transcripts_router

logger = logging.getLogger("enquiry_analytics.main")  # This logger will inherit from 'enquiry_analytics'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the enquiry store on startup and closes it on shutdown.
    """
    logger.info("Starting application...")
    app.state.store = EnquiryStore.connect(config.MONGO_URI, config.MONGO_DB_NAME)

    yield

    await app.state.store.close()
    logger.info("Enquiry store has been closed.")


app = FastAPI(
    title="Enquiry Analytics API",
    description="Read-only reports over sales enquiries for the dashboard.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(ReportQueryError)
async def report_query_error_handler(request: Request, exc: ReportQueryError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return PlainTextResponse(exc.message, status_code=500)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


@app.get("/")
async def read_root(request: Request):
    """
    Health endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"status": "ok"}


app.include_router(transcripts_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
