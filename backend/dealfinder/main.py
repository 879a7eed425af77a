"""
FastAPI app entrypoint.

Deal finder: read API under /api/deals, plus scheduled fetch and scoring passes.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from dealfinder.api.routes import deals
from dealfinder.config import settings
from dealfinder.core.constants import COMPUTE_SCORES_JOB_ID, FETCH_PRICES_JOB_ID
from dealfinder.core.errors import DealFinderError, error_to_http
from dealfinder.scheduler.price_jobs import run_fetch_job, run_score_job
from dealfinder.services.cache import read_cache

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.scheduler_enabled:
        _scheduler.add_job(
            run_fetch_job,
            "interval",
            minutes=settings.fetch_interval_minutes,
            id=FETCH_PRICES_JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        _scheduler.add_job(
            run_score_job,
            "interval",
            minutes=settings.score_interval_minutes,
            id=COMPUTE_SCORES_JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        _scheduler.start()
        app.state.scheduler = _scheduler
        logger.info(
            "Scheduler started: fetch every %s min, scoring every %s min",
            settings.fetch_interval_minutes, settings.score_interval_minutes,
        )
    else:
        logger.info("Scheduler disabled (SCHEDULER_ENABLED=false)")
    yield
    if _scheduler.running:
        _scheduler.shutdown(wait=False)


app = FastAPI(title="Ticket Deal Finder", version="0.1.0", lifespan=lifespan)
app.state.read_cache = read_cache

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DealFinderError)
async def deal_finder_error_handler(request: Request, exc: DealFinderError) -> JSONResponse:
    http_exc = error_to_http(exc)
    if http_exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


app.include_router(deals.router, prefix="/api/deals", tags=["deals"])


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Ticket Deal Finder API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
