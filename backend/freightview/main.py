import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freightview.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "freightview.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("apscheduler").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from freightview.routers import analysis, forwarders, quotes, requests, user_forwarders
from freightview.services.quote_analysis import QuoteAnalysisValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup — launch background scheduler
    scheduler = None
    if settings.scheduler_enabled:
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger

            scheduler = AsyncIOScheduler()

            async def _expire_quotes():
                from freightview.database import async_session_factory
                from freightview.services.quote_expiry_service import quote_expiry_service
                async with async_session_factory() as db:
                    await quote_expiry_service.expire_stale_quotes(db)

            scheduler.add_job(
                _expire_quotes,
                CronTrigger(hour=settings.quote_expiry_hour, minute=0),
                id="expire_quotes",
            )
            scheduler.start()
            logger.info("Background scheduler started")
        except Exception as e:
            logger.error(f"Scheduler failed to start: {e}")

    # Auto-seed forwarders if DB is empty (dev convenience)
    if settings.seed_on_startup:
        try:
            from freightview.seed import seed
            await seed()
        except Exception as e:
            logger.warning(f"Auto-seed skipped: {e}")

    yield

    # Shutdown
    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")


app = FastAPI(
    title="FreightView",
    description="Air vs sea freight quote comparison",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(QuoteAnalysisValidationError)
async def quote_analysis_validation_handler(request: Request, exc: QuoteAnalysisValidationError):
    logger.warning(f"Quote analysis rejected input on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


app.include_router(requests.router, prefix="/api/requests", tags=["requests"])
app.include_router(quotes.router, prefix="/api/requests", tags=["quotes"])
app.include_router(analysis.router, prefix="/api/requests", tags=["analysis"])
app.include_router(forwarders.router, prefix="/api/forwarders", tags=["forwarders"])
app.include_router(user_forwarders.router, prefix="/api/user/forwarders", tags=["forwarders"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "freightview"}
