import logging
import sys
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.api.v1 import goals, points, programs, rewards, users, workouts

# App loggers (points, rewards, scheduler) print to stdout
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logging.getLogger("app").setLevel(logging.DEBUG)
from app.config import settings
from app.core.errors import InsufficientPointsError, NotFoundError, ValidationError
from app.db.session import init_db
from prometheus_client import make_asgi_app

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def scheduled_weekly_settlement():
    """Settle last week's points for every user (idempotent; catches sessions edited after the live award)."""
    from datetime import date
    from app.core.weeks import previous_week_start
    from app.services.settlement import settle_all_users

    await settle_all_users(previous_week_start(date.today()))


async def seed_rewards():
    from app.db.session import async_session_maker
    from app.repositories import SqlRepositories
    from app.services.rewards import initialize_predefined_rewards

    async with async_session_maker() as session:
        await initialize_predefined_rewards(SqlRepositories(session))
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_points_config()
    await init_db()
    if settings.seed_predefined_rewards:
        await seed_rewards()

    scheduler.add_job(
        scheduled_weekly_settlement,
        "cron",
        day_of_week=settings.settlement_cron_day_of_week,
        hour=settings.settlement_cron_hour,
        minute=0,
    )
    scheduler.start()
    yield
    scheduler.shutdown()


limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])

app = FastAPI(
    title="Fitness Rewards API",
    description="Workout logging with weekly points, goals and tiered rewards",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InsufficientPointsError)
async def insufficient_points_handler(request: Request, exc: InsufficientPointsError):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "required": exc.required, "available": exc.available},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()] if settings.cors_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(users.router, prefix="/api/v1")
app.include_router(workouts.router, prefix="/api/v1")
app.include_router(programs.router, prefix="/api/v1")
app.include_router(rewards.router, prefix="/api/v1")
app.include_router(goals.router, prefix="/api/v1")
app.include_router(points.router, prefix="/api/v1")

metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    return {"status": "ok"}
