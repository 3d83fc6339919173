import uuid
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from campushub.api.v1.routes import (
    auth as auth_router,
    users as users_router,
    profiles as profiles_router,
    events as events_router,
    registrations as registrations_router,
    attendance as attendance_router,
    payments as payments_router,
    notifications as notifications_router,
    settings as settings_router,
    health as health_router,
)
from campushub.core.config import settings
from campushub.core.logging import logger
from campushub.db.session import Database


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    await database.connect()
    # create tables (simple approach; production schemas are managed separately)
    await database.create_all()
    logger.info(f"CampusHub started ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        await database.disconnect()


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(title="CampusHub", lifespan=lifespan)
    app.state.database = database or Database()

    app.state.limiter = auth_router.limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(auth_router.router)
    api_router.include_router(users_router.router)
    api_router.include_router(profiles_router.router)
    api_router.include_router(events_router.router)
    api_router.include_router(registrations_router.router)
    api_router.include_router(attendance_router.router)
    api_router.include_router(payments_router.router)
    api_router.include_router(notifications_router.router)
    api_router.include_router(settings_router.router)
    api_router.include_router(health_router.router)

    app.include_router(api_router)
    return app


app = create_app()
