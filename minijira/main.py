# minijira/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from minijira.auth.routes import router as auth_router
from minijira.core.config import get_settings
from minijira.core.database import SessionLocal, engine, get_db, ping
from minijira.core.errors import AppError, register_exception_handlers
from minijira.core.logs import configure_logging
from minijira.models import init_db
from minijira.project.routes import router as project_router
from minijira.seed import seed_defaults_if_empty
from minijira.ticket.routes import router as ticket_router
from minijira.user.routes import router as user_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db(engine)
    if settings.SEED_DEFAULTS:
        with SessionLocal() as db:
            seed_defaults_if_empty(db)
    logger.info("%s ready, API under %s", settings.APP_NAME, settings.API_PREFIX)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(user_router, prefix=settings.API_PREFIX)
app.include_router(project_router, prefix=settings.API_PREFIX)
app.include_router(ticket_router, prefix=settings.API_PREFIX)

@app.get("/health", tags=["Health"])
def health(db: Session = Depends(get_db)):
    if not ping(db):
        raise AppError("Database ping failed")
    return {"status": "ok"}
