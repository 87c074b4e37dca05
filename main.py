from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# quiet HTTP library debug logs
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("fontTools").setLevel(logging.WARNING)

# ✅ DB / models (imported so create_all sees every table)
from database.db import Base, engine
from models import students, semesters, subjects  # noqa: F401

# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.session import SessionRefreshMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import auth, conversion, dgpa, meta, pdf_reports, transcripts

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ sliding session expiry
app.add_middleware(SessionRefreshMiddleware)

# ✅ request latency header (X-Latency-Ms)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (consistent JSON error format)
add_error_handlers(app)

# ✅ /v1 routers
app.include_router(auth.router,        prefix="/v1")
app.include_router(conversion.router,  prefix="/v1")
app.include_router(transcripts.router, prefix="/v1")
app.include_router(dgpa.router,        prefix="/v1")
app.include_router(pdf_reports.router, prefix="/v1")
app.include_router(meta.router,        prefix="/v1")


@app.on_event("startup")
def _create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready (%s)", engine.url.render_as_string(hide_password=True))


# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} {settings.APP_VERSION}"}
