import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core import config
from app.core.errors import request_validation_handler, unhandled_exception_handler
from app.core.logging_config import sanitize_log_data, setup_logging

# ✅ Import All API Routes
from app.api.routes import auth, candidates, application, feedback, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema is in place."""
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)

    if config.RUN_MIGRATIONS:
        from app.db.migrate import run_migrations
        run_migrations()
    else:
        from app.db.init_db import init_db
        init_db()

    settings = sanitize_log_data({
        "environment": config.ENVIRONMENT,
        "database_url": config.DATABASE_URL,
        "smtp_host": config.SMTP_HOST,
        "smtp_pass": config.SMTP_PASS,
        "google_client_id": config.GOOGLE_CLIENT_ID,
    })
    logger.info(f"WorkCompass API started: {settings}")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="WorkCompass API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(candidates.router)
app.include_router(application.router)
app.include_router(feedback.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {"status": "WorkCompass API is running"}
