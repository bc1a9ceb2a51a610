from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager
from starlette.concurrency import run_in_threadpool

from aceinterview.api import ai, session
from aceinterview.core.config import settings
from aceinterview.core.exceptions import InterviewError, interview_error_handler

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("🚀 Starting AceInterview...")
    await validate_api_connections()
    logger.info("✅ Application ready!")

    yield

    logger.info("🛑 Shutting down AceInterview...")
    from aceinterview.core.dependencies import get_session_store
    get_session_store().force_cleanup_all()


async def validate_api_connections():
    """Test actual API connectivity"""
    if not settings.VALIDATE_GEMINI_ON_STARTUP:
        logger.info("⏭️ Gemini startup check disabled")
        return

    logger.info("🔍 Validating API connections...")
    from aceinterview.services.clients.gemini_client import check_gemini_connection
    if await run_in_threadpool(check_gemini_connection):
        logger.info("✅ Gemini API connection validated")
    else:
        logger.warning("⚠️ Question and feedback generation may not work")

    if not settings.SPEECH_RECOGNITION_ENABLED:
        logger.warning("⚠️ Speech recognition disabled - answers can only be typed")


app = FastAPI(title="AceInterview", description="AI-powered mock interview coach.", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(InterviewError, interview_error_handler)

app.include_router(ai.router, prefix="/ai", tags=["AI Flows"])
app.include_router(session.router, prefix="/session", tags=["Interview Sessions"])


@app.get("/")
async def root():
    return {"message": "AceInterview API"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "aceinterview"}
