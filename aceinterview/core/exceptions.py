"""
Exceptions surfaced to the client as toast-style notifications.

Every error carries a short ``title`` and a human readable ``description``;
the handler below renders them as ``{"title": ..., "description": ...}``.
"""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InterviewError(Exception):
    """Base exception for all user-facing interview errors."""
    status_code = 400
    title = "Error"

    def __init__(self, description: str, title: str | None = None, status_code: int | None = None):
        self.description = description
        if title is not None:
            self.title = title
        if status_code is not None:
            self.status_code = status_code
        super().__init__(description)

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description}


class SessionNotFoundError(InterviewError):
    status_code = 404
    title = "Session Not Found"


class InvalidStepError(InterviewError):
    status_code = 409
    title = "Invalid Step"


class OperationInProgressError(InterviewError):
    status_code = 409
    title = "Please Wait"


class UnsupportedFeatureError(InterviewError):
    status_code = 400
    title = "Unsupported Feature"


class SpeechRecognitionError(InterviewError):
    status_code = 400
    title = "Speech Recognition Error"


class GenerationError(InterviewError):
    status_code = 502
    title = "Error"


async def interview_error_handler(request: Request, exc: InterviewError):
    logger.warning(f"⚠️ [ERROR] {exc.title}: {exc.description}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
