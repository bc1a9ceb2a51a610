import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from aceinterview.core.config import settings
from aceinterview.core.dependencies import (
    get_answer_evaluator,
    get_overall_evaluator,
    get_question_generator,
    get_session_store,
)
from aceinterview.core.exceptions import InterviewError
from aceinterview.models.session import (
    AnswerUpdate,
    QuestionRequest,
    SessionCleanupResponse,
    SessionMessage,
    SessionState,
    SpeechErrorRequest,
    SpeechResultsRequest,
)
from aceinterview.services.answer_evaluator import AnswerEvaluator
from aceinterview.services.overall_evaluator import OverallEvaluator
from aceinterview.services.question_generator import QuestionGenerator
from aceinterview.services.report_service import render_report
from aceinterview.services.session_store import SessionStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SessionState, status_code=201)
def create_session(store: SessionStore = Depends(get_session_store)):
    """Start a new practice interview"""
    return store.create().state()


@router.get("/stats")
def session_stats(store: SessionStore = Depends(get_session_store)):
    return {
        **store.get_stats(),
        "session_config": {
            "max_interview_rounds": settings.MAX_INTERVIEW_ROUNDS,
            "speech_recognition_enabled": settings.SPEECH_RECOGNITION_ENABLED,
            "speech_lang": settings.SPEECH_LANG,
        },
    }


@router.post("/cleanup-expired", response_model=SessionCleanupResponse)
def cleanup_expired_sessions(store: SessionStore = Depends(get_session_store)):
    cleaned_count = store.cleanup_expired()
    return SessionCleanupResponse(success=True, message=f"Cleaned up {cleaned_count} expired sessions")


@router.get("/{session_id}", response_model=SessionState)
def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).state()


@router.delete("/{session_id}", response_model=SessionCleanupResponse)
def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    if store.delete(session_id):
        return SessionCleanupResponse(success=True, message=f"Session {session_id} cleaned up successfully")
    return SessionCleanupResponse(success=False, message=f"Session {session_id} not found")


@router.post("/{session_id}/question", response_model=SessionState)
def generate_question(
    session_id: str,
    data: QuestionRequest,
    store: SessionStore = Depends(get_session_store),
    generator: QuestionGenerator = Depends(get_question_generator),
):
    """Generate (or regenerate) the question; the first call carries the role/industry form"""
    return store.get(session_id).generate_question(generator, form=data.form)


@router.post("/{session_id}/next-question", response_model=SessionState)
def next_question(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    generator: QuestionGenerator = Depends(get_question_generator),
):
    return store.get(session_id).next_question(generator)


@router.put("/{session_id}/answer", response_model=SessionState)
def update_answer(session_id: str, data: AnswerUpdate, store: SessionStore = Depends(get_session_store)):
    """Typed edit of the answer box"""
    return store.get(session_id).type_answer(data.answer)


@router.post("/{session_id}/recording/start", response_model=SessionState)
def start_recording(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).start_recording()


@router.post("/{session_id}/recording/results", response_model=SessionState)
def recording_results(session_id: str, data: SpeechResultsRequest, store: SessionStore = Depends(get_session_store)):
    """Full result list of the current recognition session"""
    return store.get(session_id).speech_results(data.results)


@router.post("/{session_id}/recording/stop", response_model=SessionState)
def stop_recording(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).stop_recording()


@router.post("/{session_id}/recording/end", response_model=SessionState)
def recording_ended(session_id: str, store: SessionStore = Depends(get_session_store)):
    """The recognizer ended on its own (silence, browser timeout)"""
    return store.get(session_id).stop_recording()


@router.post("/{session_id}/recording/error")
def recording_error(session_id: str, data: SpeechErrorRequest, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    toast = session.recording_error(data.error)
    return {"toast": toast.to_dict(), "state": session.state()}


@router.post("/{session_id}/feedback", response_model=SessionState)
def get_feedback(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    evaluator: AnswerEvaluator = Depends(get_answer_evaluator),
):
    return store.get(session_id).submit_answer(evaluator)


@router.post("/{session_id}/finish", response_model=SessionState)
def finish_interview(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    evaluator: OverallEvaluator = Depends(get_overall_evaluator),
):
    return store.get(session_id).finish(evaluator)


@router.post("/{session_id}/start-over", response_model=SessionState)
def start_over(session_id: str, store: SessionStore = Depends(get_session_store)):
    return store.get(session_id).start_over()


@router.get("/{session_id}/report", response_class=PlainTextResponse)
def session_report(session_id: str, store: SessionStore = Depends(get_session_store)):
    return PlainTextResponse(render_report(store.get(session_id)), media_type="text/markdown")


@router.websocket("/ws/{session_id}")
async def speech_websocket(websocket: WebSocket, session_id: str, store: SessionStore = Depends(get_session_store)):
    """
    Relay of the browser's speech recognizer events.
    Every event is answered with the reconciled answer text, or a toast on error.
    """
    await websocket.accept()
    try:
        session = store.get(session_id)
    except InterviewError as e:
        await websocket.send_json(SessionMessage(type="toast", **e.to_dict()).model_dump(exclude_none=True))
        await websocket.close(code=4404)
        return

    logger.info(f"🔗 [WEBSOCKET] Speech relay connected for session {session_id}")
    try:
        while True:
            frame = await websocket.receive_text()
            try:
                message = SessionMessage.model_validate_json(frame)
            except ValidationError:
                await websocket.send_json({"type": "toast", "title": "Error", "description": "Malformed message."})
                continue

            try:
                if message.type == "start":
                    session.start_recording()
                elif message.type == "result":
                    session.speech_results(message.results or [])
                elif message.type in ("stop", "end"):
                    session.stop_recording()
                elif message.type == "error":
                    toast = session.recording_error(message.error or "unknown")
                    await websocket.send_json(
                        SessionMessage(type="toast", **toast.to_dict()).model_dump(exclude_none=True)
                    )
                else:
                    await websocket.send_json({
                        "type": "toast", "title": "Error", "description": f"Unknown message type: {message.type}",
                    })
                    continue
            except InterviewError as e:
                await websocket.send_json(SessionMessage(type="toast", **e.to_dict()).model_dump(exclude_none=True))
                continue

            await websocket.send_json(
                SessionMessage(
                    type="answer",
                    text=session.answer,
                    is_recording=session.recorder.is_recording,
                ).model_dump(exclude_none=True)
            )
    except WebSocketDisconnect:
        logger.info(f"🔌 [WEBSOCKET] Client for session {session_id} disconnected")
        if session.recorder.is_recording:
            session.stop_recording()
