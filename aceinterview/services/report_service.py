import logging

from aceinterview.services.builders.prompt_builder import render_prompt
from aceinterview.services.session_service import InterviewSession
from aceinterview.services.utils.formatting import feedback_icon, format_time, score_tone

logger = logging.getLogger(__name__)

CATEGORIES = (
    ("overall", "overall_feedback", "Overall Feedback"),
    ("clarity", "clarity", "Clarity"),
    ("completeness", "completeness", "Completeness"),
    ("relevance", "relevance", "Relevance"),
)


def _categories(feedback) -> list[dict]:
    items = []
    for key, attr, label in CATEGORIES:
        item = getattr(feedback, attr)
        tone = score_tone(item.score)
        items.append({
            "label": label,
            "text": item.text,
            "score": item.score,
            "tone": tone,
            "icon": feedback_icon(key, item.score),
        })
    return items


def render_report(session: InterviewSession) -> str:
    """Markdown practice report for every answered round"""
    state = session.state()
    rounds = [
        {
            "round": r,
            "elapsed": format_time(r.elapsed_seconds),
            "categories": _categories(r.feedback),
        }
        for r in state.rounds
    ]
    logger.info(f"📄 [REPORT] Rendering report for {state.session_id} ({len(rounds)} rounds)")
    return render_prompt("report.md.j2", session=state, rounds=rounds, overall=state.overall_feedback)
