from typing import Optional

SCORE_TONES = {
    1: "poor",
    2: "weak",
    3: "fair",
    4: "good",
    5: "excellent",
}

CATEGORY_ICONS = {
    "clarity": "brain",
    "completeness": "info",
    "relevance": "target",
}


def format_time(total_seconds: int) -> str:
    """Seconds as MM:SS; minutes are not wrapped into hours."""
    total_seconds = max(0, int(total_seconds))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def score_tone(score: Optional[int]) -> str:
    """Rating label for a 1-5 score"""
    if score is None:
        return "unscored"
    if score <= 1:
        return SCORE_TONES[1]
    if score >= 5:
        return SCORE_TONES[5]
    return SCORE_TONES[score]


def feedback_icon(category: str, score: Optional[int] = None) -> str:
    if category == "overall":
        return "thumbs_down" if score is not None and score <= 2 else "thumbs_up"
    return CATEGORY_ICONS[category]
