import pytest

from aceinterview.services.utils.formatting import feedback_icon, format_time, score_tone


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00"),
    (9, "00:09"),
    (65, "01:05"),
    (3600, "60:00"),
    (-5, "00:00"),
])
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


@pytest.mark.parametrize("score, expected", [
    (None, "unscored"),
    (0, "poor"),
    (1, "poor"),
    (2, "weak"),
    (3, "fair"),
    (4, "good"),
    (5, "excellent"),
    (6, "excellent"),
])
def test_score_tone(score, expected):
    assert score_tone(score) == expected


def test_overall_icon_follows_score():
    assert feedback_icon("overall", 1) == "thumbs_down"
    assert feedback_icon("overall", 2) == "thumbs_down"
    assert feedback_icon("overall", 3) == "thumbs_up"
    assert feedback_icon("overall") == "thumbs_up"


def test_category_icons_are_fixed():
    assert feedback_icon("clarity", 1) == "brain"
    assert feedback_icon("completeness", 5) == "info"
    assert feedback_icon("relevance") == "target"
