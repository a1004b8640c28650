from __future__ import annotations

from typing import Any, Dict, List

from drawing_coach.data_models import FeedbackHints, FeedbackResponse
from drawing_coach.data_models.exercise import Unit

_UNIT_TIPS: Dict[str, List[str]] = {
    "line": [
        "Start at the green dot",
        "Move slowly and steadily",
        "Try to stay on the dotted line",
    ],
    "dot": [
        "Find dot number 1 first",
        "Connect the dots in order",
        "Draw a line from one dot to the next",
    ],
    "shape": [
        "Look at the guide shape",
        "Start at one corner",
        "Connect all the sides to close the shape",
    ],
    "color": [
        "Pick the right color first",
        "Stay inside the lines",
        "Fill in the whole area",
    ],
}


def fallback_feedback(score: int, hints: FeedbackHints) -> FeedbackResponse:
    """Rule-based feedback by score band, used when no feedback generator is available."""
    if score >= 90:
        return FeedbackResponse(
            encouragement="Amazing work! You did a fantastic job!",
            specific_praise=[
                f"Your {hints.skill_name} look great!",
                "You followed the guide perfectly!",
            ],
            next_step_hint="You're ready for the next challenge!",
        )
    if score >= 70:
        return FeedbackResponse(
            encouragement="Great job! You passed this exercise!",
            specific_praise=[f"Nice work on your {hints.skill_name}!"],
            improvement_tips=["Keep practicing to get even better!"],
            next_step_hint="Ready to try the next one?",
        )
    if score >= 50:
        tip = (
            f"Try to avoid: {hints.common_mistakes[0]}"
            if hints.common_mistakes
            else "Take your time and try again!"
        )
        return FeedbackResponse(
            encouragement="Good effort! You're getting better!",
            specific_praise=["You're making progress!"],
            improvement_tips=[tip],
        )
    return FeedbackResponse(
        encouragement="Keep trying! Practice makes perfect!",
        specific_praise=["Every try helps you learn!"],
        improvement_tips=["Go slowly and follow the guide carefully."],
    )


def fallback_help_tips(unit: Unit, hints: FeedbackHints) -> Dict[str, Any]:
    """Generic tips for a unit plus the exercise's success criteria as a demonstration cue."""
    return {
        "tips": _UNIT_TIPS.get(unit, ["Take your time", "Follow the guide", "You can do it!"]),
        "encouragement": "You've got this! Let's try together!",
        "demonstration": hints.success_criteria,
    }
