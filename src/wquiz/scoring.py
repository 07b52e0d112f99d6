from typing import Sequence

from .models import ScoreReport, SessionQuestion

HIGH_TIER_PERCENTAGE = 80
MID_TIER_PERCENTAGE = 60


def tier(percentage: float) -> str:
    """Feedback bucket for a percentage score."""
    if percentage >= HIGH_TIER_PERCENTAGE:
        return "high"
    if percentage >= MID_TIER_PERCENTAGE:
        return "mid"
    return "low"


def score_questions(questions: Sequence[SessionQuestion]) -> ScoreReport:
    total = len(questions)
    score = sum(1 for q in questions if q.is_correct)
    percentage = round(100 * score / total, 1) if total else 0.0
    return ScoreReport(score=score, total=total, percentage=percentage, tier=tier(percentage))
