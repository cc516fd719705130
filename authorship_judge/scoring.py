"""
Score clamping and likelihood labels for authorship judgments.

Scores run from 0 (AI-generated) to 100 (human-written). Labels are always
derived from (score, confidence, indecisive) and never stored on their own.
"""
import math
from typing import Any, Optional

from codefessor.config import (
    LIKELY_HUMAN_THRESHOLD,
    POSSIBLY_HUMAN_THRESHOLD,
    POSSIBLY_AI_THRESHOLD,
    TEACHER_HUMAN_THRESHOLD,
)

DEFAULT_SCORE = 50

LIKELY_HUMAN = "likely human-written"
POSSIBLY_HUMAN = "possibly human-written"
POSSIBLY_AI = "possibly AI-generated"
LIKELY_AI = "likely AI-generated"
INDECISIVE = "indecisive"


def clamp_score(value: Any, default: int = DEFAULT_SCORE) -> int:
    """
    Coerce a model-provided score into an int within [0, 100].

    Missing, boolean and non-numeric values fall back to `default`.
    Numeric strings ("85") are accepted.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if not isinstance(value, (int, float)) or math.isnan(value):
        return default
    # Clamp before int() so "Infinity" and "1e999" cannot overflow
    return int(round(max(0, min(100, value))))


def is_indecisive(confidence: Optional[str], indecisive: bool) -> bool:
    return bool(indecisive) or confidence == INDECISIVE


def derive_ai_likelihood(score: int, confidence: Optional[str], indecisive: bool) -> str:
    """Four-tier label used by the technical view."""
    if is_indecisive(confidence, indecisive):
        return INDECISIVE
    if score >= LIKELY_HUMAN_THRESHOLD:
        return LIKELY_HUMAN
    if score >= POSSIBLY_HUMAN_THRESHOLD:
        return POSSIBLY_HUMAN
    if score >= POSSIBLY_AI_THRESHOLD:
        return POSSIBLY_AI
    return LIKELY_AI


def derive_teacher_likelihood(score: int, confidence: Optional[str], indecisive: bool) -> str:
    """Coarse label for the teacher dashboard (human / AI / indecisive)."""
    if is_indecisive(confidence, indecisive):
        return INDECISIVE
    if score >= TEACHER_HUMAN_THRESHOLD:
        return LIKELY_HUMAN
    return LIKELY_AI
