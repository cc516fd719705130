"""
Text heuristics used when the model response holds no parseable JSON object.
"""
import re

from .scoring import DEFAULT_SCORE

SCORE_PATTERN = re.compile(r"score[\"':\s]*(\d+)", re.IGNORECASE)
PERCENT_PATTERN = re.compile(r"(\d+)%")

HIGH_CONFIDENCE_MARKERS = ("high confidence", "very confident")
LOW_CONFIDENCE_MARKERS = ("low confidence", "uncertain")


def extract_score_from_text(text: str) -> int:
    """First `score: NN`, else first `NN%`, else the neutral default."""
    score_match = SCORE_PATTERN.search(text)
    if score_match:
        return int(score_match.group(1))

    percent_match = PERCENT_PATTERN.search(text)
    if percent_match:
        return int(percent_match.group(1))

    return DEFAULT_SCORE


def extract_confidence_from_text(text: str) -> str:
    lowered = text.lower()
    if any(marker in lowered for marker in HIGH_CONFIDENCE_MARKERS):
        return "high"
    if any(marker in lowered for marker in LOW_CONFIDENCE_MARKERS):
        return "low"
    return "medium"


def heuristic_judgment(text: str) -> dict:
    """
    Build a judgment dict from free text.

    The whole response becomes the reasoning; list fields stay empty.
    The score is returned unclamped, normalization happens afterwards.
    """
    return {
        "score": extract_score_from_text(text),
        "confidence": extract_confidence_from_text(text),
        "reasoning": text,
        "redFlags": [],
        "humanIndicators": [],
        "keyObservations": [],
    }
