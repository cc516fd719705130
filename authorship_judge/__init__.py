"""
Authorship Judge for deciding whether an interview transcript fits the submitted code.
"""
from .agent import judge_transcript, parse_judgment_response, build_judge_prompt
from .scoring import clamp_score, derive_ai_likelihood, derive_teacher_likelihood

__all__ = [
    "judge_transcript",
    "parse_judgment_response",
    "build_judge_prompt",
    "clamp_score",
    "derive_ai_likelihood",
    "derive_teacher_likelihood",
]
