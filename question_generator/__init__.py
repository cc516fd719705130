"""
Question Generator Agent - Writes code-understanding interview questions for a submission.
"""
from .agent import generate_code_questions, build_question_prompt, extract_json_array

__all__ = ["generate_code_questions", "build_question_prompt", "extract_json_array"]
