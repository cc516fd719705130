"""Question Generator Agent - Generates interview questions tailored to submitted code."""
import json
import logging
from typing import Optional

from codefessor.config import QUESTION_COUNT
from codefessor.exceptions import GenerationFailedError

logger = logging.getLogger(__name__)


def build_question_prompt(code: str, language: str, count: int = QUESTION_COUNT) -> str:
    return f"""You are an expert code reviewer helping assess code understanding. Analyze the following {language} code and generate {count} specific, targeted questions that will help determine if the person truly understands their own code.

## CODE TO ANALYZE
```{language}
{code}
```

## REQUIREMENTS
1. The first question must always ask what the code as a whole does and what its main purpose is (not what one specific part or function does). It may be paraphrased.
2. The second question must always ask how they achieved that overall goal through the code and why they chose this specific implementation. It may be paraphrased.
3. Questions must be SPECIFIC to this exact code, not generic
4. Focus on deep understanding of design decisions, logic, and implementation details
5. Questions should reveal if someone actually wrote the code vs. just copied it
6. Include questions about specific functions, variables, or logic patterns in THIS code
7. Ask about potential issues, edge cases, or improvements specific to THIS implementation
8. Keep questions strictly about the code - no personal or unrelated topics
9. Frame questions as a friendly code review discussion, not a job interview

## QUESTION TYPES TO INCLUDE
- Specific variable names, function names, or logic choices in their code
- Specific implementation decisions they made
- Potential bugs or edge cases in their specific code
- How specific parts of their code work together
- Alternatives to their specific approach
- Specific error handling or lack thereof in their code

## OUTPUT FORMAT
Return exactly {count} questions as a JSON array of strings. Each question should reference specific elements from the provided code.

Example format:
["Question 1 about specific code element", "Question 2 about specific implementation", ...]

Make the questions conversational and friendly. Focus on "Can you explain..." and "What happens if..." questions about their specific code."""


def extract_json_array(text: str) -> Optional[str]:
    """
    Return the substring from the first '[' up to its matching ']'.

    Brackets inside JSON string literals are ignored. Returns None when
    there is no '[' or it is never closed.
    """
    start = text.find("[")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_questions(response_text: str) -> list[str]:
    """Parse the question list out of a model response or raise GenerationFailedError."""
    candidate = extract_json_array(response_text)
    if candidate is None:
        logger.error(f"[QUESTIONS] Could not find JSON array in response: {response_text[:500]}")
        raise GenerationFailedError(details={"reason": "no JSON array in response"})

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"[QUESTIONS] Failed to parse JSON: {e}\nJSON string: {candidate[:500]}")
        raise GenerationFailedError(details={"reason": f"invalid JSON array: {e}"})

    if not isinstance(parsed, list):
        raise GenerationFailedError(details={"reason": "response is not a list"})

    questions = [q.strip() for q in parsed if isinstance(q, str) and q.strip()]
    if not questions:
        raise GenerationFailedError(details={"reason": "empty question list"})
    return questions


async def generate_code_questions(code: str, language: str, llm, count: int = QUESTION_COUNT) -> list[str]:
    """
    Ask the LLM for `count` questions about this specific code.

    There is no generic fallback set: a response without a usable question
    list raises GenerationFailedError. Extra questions are dropped.
    """
    prompt = build_question_prompt(code, language, count)
    logger.info(f"[QUESTIONS] Generating {count} questions for {language} code ({len(code)} chars)")

    response_text = await llm.generate_text(prompt)
    logger.debug(f"[QUESTIONS] Raw response: {response_text[:500]}")

    questions = parse_questions(response_text)
    if len(questions) > count:
        logger.warning(f"[QUESTIONS] Model returned {len(questions)} questions, keeping the first {count}")
        questions = questions[:count]
    elif len(questions) < count:
        logger.warning(f"[QUESTIONS] Model returned only {len(questions)} of {count} questions")

    logger.info(f"[QUESTIONS] Generated {len(questions)} tailored questions for {language} code")
    return questions
