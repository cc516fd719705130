"""
Authorship Judge for code-understanding interviews.

Sends the interview transcript (and the submitted code when available) to the
LLM and returns a normalized judgment:
- score 0-100 (0 = AI-generated, 100 = human-written) and confidence tier
- red flags, human indicators, key observations, suspicious phrases
- whether the structured answer came from parsed JSON or text heuristics
"""
import json
import logging
import re
from typing import Any, Optional

from .heuristics import heuristic_judgment
from .scoring import clamp_score, derive_ai_likelihood

logger = logging.getLogger(__name__)


VALID_CONFIDENCE = {"low", "medium", "high", "indecisive"}
VALID_PHRASE_ORIGINS = {"code", "transcript"}

NO_TRANSCRIPT_REASONING = "No interview data available"
DEFAULT_REASONING = "Analysis completed"


# =============================================================================
# Prompt
# =============================================================================

INSTRUCTION = """You are an expert at detecting whether code was written by a human or generated by AI tools like ChatGPT, Claude, etc.

Analyze the following code and interview transcript to determine if the code was likely written by AI or by a human.

## ANALYSIS CRITERIA

### 1. Code analysis - signs of AI-generated code
- Overly perfect structure and formatting
- Generic variable names (e.g., data, result, temp)
- Excessive comments or no comments at all
- Lack of personal coding style or quirks
- Too-perfect error handling
- Generic solutions without specific optimizations

### 2. Interview analysis - evaluate the responses for
- Hesitation vs confidence: does the person seem uncertain about their own code?
- Deep understanding: can they explain WHY they made specific decisions?
- Personal experience: do they mention struggles, debugging, or iterations?
- Specific knowledge: can they discuss edge cases, limitations, or alternative approaches?
- Generic responses: are answers too perfect or could they apply to any code?
- Technical depth: do they understand the underlying concepts or just the surface?
- Link with code: do their explanations match the code structure and logic?

### 3. Red flags for AI generation
- Can't explain specific design choices
- Hesitant when asked about the debugging process
- Generic explanations that could apply to any code
- No mention of personal coding challenges or iterations
- Perfect explanations without personal touch
- Unable to discuss what they would change or improve

### 4. Human indicators
- Personal anecdotes about writing the code
- Mentions of debugging, struggles, or multiple attempts
- Specific reasons for design decisions
- Knowledge of limitations or potential improvements
- Coding style quirks or personal preferences
- Ability to discuss alternative approaches they considered

## SUSPICIOUS PHRASES
Scan both the code and the transcript for highly suspicious phrases or patterns that strongly suggest AI generation (generic explanations, overly formal language, repeated AI-like patterns, code comments that match known AI output). For each, add an object to "suspiciousPhrases" with the exact phrase, whether it was found in the code or the transcript, and a brief reason.

## OUTPUT FORMAT
Respond ONLY with a JSON object in this exact format:

{
  "score": <number from 0-100, where 0 = definitely AI-generated, 100 = definitely human-written>,
  "confidence": "low" | "medium" | "high" | "indecisive",
  "reasoning": "<detailed explanation of your analysis>",
  "redFlags": ["specific concerns suggesting AI generation"],
  "humanIndicators": ["specific signs suggesting human authorship"],
  "keyObservations": ["important patterns you noticed in code or interview"],
  "indecisive": <true if there is not enough information for a confident judgment, or if the code is so basic that either AI or a human could have written it>,
  "suspiciousPhrases": [
    {"text": "exact suspicious phrase", "type": "code" | "transcript", "reason": "why this phrase is suspicious"}
  ]
}
"""


def build_judge_prompt(transcript: str, original_code: Optional[str] = None) -> str:
    """Embed the code (or a placeholder) and the transcript in the judge prompt."""
    return f"""{INSTRUCTION}
## ORIGINAL CODE
```
{original_code or "Code not available"}
```

## INTERVIEW TRANSCRIPT
"{transcript}"

Give your analysis as JSON."""


# =============================================================================
# Parsing
# =============================================================================

def extract_json_object(response_text: str) -> Optional[dict]:
    """
    Parse the span from the first '{' to the last '}' in the response.

    Returns None when there is no such span, it is not valid JSON,
    or it does not decode to an object.
    """
    json_match = re.search(r"\{[\s\S]*\}", response_text)
    if not json_match:
        logger.warning("[JUDGE] No JSON object found in model response")
        return None

    try:
        parsed = json.loads(json_match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"[JUDGE] Failed to parse JSON: {e}")
        return None

    if not isinstance(parsed, dict):
        logger.warning(f"[JUDGE] JSON span decoded to {type(parsed).__name__}, expected object")
        return None
    return parsed


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


def _suspicious_phrases(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []

    phrases = []
    for item in value:
        if not isinstance(item, dict) or not item.get("text"):
            continue
        origin = str(item.get("type", "")).lower()
        if origin not in VALID_PHRASE_ORIGINS:
            continue
        phrases.append({
            "text": str(item["text"]),
            "type": origin,
            "reason": str(item.get("reason") or ""),
        })
    return phrases


def _confidence(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in VALID_CONFIDENCE:
        return value.strip().lower()
    return "medium"


def _indecisive(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def normalize_judgment(raw: dict, parsed: bool) -> dict:
    """
    Apply defaults and derived fields to a raw judgment.

    Used for both the parsed-JSON path and the heuristic path.
    """
    score = clamp_score(raw.get("score"))
    confidence = _confidence(raw.get("confidence"))
    indecisive = _indecisive(raw.get("indecisive"))

    return {
        "score": score,
        "confidence": confidence,
        "aiLikelihood": derive_ai_likelihood(score, confidence, indecisive),
        "reasoning": str(raw.get("reasoning") or DEFAULT_REASONING),
        "redFlags": _string_list(raw.get("redFlags")),
        "humanIndicators": _string_list(raw.get("humanIndicators")),
        "keyObservations": _string_list(raw.get("keyObservations")),
        "suspiciousPhrases": _suspicious_phrases(raw.get("suspiciousPhrases")),
        "indecisive": indecisive,
        "geminiAnalysis": parsed,
    }


def parse_judgment_response(response_text: str) -> dict:
    """Structured parse first, text heuristics second, then normalize."""
    structured = extract_json_object(response_text)
    if structured is not None:
        return normalize_judgment(structured, parsed=True)

    logger.info("[JUDGE] Could not parse JSON response, falling back to text heuristics")
    return normalize_judgment(heuristic_judgment(response_text), parsed=False)


# =============================================================================
# Main Judge Function
# =============================================================================

async def judge_transcript(transcript: Optional[str], original_code: Optional[str], llm) -> dict:
    """
    Judge whether the transcript is consistent with the student writing the code.

    Args:
        transcript: Full interview transcript; an empty or missing transcript
            returns an "unknown" verdict without calling the model
        original_code: Submitted code, None when the session was lost
        llm: Text generator exposing `async generate_text(prompt) -> str`

    Returns:
        Dict with score, confidence, aiLikelihood, reasoning, list fields,
        indecisive, geminiAnalysis and transcriptLength

    Raises:
        UpstreamUnavailableError / QuotaExceededError from the LLM client
    """
    if not transcript:
        return {
            "score": 0,
            "confidence": "unknown",
            "aiLikelihood": "unknown",
            "reasoning": NO_TRANSCRIPT_REASONING,
            "redFlags": [],
            "humanIndicators": [],
            "keyObservations": [],
            "suspiciousPhrases": [],
            "indecisive": False,
            "geminiAnalysis": False,
            "transcriptLength": 0,
        }

    prompt = build_judge_prompt(transcript, original_code)
    logger.info(
        f"[JUDGE] Starting - transcript: {len(transcript)} chars, "
        f"code context: {'yes' if original_code else 'no'}"
    )

    response_text = await llm.generate_text(prompt)
    logger.debug(f"[JUDGE] Raw response: {response_text[:500]}")

    judgment = parse_judgment_response(response_text)
    judgment["transcriptLength"] = len(transcript)

    logger.info(
        f"[JUDGE] Done - score: {judgment['score']}, confidence: {judgment['confidence']}, "
        f"structured: {judgment['geminiAnalysis']}"
    )
    return judgment
