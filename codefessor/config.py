"""
Configuration module for Codefessor Backend.
Centralizes environment variables, logging setup, and constants.
"""
import os
import logging
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================================================
# Environment Configuration
# ============================================================================

PORT = int(os.environ.get("PORT", "3000"))

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ============================================================================
# External Service Configuration
# ============================================================================

# Ribbon (voice interview platform)
RIBBON_API_KEY = os.environ.get("RIBBON_API_KEY")
RIBBON_BASE_URL = os.environ.get("RIBBON_BASE_URL", "https://app.ribbon.ai/be-api/v1")
RIBBON_TIMEOUT = float(os.environ.get("RIBBON_TIMEOUT", "30"))
RIBBON_LIST_LIMIT = int(os.environ.get("RIBBON_LIST_LIMIT", "1000"))

# Gemini (question generation + authorship analysis)
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

if not RIBBON_API_KEY:
    logger.warning("RIBBON_API_KEY not set. Interview platform calls will fail until set.")
if not GEMINI_API_KEY:
    logger.warning("GEMINI_API_KEY not set. Gemini calls will fail until set.")

# ============================================================================
# Storage
# ============================================================================

ANALYSIS_RESULTS_FILE = os.environ.get(
    "ANALYSIS_RESULTS_FILE",
    os.path.join(BASE_DIR, "analysis_results.json"),
)

# ============================================================================
# Application Constants
# ============================================================================

# Org name shown on interview flows created on Ribbon
ORG_NAME = os.environ.get("ORG_NAME", "Codefessor")
INTERVIEW_TYPE = "recruitment"

# Number of questions generated per submission
QUESTION_COUNT = 6

# Teacher dashboard size
RECENT_INTERVIEWS_LIMIT = int(os.environ.get("RECENT_INTERVIEWS_LIMIT", "5"))

# Score thresholds (inclusive lower bounds, 100 = human-written).
# Hand-tuned, override via env.
LIKELY_HUMAN_THRESHOLD = int(os.environ.get("LIKELY_HUMAN_THRESHOLD", "70"))
POSSIBLY_HUMAN_THRESHOLD = int(os.environ.get("POSSIBLY_HUMAN_THRESHOLD", "50"))
POSSIBLY_AI_THRESHOLD = int(os.environ.get("POSSIBLY_AI_THRESHOLD", "30"))
TEACHER_HUMAN_THRESHOLD = int(os.environ.get("TEACHER_HUMAN_THRESHOLD", "50"))

# Fallback values for analyses without a submission session
UNKNOWN_STUDENT_NAME = "Unknown Student"
UNKNOWN_STUDENT_EMAIL = "Unknown Email"
UNKNOWN_LANGUAGE = "Unknown"
