"""
Codefessor API.

Students submit code and get a voice interview about it; once the interview is
completed the transcript is judged for authorship and the verdict is cached.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from codefessor.config import ANALYSIS_RESULTS_FILE, PORT
from codefessor.dependencies import init_services
from codefessor.exceptions import register_exception_handlers
from codefessor.routers import (
    analysis_router,
    health_router,
    interviews_router,
    submissions_router,
    teacher_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the analysis cache on startup."""
    init_services(ANALYSIS_RESULTS_FILE)
    logger.info(f"Codefessor API ready on port {PORT}")
    yield


app = FastAPI(title="Codefessor API", lifespan=lifespan)

# CORS middleware for the browser front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(submissions_router, prefix="/api")
app.include_router(interviews_router, prefix="/api")
app.include_router(teacher_router, prefix="/api")
app.include_router(analysis_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
