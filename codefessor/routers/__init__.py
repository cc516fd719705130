"""
API routers for endpoint organization.
"""
from .health import router as health_router
from .submissions import router as submissions_router
from .interviews import router as interviews_router
from .teacher import router as teacher_router
from .analysis import router as analysis_router

__all__ = [
    "health_router",
    "submissions_router",
    "interviews_router",
    "teacher_router",
    "analysis_router",
]
