"""
Custom exception classes and error handling.

This module provides custom exceptions and utilities for consistent
error handling across the application.
"""
import logging
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CodefessorException(Exception):
    """Base exception for all Codefessor-specific errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(CodefessorException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, resource_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"{resource} not found: {resource_id}"
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(CodefessorException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)
        self.field = field


class InterviewNotCompletedError(CodefessorException):
    """Raised when an analysis is requested for an interview that is still running."""

    def __init__(self, interview_id: str, interview_status: Optional[str]):
        super().__init__(
            "Interview not completed",
            status.HTTP_400_BAD_REQUEST,
            {"interviewId": interview_id, "status": interview_status},
        )
        self.interview_id = interview_id
        self.interview_status = interview_status


class GenerationFailedError(CodefessorException):
    """Raised when the LLM did not return a usable question list."""

    def __init__(self, message: str = "Failed to generate valid questions from Gemini API", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class UpstreamUnavailableError(CodefessorException):
    """Raised when Ribbon or Gemini could not be reached or returned an error."""

    def __init__(
        self,
        service: str,
        detail: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = {"service": service, "message": detail}
        merged.update(details or {})
        super().__init__(f"{service} request failed: {detail}", status_code, merged)
        self.service = service
        self.detail = detail


class QuotaExceededError(UpstreamUnavailableError):
    """Raised when an upstream call was rejected for quota or rate-limit reasons."""

    def __init__(self, service: str, detail: str):
        super().__init__(
            service,
            detail,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"retryAfter": "24h"},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def codefessor_exception_handler(request: Request, exc: CodefessorException) -> JSONResponse:
    """Handle CodefessorException instances."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {"message": str(exc)}
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Call this during app initialization:
        from codefessor.exceptions import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(CodefessorException, codefessor_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
