"""
Portfolio Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract with the contact form.
Why:   The inbound body is untrusted. It is parsed into a typed ContactRequest
       whose fields may be missing; the workflow then turns it into a
       ValidatedSubmission or rejects it. Nothing partially trusted reaches
       the store.
Who:   Used by route handlers and by the submission workflow.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ContactRequest(BaseModel):
    """
    What:  Raw contact form body as posted by the site.
    Why optional fields: A missing field is a workflow-level rejection with
           the form's own message, not a framework 422.

    Numbers are coerced to strings so `{"name": 42}` is treated like any
    other non-empty value.
    """
    name: Optional[str] = Field(default=None, description="Visitor's name")
    email: Optional[str] = Field(default=None, description="Visitor's reply-to address")
    message: Optional[str] = Field(default=None, description="Message body")

    model_config = {"coerce_numbers_to_str": True}


class ValidatedSubmission(BaseModel):
    """
    A submission whose three fields are known to be present and non-blank.

    Only produced by `validate_submission()`. Values are kept exactly as
    submitted; trimming is used for the emptiness check only.
    """
    name: str
    email: str
    message: str

    model_config = {"frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SubmissionOutcome(str, Enum):
    """Terminal state of one pass through the workflow."""

    COMPLETED = "completed"
    REJECTED = "rejected"
    PERSIST_FAILED = "persist_failed"


class SubmissionResult(BaseModel):
    """
    What:  The verdict returned for every contact submission.
    Who:   Returned by SubmissionWorkflow.submit() and serialized by POST /contacts.

    Only `success` and `message` are serialized. `outcome` lets the route
    pick a status code; whether the email went out is deliberately not
    part of the result.
    """
    success: bool = Field(description="Whether the submission was saved")
    message: str = Field(description="Human-readable outcome for the visitor")
    outcome: SubmissionOutcome = Field(exclude=True)


class StatusResponse(BaseModel):
    """Liveness probe body for GET /auth/status."""
    status: str = Field(default="ok")
    message: str = Field(default="API is running")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class ErrorResponse(BaseModel):
    """
    What:  Body returned for unexpected server errors.

    Example:
        {
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
