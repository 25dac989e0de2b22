"""
Portfolio Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for each stage of the contact workflow.
Why:   The workflow decides what to do per failure type: a bad submission is
       rejected, a storage failure fails the request, a mail failure is only
       logged. Distinct types make that policy a matter of `except` clauses.
How:   Each exception carries a user-safe message and an optional context dict
       that is logged but never returned to the client.

Exception Hierarchy:
    PortfolioError (base)
    ├── ValidationError    → submission rejected, nothing stored or sent
    ├── PersistenceError   → submission not stored, no email attempted
    └── DispatchError      → submission stored, email failed (logged only)
"""

from typing import Any, Dict, Optional, Sequence


class PortfolioError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """
    Raised when a contact submission is missing a required field.

    What:    One or more of name, email, message is absent or blank.
    When:    Before anything is written or sent.

    Attributes:
        fields: Names of the offending fields, in form order.
    """

    def __init__(
        self,
        message: str = "Missing required fields",
        fields: Optional[Sequence[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        self.fields = list(fields or [])
        if self.fields:
            ctx["fields"] = self.fields
        super().__init__(message=message, context=ctx)


class PersistenceError(PortfolioError):
    """
    Raised when the submission store cannot record a submission.

    What:    Connectivity loss, constraint violation, timeout, failed commit.

    Security Note:
        The message is always generic. The underlying error type goes into
        context for the server log; SQL text and connection strings never do.
    """

    def __init__(
        self,
        message: str = "Could not save the contact submission",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DispatchError(PortfolioError):
    """
    Raised when the notification email could not be handed to the provider.

    What:    Missing credentials, network failure, or a rejected request.
    When:    Only ever after the submission was stored.

    Attributes:
        status_code: HTTP status returned by the provider, if one was received.
    """

    def __init__(
        self,
        message: str = "Could not send the notification email",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
