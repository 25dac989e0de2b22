"""
Portfolio Backend: Submission Workflow (Business Logic Orchestrator)
=====================================================================

What:  The single entry point for a contact-form submission.
Why:   Owns the failure-isolation policy between storing a message and
       emailing it, so neither the route nor the collaborators have to.
How:   validate → persist → notify → respond, strictly in that order.
Who:   Called by POST /contacts; calls the store and the dispatcher.

Orchestration Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│  Persist    │───▶│   Notify     │───▶│ Respond  │
    │          │    │  (Store)    │    │ (Dispatcher) │    │          │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘
         │                 │                  │
     Rejected        PersistFailed      NotifyFailed → still Completed

    Failure policy:
    - Validation failure: nothing stored, nothing sent, failure result
    - Persistence failure: nothing sent, failure result, ERROR log
    - Dispatch failure: ERROR log only; the caller still gets success,
      because the stored row is the record of truth

    submit() never raises. Every path ends in a SubmissionResult.
    There are no retries: one store attempt, at most one send attempt.
"""

import logging
from typing import Optional

from portfolio_api.config import settings
from portfolio_api.database import async_session_factory
from portfolio_api.exceptions import DispatchError, PersistenceError, ValidationError
from portfolio_api.middleware.request_id import request_id_var
from portfolio_api.schemas.submission import (
    SubmissionOutcome,
    SubmissionResult,
    ValidatedSubmission,
)
from portfolio_api.services.notifier_base import NotificationDispatcher
from portfolio_api.services.sendgrid_dispatcher import SendGridDispatcher
from portfolio_api.services.submission_store import (
    SqlAlchemySubmissionStore,
    SubmissionStore,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Contact saved successfully"
MISSING_FIELDS_MESSAGE = "Missing required fields"
PROCESSING_ERROR_MESSAGE = "Error processing form"

REQUIRED_FIELDS = ("name", "email", "message")


def validate_submission(
    name: Optional[str],
    email: Optional[str],
    message: Optional[str],
) -> ValidatedSubmission:
    """
    Check that every required field is present and not blank.

    Email format is not checked, only presence.

    Raises:
        ValidationError: listing every missing field, in form order.
    """
    values = {"name": name, "email": email, "message": message}
    missing = [
        field for field in REQUIRED_FIELDS
        if not isinstance(values[field], str) or not values[field].strip()
    ]
    if missing:
        raise ValidationError(message=MISSING_FIELDS_MESSAGE, fields=missing)
    return ValidatedSubmission(name=name, email=email, message=message)


class SubmissionWorkflow:
    """
    Validates, stores and relays contact submissions.

    Stateless apart from its two collaborators, so one instance serves all
    concurrent requests.

    Args:
        store:      Where submissions are durably recorded.
        dispatcher: How the site owner is notified.
    """

    def __init__(self, store: SubmissionStore, dispatcher: NotificationDispatcher):
        self.store = store
        self.dispatcher = dispatcher

    async def submit(
        self,
        name: Optional[str],
        email: Optional[str],
        message: Optional[str],
    ) -> SubmissionResult:
        """
        Run one submission through the workflow.

        Returns:
            SubmissionResult with success=True iff the submission was stored.
        """
        rid = request_id_var.get("")

        # ── Step 1: Validate ──────────────────────────────────────────────
        try:
            validated = validate_submission(name, email, message)
        except ValidationError as e:
            logger.info("[%s] Contact submission rejected: missing %s", rid, ", ".join(e.fields))
            return SubmissionResult(
                success=False,
                message=e.message,
                outcome=SubmissionOutcome.REJECTED,
            )

        # ── Step 2: Persist ───────────────────────────────────────────────
        try:
            submission = await self.store.create(
                validated.name, validated.email, validated.message
            )
        except PersistenceError as e:
            logger.error(
                "[%s] Error saving contact from %s: %s | Context: %s",
                rid, validated.email, e.message, e.context,
            )
            return self._persist_failed()
        except Exception as e:
            # A store that breaks its contract is still a storage failure
            logger.error(
                "[%s] Unexpected error saving contact from %s: %s",
                rid, validated.email, str(e),
                exc_info=True,
            )
            return self._persist_failed()

        logger.info("[%s] Submission %s saved for %s", rid, submission.id, submission.email)

        # ── Step 3: Notify (non-fatal) ────────────────────────────────────
        try:
            await self.dispatcher.notify(submission.name, submission.email, submission.message)
        except DispatchError as e:
            logger.error(
                "[%s] Error sending email for submission %s from %s: %s | Context: %s",
                rid, submission.id, submission.email, e.message, e.context,
            )
        except Exception as e:
            logger.error(
                "[%s] Unexpected error sending email for submission %s from %s: %s",
                rid, submission.id, submission.email, str(e),
                exc_info=True,
            )

        # ── Step 4: Respond ───────────────────────────────────────────────
        logger.info("[%s] Contact form submitted by %s", rid, submission.email)
        return SubmissionResult(
            success=True,
            message=SUCCESS_MESSAGE,
            outcome=SubmissionOutcome.COMPLETED,
        )

    @staticmethod
    def _persist_failed() -> SubmissionResult:
        return SubmissionResult(
            success=False,
            message=PROCESSING_ERROR_MESSAGE,
            outcome=SubmissionOutcome.PERSIST_FAILED,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
# Wired from settings once; routes receive it through get_submission_workflow
# so tests can override the dependency with fakes.
submission_workflow = SubmissionWorkflow(
    store=SqlAlchemySubmissionStore(async_session_factory),
    dispatcher=SendGridDispatcher(settings.notification_config()),
)


def get_submission_workflow() -> SubmissionWorkflow:
    """FastAPI dependency returning the application's workflow."""
    return submission_workflow
