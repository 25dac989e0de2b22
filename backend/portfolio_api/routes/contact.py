"""
Portfolio Backend: Contact Route Handler
=========================================

What:  Handles POST /contacts from the site's contact form.
How:   Parses the JSON body into ContactRequest, hands the three fields to
       the SubmissionWorkflow, and renders its SubmissionResult.

Every outcome is answered with 201 and a {"success": bool, "message": str}
body. The site's contact form reads `success` and shows `message`, so a
rejected or unsaved submission is reported in the body, not the status line.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio_api.schemas.submission import ContactRequest, SubmissionResult
from portfolio_api.services.submission_workflow import (
    SubmissionWorkflow,
    get_submission_workflow,
)

router = APIRouter(tags=["Contact"])


@router.post(
    "/contacts",
    status_code=201,
    response_model=SubmissionResult,
    summary="Submit the contact form",
    description=(
        "Stores a visitor's name, email and message and emails the site owner. "
        "Success means the message was saved; email delivery is best-effort."
    ),
)
async def submit_contact(
    body: ContactRequest,
    workflow: SubmissionWorkflow = Depends(get_submission_workflow),
) -> JSONResponse:
    result = await workflow.submit(body.name, body.email, body.message)

    # Returned as a response object so the internal `outcome` never reaches
    # response_model re-validation
    return JSONResponse(
        status_code=201,
        content=result.model_dump(),
    )
