"""
Contact API Endpoints.

Endpoints for issuing form challenges, submitting the nursery contact form,
and listing stored submissions.

The submissions listing returns personal data (names, emails, phones, IPs).
It has no authentication of its own and must only be exposed behind the
staff admin gateway, never on the public site.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_client_ip, get_contact_service
from api.models import (
    ChallengeResponse,
    ContactRequest,
    ContactResponse,
    ContactSubmissionListResponse,
    ContactSubmissionResponse,
    ErrorResponse,
)
from domain.time import to_epoch_ms
from services.contact_service import (
    ContactService,
    ContactSubmissionRequest,
    SubmissionStatus,
)

router = APIRouter()


@router.get(
    "/contact/challenge",
    response_model=ChallengeResponse,
    summary="Issue Contact Form Challenge",
    description="Issue a fresh math challenge for one render of the contact form."
)
def issue_challenge(service: ContactService = Depends(get_contact_service)):
    """
    Issue a new math challenge.

    Call this every time the form is rendered; a challenge can be answered once.
    The expected answer never leaves the server.
    """
    issued = service.issue_challenge()
    return ChallengeResponse(
        challenge_id=issued.challenge_id,
        question=issued.challenge.question,
        form_start_time=to_epoch_ms(issued.issued_at),
        expires_at=issued.expires_at,
    )


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Contact Form",
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
def submit_contact_form(
    contact_data: ContactRequest,
    client_ip: str = Depends(get_client_ip),
    service: ContactService = Depends(get_contact_service),
):
    """
    Submit the contact form.

    **Checks, in order:**
    1. Rate limit per IP address (429 when exceeded)
    2. Math challenge answer (400 when wrong, unknown, or expired)
    3. Spam checks: honeypot, timing, content (422 when flagged)

    Accepted submissions are stored for staff review.
    """
    try:
        result = service.submit(
            ContactSubmissionRequest(
                name=contact_data.name,
                email=contact_data.email,
                phone=contact_data.phone,
                nursery_location=contact_data.nursery_location,
                message=contact_data.message,
                website=contact_data.website,
                math_answer=contact_data.math_answer,
                challenge_id=contact_data.challenge_id,
                form_start_time=contact_data.form_start_time,
                ip_address=client_ip,
            )
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to submit contact form: {str(e)}"
        )

    if result.status is SubmissionStatus.RATE_LIMITED:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many messages from this address. Please try again later."
        )
    if result.status is SubmissionStatus.CHALLENGE_FAILED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect answer to the security question. Please try again."
        )
    if result.status is SubmissionStatus.SPAM:
        # The triggered rules are logged, never echoed back to the sender.
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Your message could not be sent. Please contact the nursery directly."
        )

    return ContactResponse(
        success=True,
        submission_id=result.submission.submission_id,
        message="Thank you for your message! We'll get back to you soon."
    )


@router.get(
    "/contact/submissions",
    response_model=ContactSubmissionListResponse,
    summary="List Contact Submissions",
)
def list_contact_submissions(
    limit: int = Query(100, ge=1, le=1000),
    service: ContactService = Depends(get_contact_service),
):
    """
    List stored contact submissions, newest first.

    Staff only: serve this route behind the admin gateway.
    """
    try:
        submissions = service.list_submissions(limit=limit)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list contact submissions: {str(e)}"
        )

    items = [
        ContactSubmissionResponse(
            submission_id=s.submission_id,
            name=s.name,
            email=s.email,
            phone=s.phone,
            nursery_location=s.nursery_location,
            message=s.message,
            ip_address=s.ip_address,
            spam_score=s.spam_score,
            created_at=s.created_at,
        )
        for s in submissions
    ]
    return ContactSubmissionListResponse(items=items, total_count=len(items))
