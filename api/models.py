"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# Challenge Models
# ============================================================================

class ChallengeResponse(BaseModel):
    """A math challenge to render on the contact form."""
    challenge_id: str
    question: str
    form_start_time: int = Field(
        ...,
        description="Epoch milliseconds when the challenge was issued"
    )
    expires_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "challenge_id": "3f2a9c1e0b7d4e5f8a6b2c1d0e9f8a7b",
                "question": "What is 7 + 3?",
                "form_start_time": 1767225600000,
                "expires_at": "2026-01-01T00:30:00Z"
            }
        }


# ============================================================================
# Contact Models
# ============================================================================

class ContactRequest(BaseModel):
    """Contact form submission."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    phone: Optional[str] = Field(None, max_length=40)
    nursery_location: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=5000)
    website: Optional[str] = Field(
        None,
        description="Hidden field; must be left empty"
    )
    math_answer: Optional[int] = None
    challenge_id: str = Field(..., min_length=1)
    form_start_time: int = Field(
        ...,
        ge=0,
        le=253402300799999,
        description="Epoch milliseconds when the form was rendered"
    )

    @field_validator("name", "email", "nursery_location")
    @classmethod
    def strip_required_text(cls, v, info):
        """Trim surrounding whitespace; a blank value is rejected."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(f"{info.field_name} cannot be empty")
        return cleaned

    @field_validator("message")
    @classmethod
    def require_message_text(cls, v):
        """Message is scored as sent, but must contain something besides whitespace."""
        if not v.strip():
            raise ValueError("message cannot be empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Parent",
                "email": "jane.parent@example.com",
                "phone": "07700 900123",
                "nursery_location": "Riverside",
                "message": "Hello, do you have any places for a two year old from September?",
                "website": "",
                "math_answer": 10,
                "challenge_id": "3f2a9c1e0b7d4e5f8a6b2c1d0e9f8a7b",
                "form_start_time": 1767225600000
            }
        }


class ContactResponse(BaseModel):
    """Response after an accepted submission."""
    success: bool
    submission_id: UUID
    message: str


class ContactSubmissionResponse(BaseModel):
    """Stored contact submission for staff review."""
    submission_id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    nursery_location: str
    message: str
    ip_address: Optional[str] = None
    spam_score: int
    created_at: datetime


class ContactSubmissionListResponse(BaseModel):
    items: List[ContactSubmissionResponse]
    total_count: int


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Too many requests",
                "detail": "Please wait before sending another message",
                "status_code": 429
            }
        }
