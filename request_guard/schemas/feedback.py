"""Pydantic schemas for beta feedback submissions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FeedbackType = Literal["general", "bug", "feature", "ui"]


class FeedbackRequest(BaseModel):
    """Feedback payload as submitted by the dashboard."""

    feedback_type: FeedbackType = Field(
        "general",
        description="Category chosen in the feedback dialog.",
    )
    message: str = Field(
        ...,
        max_length=5000,
        description="Free-text feedback (at least 10 characters after trimming).",
    )
    user_email: str | None = Field(
        default=None,
        max_length=320,
        description="Reply-to address of the signed-in user, if any.",
    )
    page_url: str | None = Field(
        default=None,
        max_length=2048,
        description="Absolute URL of the page the feedback was sent from.",
    )
    user_agent: str | None = Field(
        default=None,
        max_length=512,
        description="Browser user agent string.",
    )
    screenshot_name: str | None = Field(
        default=None,
        max_length=1024,
        description="Original file name of an attached screenshot.",
    )


class FeedbackRecord(BaseModel):
    """Feedback after sanitization, ready to hand to a store or mailer."""

    feedback_type: FeedbackType
    message: str
    user_email: str | None = None
    page_url: str | None = None
    user_agent: str | None = None
    screenshot_name: str | None = None


class FeedbackResponse(BaseModel):
    success: bool = True
    feedback: FeedbackRecord
