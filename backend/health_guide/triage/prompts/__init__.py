"""Prompts for the triage classifier."""
from .assessment import (
    PHOTO_NOTE,
    PROBLEM_TEMPLATE,
    RISK_ASSESSMENT_PROMPT,
    USER_DETAILS_TEMPLATE,
)

__all__ = [
    "PHOTO_NOTE",
    "PROBLEM_TEMPLATE",
    "RISK_ASSESSMENT_PROMPT",
    "USER_DETAILS_TEMPLATE",
]
