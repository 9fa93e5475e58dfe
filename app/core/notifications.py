"""
User-facing notifications.
External-service failures are converted into a Notification at the call site
and handed to whoever renders them (HTTP response body, UI toast channel).
"""

from pydantic import BaseModel
from typing import Literal, Optional


class Notification(BaseModel):
    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"


def info(title: str, description: Optional[str] = None) -> Notification:
    return Notification(title=title, description=description)


def failure(title: str, error: Exception | str) -> Notification:
    """Destructive notification carrying the external service's message"""
    return Notification(title=title, description=error_message(error), variant="destructive")


def error_message(error: Exception | str) -> str:
    """Human-readable message of an SDK error (AuthApiError, APIError, ...)"""
    if isinstance(error, str):
        return error
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or error.__class__.__name__
