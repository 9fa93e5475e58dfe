"""
Admin email aliasing.

Supabase Auth rejects the admin's public address, so the admin account is
registered under a substitute address. Every auth call maps the entered email
through `to_submission_email` before it reaches Supabase; the entered form is
kept in user metadata as `original_email`.
"""

from app.config.settings import settings


def to_submission_email(email: str) -> str:
    """Return the email that is actually sent to Supabase Auth."""
    if email == settings.admin_email:
        return settings.admin_submit_email
    return email


def is_admin_alias(email: str) -> bool:
    """True if the entered email is the admin's public address."""
    return email == settings.admin_email


def is_admin_identity(email: str | None) -> bool:
    """True for either form of the admin address (entered or submitted)."""
    if not email:
        return False
    return email in (settings.admin_email, settings.admin_submit_email)
