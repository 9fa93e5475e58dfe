from typing import Any, Mapping, Optional

from app.config.permissions_config import Role
from app.modules.auth.email_alias import is_admin_identity


def resolve_role(user_type: Optional[str], email: Optional[str] = None) -> Role:
    """Resolve the effective role once.

    Only the verified auth email can make a user the admin. user_metadata is
    writable by its owner, so `original_email` is never consulted here.
    """
    if is_admin_identity(email):
        return Role.ADMIN
    if user_type == Role.CREATOR.value:
        return Role.CREATOR
    return Role.CLIENT


def resolve_role_from_metadata(email: Optional[str], user_metadata: Optional[Mapping[str, Any]]) -> Role:
    metadata = user_metadata or {}
    return resolve_role(metadata.get("user_type"), email=email)
