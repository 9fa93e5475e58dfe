"""
Roles and capabilities configuration.
Maps each resolved role to the actions it may perform. Route dependencies
check capabilities from here instead of comparing emails or user types.
"""

from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    CLIENT = "client"
    CREATOR = "creator"
    ADMIN = "admin"


# Roles a user may pick at sign-up; admin is never self-assigned
SIGNUP_ROLES = (Role.CLIENT, Role.CREATOR)

CAPABILITIES = {
    "services:browse": "Browse active service listings",
    "services:create": "Publish a new service listing",
    "services:toggle": "Activate or deactivate own service listings",
    "services:manage_all": "See and toggle every listing on the platform",
    "dashboard:view": "Open the dashboard",
}

ROLE_CAPABILITIES: Dict[Role, FrozenSet[str]] = {
    Role.CLIENT: frozenset({
        "services:browse",
        "dashboard:view",
    }),
    Role.CREATOR: frozenset({
        "services:browse",
        "services:create",
        "services:toggle",
        "dashboard:view",
    }),
    Role.ADMIN: frozenset(CAPABILITIES),
}


def role_has_capability(role: Role, capability: str) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())
