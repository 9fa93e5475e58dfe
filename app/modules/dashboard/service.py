from supabase import Client
from app.config.permissions_config import Role, role_has_capability
from app.modules.auth.schemas import Principal
from app.modules.dashboard.schemas import Action, DashboardView, StatCard
from app.modules.profiles.schemas import ProfileResponse
from app.modules.profiles.service import ProfileService
from app.modules.services.schemas import ServiceResponse
from app.modules.services.service import ServiceCatalogService
from typing import List, Optional

CREATE_SERVICE = Action(label="Create Service", target="/create-service")
BROWSE_SERVICES = Action(label="Browse Services", target="/browse")

# role -> (subtitle, first stat title, first stat caption, section title, section description, empty message)
ROLE_COPY = {
    Role.ADMIN: (
        "Manage all platform services and users",
        "Total Services", "Platform-wide",
        "All Platform Services", "Manage all services on the platform",
        "No services have been created yet",
    ),
    Role.CREATOR: (
        "Manage your services and track your earnings",
        "Active Services", "Services available",
        "Your Services", "Manage your service offerings",
        "You haven't created any services yet",
    ),
    Role.CLIENT: (
        "Find services and manage your projects",
        "Active Projects", "Projects in progress",
        "Your Projects", "Track your hired services",
        "You haven't hired any services yet",
    ),
}


def profile_missing_view() -> DashboardView:
    return DashboardView(
        profile_missing=True,
        headline="Profile Not Found",
        subtitle="There was an issue loading your profile. Please try refreshing the page.",
        primary_action=Action(label="Refresh Page", target="reload"),
    )


def build_dashboard_view(
    principal: Principal,
    profile: Optional[ProfileResponse],
    services: List[ServiceResponse],
) -> DashboardView:
    """Assemble the dashboard for an already-resolved role"""
    if profile is None:
        return profile_missing_view()

    role = principal.role
    can_create = role_has_capability(role, "services:create")
    subtitle, stat_title, stat_caption, section_title, section_description, empty_message = ROLE_COPY[role]

    stats = [
        StatCard(title=stat_title, value=str(len(services)), caption=stat_caption),
        StatCard(
            title="Total Earnings" if can_create else "Total Spent",
            value="$0",
            caption="From completed projects" if can_create else "On services",
        ),
        StatCard(title="Rating", value="--", caption="Based on reviews"),
    ]

    if can_create:
        quick_actions = [
            Action(label="Create New Service", target="/create-service"),
            Action(label="Browse All Services", target="/browse", variant="outline"),
        ]
    else:
        quick_actions = [
            BROWSE_SERVICES,
            Action(label="View Order History", variant="outline"),
        ]

    return DashboardView(
        profile=profile,
        role=role,
        is_admin=role == Role.ADMIN,
        is_creator=role == Role.CREATOR,
        headline=f"Welcome back, {profile.full_name}!",
        subtitle=subtitle,
        stats=stats,
        services_title=section_title,
        services_description=section_description,
        empty_message=empty_message,
        services=services,
        can_create_service=can_create,
        primary_action=CREATE_SERVICE if can_create else BROWSE_SERVICES,
        quick_actions=quick_actions,
    )


class DashboardService:
    def __init__(self, supabase: Client):
        self.profiles = ProfileService(supabase)
        self.catalog = ServiceCatalogService(supabase)

    def get_dashboard(self, principal: Principal) -> DashboardView:
        profile = self.profiles.get_profile(principal.id)
        if profile is None:
            return profile_missing_view()
        return build_dashboard_view(principal, profile, self.catalog.list_for_principal(principal))
