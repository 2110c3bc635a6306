"""
Role based access for the analytics dashboard.

Permissions are a pure function of the role: one lookup table keyed by the
closed ``UserRole`` enum.
"""
from enum import Enum

from core.enums import UserRole


class Permission(str, Enum):
    VIEW_ALL_TRANSACTIONS = "viewAllTransactions"
    VIEW_ALL_USERS = "viewAllUsers"
    VIEW_ANALYTICS = "viewAnalytics"
    VIEW_MERCHANT_DATA = "viewMerchantData"
    EXPORT_REPORTS = "exportReports"
    CONFIGURE_ALERTS = "configureAlerts"
    MANAGE_USERS = "manageUsers"
    VIEW_REALTIME = "viewRealtime"


ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.OPERATIONS: frozenset({
        Permission.VIEW_ALL_TRANSACTIONS,
        Permission.VIEW_ALL_USERS,
        Permission.VIEW_ANALYTICS,
        Permission.VIEW_MERCHANT_DATA,
        Permission.EXPORT_REPORTS,
        Permission.CONFIGURE_ALERTS,
        Permission.VIEW_REALTIME,
    }),
    UserRole.GROWTH: frozenset({
        Permission.VIEW_ALL_TRANSACTIONS,
        Permission.VIEW_ALL_USERS,
        Permission.VIEW_ANALYTICS,
        Permission.EXPORT_REPORTS,
    }),
    UserRole.MERCHANT: frozenset({
        Permission.VIEW_MERCHANT_DATA,
        Permission.EXPORT_REPORTS,
    }),
    UserRole.USER: frozenset(),
}

ROLE_DISPLAY_NAMES = {
    UserRole.ADMIN: "Administrator",
    UserRole.OPERATIONS: "Operations",
    UserRole.GROWTH: "Growth",
    UserRole.MERCHANT: "Merchant",
    UserRole.USER: "User",
}


def has_permission(role: UserRole, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS[UserRole(role)]


def get_permissions(role: UserRole) -> dict[str, bool]:
    return {permission.value: has_permission(role, permission) for permission in Permission}


def get_role_display_name(role: UserRole) -> str:
    return ROLE_DISPLAY_NAMES[UserRole(role)]


def has_role(role: UserRole, allowed) -> bool:
    """True when ``role`` is one of the ``allowed`` roles."""
    return UserRole(role) in {UserRole(r) for r in allowed}
