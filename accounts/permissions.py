from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from accounts.models import Member

ADMIN = Member.ROLE_ADMIN
MANAGER = Member.ROLE_MANAGER
MEMBER = Member.ROLE_MEMBER

STAFF_ROLES = (ADMIN, MANAGER)
ALL_ROLES = (ADMIN, MANAGER, MEMBER)


def has_role(actor, *roles):
    return bool(
        actor is not None
        and actor.is_authenticated
        and actor.is_active
        and actor.effective_role in roles
    )


def require_role(actor, *roles):
    """
    Single permission check consulted by every mutating operation.

    Raises PermissionDenied unless ``actor`` is an authenticated, active member
    holding one of ``roles``. Superusers count as admins.
    """
    if not has_role(actor, *roles):
        raise PermissionDenied(
            f"This action requires one of the roles: {', '.join(roles)}."
        )
    return actor


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return has_role(request.user, ADMIN)


class IsAdminOrManager(BasePermission):
    def has_permission(self, request, view):
        return has_role(request.user, *STAFF_ROLES)

