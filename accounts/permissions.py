from rest_framework.permissions import BasePermission

SAFE_METHODS = ["GET", "HEAD", "OPTIONS"]


def is_system_admin(user):
    return bool(user and user.is_authenticated and user.is_system_admin)


def can_access(actor, owner):
    """
    The one owner-or-admin policy: admins may act on any member's records,
    members only on their own.
    """
    if is_system_admin(actor):
        return True
    return bool(
        actor
        and actor.is_authenticated
        and owner is not None
        and actor.pk == owner.pk
    )


class IsSystemAdmin(BasePermission):
    def has_permission(self, request, view):
        return is_system_admin(request.user)


class IsSystemAdminOrReadOnly(BasePermission):
    def has_permission(self, request, view):
        return (
            request.method in SAFE_METHODS
            and request.user.is_authenticated
            or is_system_admin(request.user)
        )

    def has_object_permission(self, request, view, obj):
        return (
            request.method in SAFE_METHODS
            and request.user.is_authenticated
            or is_system_admin(request.user)
        )


class IsOwnerOrSystemAdmin(BasePermission):
    """
    Object-level check; every owned model exposes an ``owner`` property.
    """

    def has_permission(self, request, view):
        return request.user.is_authenticated

    def has_object_permission(self, request, view, obj):
        return can_access(request.user, obj.owner)
