from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """Allow only authenticated users flagged as admins."""
    message = 'Admin access required'
    code = 'FORBIDDEN'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)


class IsVerified(permissions.BasePermission):
    """Require a verified email for engagement actions."""
    message = 'Email verification required'
    code = 'UNVERIFIED'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            # let IsAuthenticated report the 401
            return True
        return bool(user.is_verified)


class IsOwnerOrAdminOrReadOnly(permissions.BasePermission):
    """Object-level permission to only allow authors or admins to edit a cocktail."""
    message = 'Not authorized to modify this cocktail'
    code = 'FORBIDDEN'

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return obj.created_by_id == user.id or user.is_admin
