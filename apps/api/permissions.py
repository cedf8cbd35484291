"""
Custom permissions for Warehouse Stock Backend API.
"""
from rest_framework import permissions
from apps.users.entities import Warehouseman


class IsWarehouseman(permissions.BasePermission):
    """
    Permission that only allows logged-in warehousemen.
    """

    def has_permission(self, request, view):
        """Check that the request was authenticated with an open session."""
        return isinstance(request.user, Warehouseman)
