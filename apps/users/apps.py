"""
Users app configuration for Warehouse Stock Backend.
"""
from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Warehousemen and sessions."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.users'
    verbose_name = 'Warehousemen'
