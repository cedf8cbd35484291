"""
API URLs for Warehouse Stock Backend.
"""
from django.urls import path, include
from apps.api.views import auth_views, inventory_views, statistics_views
from apps.core.views import health_check

app_name = 'api'

# Authentication URLs
auth_urlpatterns = [
    path('login/', auth_views.login, name='login'),
    path('me/', auth_views.me, name='me'),
    path('logout/', auth_views.logout, name='logout'),
]

# Inventory URLs
inventory_urlpatterns = [
    path('products/', inventory_views.product_list, name='product_list'),
    path('products/<str:product_id>/', inventory_views.product_detail, name='product_detail'),
    path('products/<str:product_id>/stocks/<str:stock_id>/', inventory_views.update_stock, name='update_stock'),
    path('products/<str:product_id>/export/', inventory_views.export_product_pdf, name='export_product_pdf'),
    path('products/<str:product_id>/label/', inventory_views.product_label, name='product_label'),
    path('scan/', inventory_views.scan, name='scan'),
    path('deletions/', inventory_views.deletion_ledger, name='deletion_ledger'),
]

# Statistics URLs
statistics_urlpatterns = [
    path('statistics/', statistics_views.statistics, name='statistics'),
    path('statistics/export/', statistics_views.export_statistics_pdf, name='export_statistics_pdf'),
]

# Main URL patterns
urlpatterns = [
    # Health check
    path('health/', health_check, name='health'),

    # Authentication
    path('auth/', include(auth_urlpatterns)),

    # Inventory
    path('', include(inventory_urlpatterns)),

    # Statistics
    path('', include(statistics_urlpatterns)),
]
