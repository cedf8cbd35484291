"""
Health check URLs for Warehouse Stock Backend.
"""
from django.urls import path
from apps.core import views

app_name = 'core'

urlpatterns = [
    path('', views.health_check, name='health'),
    path('ready/', views.readiness_check, name='ready'),
    path('live/', views.liveness_check, name='live'),
]
