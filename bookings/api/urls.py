"""API URL routing for Mero Tasbir."""
from django.urls import path

from bookings.health import health_check

from . import views
from .validation_views import validation_constraints

urlpatterns = [
    path('', views.api_root, name='api-root'),
    path('health/', health_check, name='health-check'),
    path('auth/register/', views.register, name='auth-register'),
    path('auth/login/', views.login, name='auth-login'),
    path('auth/verify-otp/', views.verify_otp, name='auth-verify-otp'),
    path('auth/admin/register/', views.admin_register, name='auth-admin-register'),
    path('users/', views.create_user, name='users-create'),
    path('users/<str:id>/', views.update_user, name='users-update'),
    path('search/', views.search, name='search'),
    path('uploads/', views.upload, name='uploads'),
    path('media/', views.create_media, name='media-create'),
    path('events/', views.events, name='events'),
    path('services/', views.create_service, name='services-create'),
    path('bookings/', views.create_booking, name='bookings-create'),
    path('bookings/<str:id>/', views.booking_detail, name='bookings-detail'),
    path('rentals/', views.create_rental, name='rentals-create'),
    path('admin/login/', views.admin_login, name='admin-login'),
    path('admin/<str:id>/', views.admin_detail, name='admin-detail'),
    path('courses/', views.create_course, name='courses-create'),
    path('courses/<str:id>/', views.update_course, name='courses-update'),
    path('marketplace/', views.create_marketplace_item, name='marketplace-create'),
    path('marketplace/<str:id>/', views.update_marketplace_item, name='marketplace-update'),
    path('hero/', views.create_hero_section, name='hero-create'),
    path('hero/<str:id>/', views.update_hero_section, name='hero-update'),
    path('hero/<str:id>/activate/', views.activate_hero_section, name='hero-activate'),
    path('validation/constraints/', validation_constraints, name='validation-constraints'),
]
