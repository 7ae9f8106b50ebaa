from django.urls import path
from . import views

urlpatterns = [
    path('', views.home, name='home'),
    path('booking/', views.booking, name='booking'),
    path('payment/<uuid:booking_id>/', views.payment, name='payment'),

    path('dashboard/bookings/', views.my_bookings, name='my_bookings'),
    path('dashboard/manage-bookings/', views.manage_bookings, name='manage_bookings'),
    path('dashboard/manage-bookings/<uuid:booking_id>/status/', views.change_booking_status, name='change_booking_status'),
]
