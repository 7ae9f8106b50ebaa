from django.urls import path

from accounts import views as account_views
from . import views

urlpatterns = [
    path('', views.dashboard_home, name='dashboard'),
    path('user/', views.user_dashboard, name='user_dashboard'),
    path('kasir/', views.kasir_dashboard, name='kasir_dashboard'),
    path('admin/', views.admin_dashboard, name='admin_dashboard'),
    path('users/', views.user_list, name='user_list'),
    path('users/<int:user_id>/role/', views.change_user_role, name='change_user_role'),
    path('finance/', views.financial_report, name='financial_report'),
    path('finance/export/', views.export_financial_report, name='export_financial_report'),
    path('profile/', account_views.profile, name='profile'),
]
