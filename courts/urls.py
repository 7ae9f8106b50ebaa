from django.urls import path
from . import views

urlpatterns = [
    path('', views.field_list, name='field_list'),
    path('new/', views.field_create, name='field_create'),
    path('<int:field_id>/edit/', views.field_edit, name='field_edit'),
    path('<int:field_id>/delete/', views.field_delete, name='field_delete'),
]
