from django.urls import path
from . import views

urlpatterns = [
    path('', views.article_list, name='article_list'),
    path('new/', views.article_create, name='article_create'),
    path('<int:article_id>/edit/', views.article_edit, name='article_edit'),
    path('<int:article_id>/delete/', views.article_delete, name='article_delete'),
]
