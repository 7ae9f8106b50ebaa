from django.contrib import admin
from django.urls import include, path

from accounts import views as account_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('accounts.urls')),
    path('unauthorized/', account_views.unauthorized, name='unauthorized'),
    path('dashboard/fields/', include('courts.urls')),
    path('dashboard/articles/', include('articles.urls')),
    path('dashboard/settings/', include('siteconfig.urls')),
    path('dashboard/', include('dashboards.urls')),
    path('notifications/', include('notifications.urls')),
    path('', include('bookings.urls')),
]
