from django.contrib import admin
from django.contrib.auth import get_user_model

User = get_user_model()


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'email', 'phone_number', 'role', 'is_active')
    search_fields = ('email', 'phone_number', 'full_name')
    list_filter = ('role', 'is_active')
    exclude = ('password',)
