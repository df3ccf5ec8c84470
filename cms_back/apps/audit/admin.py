from django.contrib import admin
from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "action", "entity", "entity_id", "user", "ip_address")
    list_filter = ("action", "entity")
    search_fields = ("entity_id", "user__login_id")
    readonly_fields = ("user", "action", "entity", "entity_id", "metadata", "ip_address", "user_agent", "created_at")
