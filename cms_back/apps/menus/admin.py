from django.contrib import admin
from .models import MenuItem


# Admin 등록
@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("title", "menu", "parent", "order", "slug", "url", "is_external")
    list_filter = ("menu", "is_external")
    search_fields = ("title", "slug", "url")
    ordering = ("menu", "parent_id", "order")
