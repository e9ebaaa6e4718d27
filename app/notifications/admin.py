"""
Django admin configuration for push notification models.
"""

from django.contrib import admin

from notifications.models import DeviceToken


@admin.register(DeviceToken)
class DeviceTokenAdmin(admin.ModelAdmin):
    """Admin for registered device tokens."""

    list_display = ["user", "platform", "token_preview", "is_active", "updated_at"]
    list_filter = ["platform", "is_active"]
    search_fields = ["token", "user__email", "user__profile__username"]
    raw_id_fields = ["user"]
    readonly_fields = ["id", "created_at", "updated_at"]

    @admin.display(description="Token")
    def token_preview(self, obj):
        return f"{obj.token[:20]}..."
