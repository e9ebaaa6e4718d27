"""
Django admin configuration for social.
"""

from django.contrib import admin

from social.models import UserFollow


@admin.register(UserFollow)
class UserFollowAdmin(admin.ModelAdmin):
    list_display = ["follower", "following", "created_at"]
    search_fields = [
        "follower__email",
        "follower__profile__username",
        "following__email",
        "following__profile__username",
    ]
    raw_id_fields = ["follower", "following"]
    list_select_related = ["follower", "following"]
    date_hierarchy = "created_at"
