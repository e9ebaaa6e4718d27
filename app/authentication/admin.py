"""
Django admin configuration for authentication models.

Registers User and Profile with the Django admin site. Staff accounts are
created here (or via createsuperuser) with a hand-picked auth_user_id and
a password; provider-backed users are created by bootstrap.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm

from authentication.models import Profile, User


class UserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("auth_user_id", "email")


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    fields = (
        "name",
        "username",
        "birth_date",
        "avatar_url",
        "avatar",
        "bio",
        "subscription",
        "subscribers_count",
        "subscriptions_count",
    )


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for provider-backed users."""

    add_form = UserCreationForm
    inlines = [ProfileInline]

    list_display = (
        "auth_user_id",
        "email",
        "roles",
        "is_active",
        "is_staff",
        "last_login_at",
        "created_at",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "created_at",
    )
    search_fields = ("auth_user_id", "email", "profile__username", "profile__name")
    ordering = ("-created_at",)

    fieldsets = (
        (None, {"fields": ("auth_user_id", "email", "password")}),
        ("Roles", {"fields": ("roles",)}),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("created_at", "last_login_at", "last_login")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("auth_user_id", "email", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("created_at", "last_login_at", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin configuration for Profile model."""

    list_display = (
        "user",
        "username",
        "name",
        "subscribers_count",
        "subscriptions_count",
        "created_at",
    )
    search_fields = ("username", "name", "user__email", "user__auth_user_id")
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("user",)
