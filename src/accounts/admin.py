"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from unfold.admin import ModelAdmin

from accounts.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    """Admin for users with their role and supervising instructor."""

    list_display = ["username", "email", "role", "supervising_instructor", "is_staff", "is_active", "date_joined"]
    list_filter = ["role", "is_staff", "is_superuser", "is_active"]
    search_fields = ["username", "first_name", "last_name", "email"]
    ordering = ["-date_joined"]

    fieldsets = (
        ("Personal Information", {"fields": (("username", "email"), ("first_name", "last_name"))}),
        ("Role", {"fields": ("role", "supervising_instructor")}),
        ("Authentication", {"fields": ("password", ("date_joined", "last_login"))}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser"), "classes": ["collapse"]}),
    )

    def formfield_for_foreignkey(self, db_field, request, **kwargs):  # type: ignore[no-untyped-def]
        """Offer only instructors as supervisors."""
        if db_field.name == "supervising_instructor":
            kwargs["queryset"] = User.objects.instructors()
        return super().formfield_for_foreignkey(db_field, request, **kwargs)
