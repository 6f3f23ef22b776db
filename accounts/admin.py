from django.contrib import admin
from django.contrib.auth import get_user_model

Member = get_user_model()


class MemberAdmin(admin.ModelAdmin):
    list_display = (
        "member_number",
        "first_name",
        "last_name",
        "phone",
        "role",
        "status",
        "is_active",
    )
    search_fields = ("member_number", "first_name", "last_name", "email", "phone")
    list_filter = ("role", "status", "is_active", "date_joined")
    readonly_fields = ("reference", "created_at", "updated_at", "last_login")
    exclude = ("password", "groups", "user_permissions")
    ordering = ("-date_joined",)


admin.site.register(Member, MemberAdmin)
