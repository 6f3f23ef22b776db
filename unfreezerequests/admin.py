from django.contrib import admin

from unfreezerequests.models import UnfreezeRequest


class UnfreezeRequestAdmin(admin.ModelAdmin):
    list_display = ("reference", "member", "status", "requested_at", "processed_by", "processed_at")
    search_fields = ("reference", "member__member_number")
    list_filter = ("status", "requested_at", "processed_at")
    readonly_fields = ("processed_by", "processed_at")
    ordering = ("-requested_at",)


admin.site.register(UnfreezeRequest, UnfreezeRequestAdmin)
