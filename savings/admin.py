from django.contrib import admin

from savings.models import Savings


class SavingsAdmin(admin.ModelAdmin):
    list_display = ("member", "balance", "last_updated")
    search_fields = ("member__member_number", "member__last_name")
    readonly_fields = ("balance", "last_updated")
    ordering = ("-last_updated",)


admin.site.register(Savings, SavingsAdmin)
