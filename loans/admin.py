from django.contrib import admin

from loans.models import Loan


class LoanAdmin(admin.ModelAdmin):
    list_display = (
        "loan_number",
        "member",
        "principal",
        "balance",
        "status",
        "approved_by",
        "due_date",
    )
    search_fields = ("loan_number", "member__member_number")
    list_filter = ("status", "created_at", "updated_at")
    readonly_fields = ("balance", "approved_by", "approved_at", "reference")
    ordering = ("-created_at",)


admin.site.register(Loan, LoanAdmin)
