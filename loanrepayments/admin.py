from django.contrib import admin

from loanrepayments.models import Repayment


class RepaymentAdmin(admin.ModelAdmin):
    list_display = ("reference", "loan", "amount", "payment_method", "processed_by", "payment_date")
    search_fields = ("reference", "loan__loan_number", "loan__member__member_number")
    list_filter = ("payment_method", "payment_date")
    ordering = ("-payment_date",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


admin.site.register(Repayment, RepaymentAdmin)
