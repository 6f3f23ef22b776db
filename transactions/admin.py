from django.contrib import admin

from transactions.models import Transaction


class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "type",
        "amount",
        "member",
        "loan",
        "processed_by",
        "transaction_date",
    )
    search_fields = ("reference", "member__member_number", "loan__loan_number")
    list_filter = ("type", "transaction_date")
    ordering = ("-transaction_date",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


admin.site.register(Transaction, TransactionAdmin)
