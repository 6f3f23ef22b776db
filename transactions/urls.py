from django.urls import path

from transactions.views import (
    TransactionListCreateView,
    TransactionDetailView,
    TransactionListDownloadView,
)

app_name = "transactions"

urlpatterns = [
    path("", TransactionListCreateView.as_view(), name="transaction-list-create"),
    path(
        "download/",
        TransactionListDownloadView.as_view(),
        name="transaction-list-download",
    ),
    path("<uuid:id>/", TransactionDetailView.as_view(), name="transaction-detail"),
]
