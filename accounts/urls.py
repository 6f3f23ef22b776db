from django.urls import path

from accounts.views import (
    MemberListCreateView,
    MemberDetailView,
    MemberStatusUpdateView,
    MemberSavingsView,
)
from loans.views import MemberLoanListView
from transactions.views import MemberTransactionListView
from unfreezerequests.views import MemberUnfreezeRequestListView

app_name = "accounts"

urlpatterns = [
    path("", MemberListCreateView.as_view(), name="member-list-create"),
    path("<uuid:id>/", MemberDetailView.as_view(), name="member-detail"),
    path(
        "<uuid:id>/status/",
        MemberStatusUpdateView.as_view(),
        name="member-status-update",
    ),
    path("<uuid:id>/savings/", MemberSavingsView.as_view(), name="member-savings"),
    path("<uuid:id>/loans/", MemberLoanListView.as_view(), name="member-loans"),
    path(
        "<uuid:id>/transactions/",
        MemberTransactionListView.as_view(),
        name="member-transactions",
    ),
    path(
        "<uuid:id>/unfreeze-requests/",
        MemberUnfreezeRequestListView.as_view(),
        name="member-unfreeze-requests",
    ),
]
